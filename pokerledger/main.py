"""FastAPI application for the Poker Ledger."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from pokerledger.api.v1.router import api_router
from pokerledger.core.db import create_db_and_tables
from pokerledger.core.error_handlers import register_exception_handlers
from pokerledger.core.logging_config import configure_logging


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    configure_logging()
    logger.info("Starting Poker Ledger application...")
    logger.info("Initializing database...")
    create_db_and_tables()
    logger.success("Database initialized successfully")
    logger.success("Application startup complete")
    yield
    logger.info("Shutting down Poker Ledger application...")


app = FastAPI(title="Poker Ledger", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/")
def read_root() -> dict[str, str]:
    """Return welcome message for the root endpoint."""
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to the Poker Ledger API"}
