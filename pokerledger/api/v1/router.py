from fastapi import APIRouter
from loguru import logger

from pokerledger.api.v1.endpoints import games, ledger, players, stats

logger.info("Initializing API v1 router")
api_router = APIRouter(prefix="/api/v1")

logger.debug("Registering players endpoint")
api_router.include_router(players.router, prefix="/players", tags=["players"])
logger.debug("Registering games endpoint")
api_router.include_router(games.router, prefix="/games", tags=["games"])
logger.debug("Registering stats endpoint")
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
logger.debug("Registering ledger endpoint")
api_router.include_router(ledger.router, prefix="/ledger", tags=["ledger"])
logger.success("API v1 router initialized successfully")
