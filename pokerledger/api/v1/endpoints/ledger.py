"""
Ledger API endpoints.

Bulk export and import of the whole ledger as one JSON document.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.schemas.ledger import LedgerDocument
from pokerledger.schemas.schemas import ImportSummary
from pokerledger.services.ledger_service import export_ledger, import_ledger

router = APIRouter()


@router.get("/export", response_model=LedgerDocument)
def export_document(session: SessionDep) -> LedgerDocument:
    """Download every player and game."""
    document = export_ledger(session)
    logger.info(
        f"Exporting {len(document.players)} players and {len(document.sessions)} games"
    )
    return document


@router.post("/import", response_model=ImportSummary)
def import_document(
    payload: Annotated[Any, Body(description="A previously exported ledger")],
    session: SessionDep,
) -> ImportSummary:
    """Replace the stored ledger with an exported document.

    Nothing is changed when the document is invalid.
    """
    logger.info("Received ledger import")
    document = import_ledger(session, payload)
    return ImportSummary(players=len(document.players), sessions=len(document.sessions))
