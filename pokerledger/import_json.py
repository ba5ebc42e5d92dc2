"""Script to load an exported ledger JSON file into the database."""

import json
from pathlib import Path
import sys

from loguru import logger
from sqlmodel import Session

from pokerledger.core.db import create_db_and_tables, engine
from pokerledger.core.exceptions import ValidationError
from pokerledger.core.logging_config import configure_logging
from pokerledger.services.ledger_service import import_ledger


def import_file(path: Path) -> None:
    """Replace the stored ledger with the contents of ``path``."""
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)

    with Session(engine) as session:
        document = import_ledger(session, payload)
    logger.success(
        f"Imported {len(document.players)} players and {len(document.sessions)} games "
        + f"from {path.name}"
    )


if __name__ == "__main__":
    configure_logging()
    if len(sys.argv) != 2:  # noqa: PLR2004
        logger.error("Usage: python -m pokerledger.import_json <export.json>")
        sys.exit(2)
    logger.info("Starting JSON import script...")
    create_db_and_tables()
    try:
        import_file(Path(sys.argv[1]))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON file: {e}")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Import rejected: {e.message} {e.details}")
        sys.exit(1)
    logger.success("JSON import script completed successfully")
