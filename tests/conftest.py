"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
from typing import TypeAlias
from datetime import UTC, datetime
import os

# Keep tests off the real database; load_dotenv() never overrides this
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from pokerledger import models  # noqa: E402
from pokerledger.schemas.ledger import (  # noqa: E402
    GameSession,
    Player,
    SessionRecord,
)

RecordFactory: TypeAlias = Callable[..., SessionRecord]
GameFactory: TypeAlias = Callable[..., GameSession]


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(test_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with Session(test_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def record() -> RecordFactory:
    """Build a session record from positional player id, buy-in, cash-out."""

    def _record(player_id: str, buy_in: float, cash_out: float) -> SessionRecord:
        return SessionRecord(player_id=player_id, buy_in=buy_in, cash_out=cash_out)

    return _record


@pytest.fixture
def game(record) -> GameFactory:
    """Build a game from ``(player_id, buy_in, cash_out)`` tuples."""

    def _game(
        game_id: str, day: int, *rows: tuple[str, float, float]
    ) -> GameSession:
        return GameSession(
            id=game_id,
            date=datetime(2024, 3, day, 20, 0, tzinfo=UTC),
            records=[record(*row) for row in rows],
        )

    return _game


@pytest.fixture
def roster() -> list[Player]:
    """Three players with stale stats that a recompute must overwrite."""
    return [
        Player(id="alice", name="Alice", total_winnings=999.0, games_played=42),
        Player(id="bob", name="Bob"),
        Player(id="carol", name="Carol", avatar="data:image/jpeg;base64,AAAA"),
    ]


@pytest.fixture
def history(game) -> list[GameSession]:
    """Three games, deliberately out of date order."""
    return [
        game("g3", 15, ("alice", 100, 40), ("carol", 100, 160)),
        game("g1", 1, ("alice", 50, 0), ("bob", 50, 150), ("carol", 50, 0)),
        game("g2", 8, ("bob", 20, 0), ("carol", 20, 40), ("ghost", 10, 10)),
    ]


@pytest.fixture
def stored_roster(session) -> list[models.Player]:
    """Players persisted in the test database."""
    rows = [
        models.Player(id="alice", name="Alice"),
        models.Player(id="bob", name="Bob"),
        models.Player(id="carol", name="Carol"),
    ]
    for row in rows:
        session.add(row)
    session.commit()
    return rows
