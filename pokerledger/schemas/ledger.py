"""Immutable ledger snapshots shared by the settlement and stats services.

These are plain value objects: the services accept them and return new ones,
and never touch the database. Field names are snake_case in Python and
camelCase on the wire (``buyIn``, ``fromId``, ``totalWinnings``...), which
keeps exported documents readable by the browser client.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LedgerModel(BaseModel):
    """Base class for ledger snapshots."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class Player(LedgerModel):
    """A club member and their derived standing."""

    id: str
    name: str
    avatar: str | None = None
    total_winnings: float = 0.0
    games_played: int = Field(default=0, ge=0)


class SessionRecord(LedgerModel):
    """One player's buy-in and cash-out for a single session."""

    player_id: str
    buy_in: float = Field(ge=0, allow_inf_nan=False)
    cash_out: float = Field(ge=0, allow_inf_nan=False)

    @property
    def net(self) -> float:
        """Money won (positive) or lost (negative) in the session."""
        return self.cash_out - self.buy_in


class Settlement(LedgerModel):
    """A single payment from a net debtor to a net creditor."""

    from_id: str
    to_id: str
    amount: float = Field(gt=0)


class GameSession(LedgerModel):
    """A played session: who took part, and how they settle up."""

    id: str
    date: datetime
    records: list[SessionRecord] = Field(alias="players")
    settlements: list[Settlement] = Field(default_factory=list)


class ChartPoint(LedgerModel):
    """Cumulative score of every player after a given session."""

    label: str
    scores: dict[str, float]


class LedgerDocument(LedgerModel):
    """Bulk export/import document."""

    players: list[Player]
    sessions: list[GameSession]
