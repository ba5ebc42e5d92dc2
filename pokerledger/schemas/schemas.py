"""Pydantic request/response schemas for API endpoints."""

from datetime import datetime
from typing import Self

from pydantic import Field

from pokerledger.schemas.ledger import ChartPoint, LedgerModel, Player, SessionRecord
from pokerledger.services.color_service import player_color


class PlayerCreate(LedgerModel):
    """Request body for registering a player."""

    name: str = Field(min_length=1, max_length=100)
    avatar: str | None = None
    id: str | None = Field(default=None, description="Generated when omitted")


class PlayerView(Player):
    """A player as listed by the API, with their chart color."""

    color: str

    @classmethod
    def from_player(cls, player: Player) -> Self:
        """Attach the player's color to a snapshot."""
        return cls(**player.model_dump(), color=player_color(player.id))


class GameInput(LedgerModel):
    """Request body for recording, editing or previewing a session."""

    records: list[SessionRecord] = Field(alias="players")
    date: datetime | None = Field(
        default=None, description="Defaults to now; ignored when editing"
    )


class SettlementView(LedgerModel):
    """A settlement with both player names resolved."""

    from_id: str
    from_name: str
    to_id: str
    to_name: str
    amount: float


class GameView(LedgerModel):
    """A session as listed in the match history."""

    id: str
    date: datetime
    records: list[SessionRecord] = Field(alias="players")
    settlements: list[SettlementView]
    break_even: bool


class SettlementPreview(LedgerModel):
    """Result of running the solver without saving anything."""

    total_buy_in: float
    total_cash_out: float
    settlements: list[SettlementView]


class Leaderboard(LedgerModel):
    """Players ranked by total winnings."""

    players: list[PlayerView]
    biggest_winner: PlayerView | None = None
    biggest_loser: PlayerView | None = None


class ChartSeries(LedgerModel):
    """Cumulative winnings over time, ready for a line chart."""

    points: list[ChartPoint]
    colors: dict[str, str]
    names: dict[str, str]


class ImportSummary(LedgerModel):
    """Response for a bulk import."""

    players: int
    sessions: int
