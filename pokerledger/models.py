"""SQLModel data models for the Poker Ledger application."""

from sqlmodel import Field, Relationship, SQLModel  # type: ignore


class Player(SQLModel, table=True):
    """A club member on the roster."""

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    avatar: str | None = Field(default=None, description="Opaque image payload, e.g. a data URL")

    # Derived from the session history, only ever written by a full recompute
    total_winnings: float = 0.0
    games_played: int = 0


class Game(SQLModel, table=True):
    """A single poker session."""

    id: str = Field(primary_key=True)
    date: str = Field(index=True, description="ISO-8601 timestamp")

    # Relationships
    records: list["GameRecord"] = Relationship(  # type: ignore
        back_populates="game",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "GameRecord.position"},
    )
    settlements: list["SettlementEntry"] = Relationship(  # type: ignore
        back_populates="game",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "SettlementEntry.position",
        },
    )


class GameRecord(SQLModel, table=True):
    """One player's buy-in and cash-out in a game.

    ``player_id`` is not a foreign key: players removed from the roster keep
    their history.
    """

    id: int | None = Field(default=None, primary_key=True)
    game_id: str = Field(foreign_key="game.id", index=True)
    position: int = 0
    player_id: str = Field(index=True)
    buy_in: float = 0.0
    cash_out: float = 0.0

    game: Game = Relationship(back_populates="records")  # type: ignore


class SettlementEntry(SQLModel, table=True):
    """A payment computed for a game, stored in the order it was produced."""

    id: int | None = Field(default=None, primary_key=True)
    game_id: str = Field(foreign_key="game.id", index=True)
    position: int = 0
    from_id: str
    to_id: str
    amount: float

    game: Game = Relationship(back_populates="settlements")  # type: ignore
