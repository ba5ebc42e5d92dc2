"""Data Access Object for Player operations."""

from sqlmodel import Session, col, select

from pokerledger.models import Player


def get_player_by_id(session: Session, player_id: str) -> Player | None:
    """Get a player by ID."""
    return session.get(Player, player_id)


def get_all_players(
    session: Session, offset: int = 0, limit: int | None = None
) -> list[Player]:
    """Get all players ordered by name, optionally paginated."""
    statement = select(Player).order_by(col(Player.name), col(Player.id)).offset(offset)
    if limit is not None:
        statement = statement.limit(limit)
    return list(session.exec(statement).all())


def create_player(session: Session, player: Player) -> Player:
    """Add a new player to the session."""
    session.add(player)
    session.flush()
    return player


def update_player(session: Session, player: Player) -> Player:
    """Update an existing player."""
    session.add(player)
    return player


def delete_player(session: Session, player: Player) -> None:
    """Remove a player row. Their game records are left untouched."""
    session.delete(player)
