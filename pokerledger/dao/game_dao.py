"""Data Access Object for Game operations."""

from sqlmodel import Session, col, select

from pokerledger.models import Game, GameRecord


def get_game_by_id(session: Session, game_id: str) -> Game | None:
    """Get a game by ID."""
    return session.get(Game, game_id)


def get_all_games(session: Session) -> list[Game]:
    """Get all games, most recent first."""
    return list(session.exec(select(Game).order_by(col(Game.date).desc())).all())


def create_game(session: Session, game: Game) -> Game:
    """Add a new game along with its records and settlements."""
    session.add(game)
    session.flush()
    return game


def delete_game(session: Session, game: Game) -> None:
    """Delete a game; its records and settlements go with it."""
    session.delete(game)


def get_records_for_player(session: Session, player_id: str) -> list[GameRecord]:
    """Get every record a player has across all games."""
    return list(
        session.exec(select(GameRecord).where(GameRecord.player_id == player_id)).all()
    )
