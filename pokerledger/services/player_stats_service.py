"""Service for rebuilding player standings from the session history."""

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from loguru import logger

from pokerledger.schemas.ledger import ChartPoint, GameSession, Player

START_LABEL = "Start"


def to_utc(date: datetime) -> datetime:
    """Convert to UTC, treating naive datetimes as already being UTC."""
    if date.tzinfo is None:
        return date.replace(tzinfo=UTC)
    return date.astimezone(UTC)


def session_timestamp(date: datetime) -> float:
    """Return a sortable POSIX timestamp, treating naive datetimes as UTC."""
    return to_utc(date).timestamp()


def sort_sessions_by_date(sessions: Iterable[GameSession]) -> list[GameSession]:
    """Sort sessions oldest first.

    Sessions sharing a timestamp keep the order they were given in.
    """
    return sorted(sessions, key=lambda s: session_timestamp(s.date))


def recalculate_player_stats(
    players: Sequence[Player], sessions: Iterable[GameSession]
) -> list[Player]:
    """Rebuild every player's winnings and games played from scratch.

    Stored stat values on the input players are ignored, so calling this again
    on its own output with the same history gives the same result. Records
    that reference a player who is no longer on the roster are skipped.

    Args:
        players: Current roster.
        sessions: Full session history.

    Returns:
        New player snapshots, one per roster entry, with stats replaced.
    """
    winnings: dict[str, float] = {p.id: 0.0 for p in players}
    games_played: dict[str, int] = {p.id: 0 for p in players}
    skipped = 0

    for game in sort_sessions_by_date(sessions):
        for record in game.records:
            if record.player_id not in winnings:
                skipped += 1
                continue
            games_played[record.player_id] += 1
            winnings[record.player_id] += record.net

    if skipped:
        logger.debug(f"Skipped {skipped} record(s) of players not on the roster")

    rebuilt = {
        p.id: p.model_copy(
            update={
                "total_winnings": winnings[p.id],
                "games_played": games_played[p.id],
            }
        )
        for p in players
    }
    logger.debug(f"Recalculated stats for {len(rebuilt)} players")
    return list(rebuilt.values())


def build_time_series(
    players: Sequence[Player], sessions: Iterable[GameSession]
) -> list[ChartPoint]:
    """Build the cumulative score of every player after each session.

    The first point is labelled ``Start`` with everyone at zero, followed by
    ``G1``, ``G2``... one per session in date order. Each point is a full
    snapshot rather than a delta.
    """
    scores: dict[str, float] = {p.id: 0.0 for p in players}
    points = [ChartPoint(label=START_LABEL, scores=dict(scores))]

    for index, game in enumerate(sort_sessions_by_date(sessions)):
        for record in game.records:
            if record.player_id in scores:
                scores[record.player_id] += record.net
        points.append(ChartPoint(label=f"G{index + 1}", scores=dict(scores)))

    return points


def rank_players(players: Iterable[Player]) -> list[Player]:
    """Order players by total winnings, best first."""
    return sorted(players, key=lambda p: p.total_winnings, reverse=True)


def biggest_winner(ranked: Sequence[Player]) -> Player | None:
    """Top of the ranking, if they are actually up."""
    if ranked and ranked[0].total_winnings > 0:
        return ranked[0]
    return None


def biggest_loser(ranked: Sequence[Player]) -> Player | None:
    """Bottom of the ranking, if they are actually down."""
    if ranked and ranked[-1].total_winnings < 0:
        return ranked[-1]
    return None
