"""Dashboard endpoints: leaderboard and winnings chart."""

from fastapi import APIRouter
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.schemas.schemas import ChartSeries, Leaderboard, PlayerView
from pokerledger.services.color_service import player_color
from pokerledger.services.ledger_service import load_ledger, player_names
from pokerledger.services.player_stats_service import (
    biggest_loser,
    biggest_winner,
    build_time_series,
    rank_players,
)

router = APIRouter()


@router.get("/leaderboard", response_model=Leaderboard)
def read_leaderboard(session: SessionDep) -> Leaderboard:
    """Players ranked by total winnings, with the top and bottom called out."""
    ranked = rank_players(load_ledger(session).players)
    winner = biggest_winner(ranked)
    loser = biggest_loser(ranked)
    logger.debug(f"Leaderboard built for {len(ranked)} players")
    return Leaderboard(
        players=[PlayerView.from_player(p) for p in ranked],
        biggest_winner=PlayerView.from_player(winner) if winner else None,
        biggest_loser=PlayerView.from_player(loser) if loser else None,
    )


@router.get("/chart", response_model=ChartSeries)
def read_chart(session: SessionDep) -> ChartSeries:
    """Cumulative winnings of every player after each game."""
    ledger = load_ledger(session)
    points = build_time_series(ledger.players, ledger.sessions)
    logger.debug(f"Chart built with {len(points)} points")
    return ChartSeries(
        points=points,
        colors={p.id: player_color(p.id) for p in ledger.players},
        names=player_names(ledger.players),
    )
