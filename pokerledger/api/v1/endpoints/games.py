"""
Games API endpoints.

Recording, editing and deleting sessions. Every change is solved for
settlements first and then committed together with a full stats recompute.
"""

from collections.abc import Mapping

from fastapi import APIRouter, status
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.core.exceptions import NotFoundError
from pokerledger.schemas.ledger import GameSession, Settlement
from pokerledger.schemas.schemas import (
    GameInput,
    GameView,
    SettlementPreview,
    SettlementView,
)
from pokerledger.services.ledger_service import (
    load_ledger,
    player_names,
    preview_settlements,
    record_game,
    remove_game,
    resolve_name,
    update_game,
)

router = APIRouter()


def _settlement_view(settlement: Settlement, names: Mapping[str, str]) -> SettlementView:
    return SettlementView(
        from_id=settlement.from_id,
        from_name=resolve_name(names, settlement.from_id),
        to_id=settlement.to_id,
        to_name=resolve_name(names, settlement.to_id),
        amount=settlement.amount,
    )


def _game_view(game: GameSession, names: Mapping[str, str]) -> GameView:
    return GameView(
        id=game.id,
        date=game.date,
        records=game.records,
        settlements=[_settlement_view(s, names) for s in game.settlements],
        break_even=not game.settlements,
    )


@router.get("/", response_model=list[GameView])
def read_games(session: SessionDep) -> list[GameView]:
    """Match history, most recent first."""
    ledger = load_ledger(session)
    names = player_names(ledger.players)
    logger.info(f"Fetched {len(ledger.sessions)} games")
    return [_game_view(g, names) for g in ledger.sessions]


@router.get("/{game_id}", response_model=GameView)
def read_game(game_id: str, session: SessionDep) -> GameView:
    """Retrieve a single game."""
    ledger = load_ledger(session)
    game = next((g for g in ledger.sessions if g.id == game_id), None)
    if game is None:
        raise NotFoundError(
            message=f"Game {game_id} not found", details={"game_id": game_id}
        )
    return _game_view(game, player_names(ledger.players))


@router.post("/settlements", response_model=SettlementPreview)
def preview_game_settlements(body: GameInput, session: SessionDep) -> SettlementPreview:
    """Work out who pays whom without saving the game."""
    settlements = preview_settlements(body.records)
    names = player_names(load_ledger(session).players)
    return SettlementPreview(
        total_buy_in=sum(r.buy_in for r in body.records),
        total_cash_out=sum(r.cash_out for r in body.records),
        settlements=[_settlement_view(s, names) for s in settlements],
    )


@router.post("/", response_model=GameView, status_code=status.HTTP_201_CREATED)
def create_game(body: GameInput, session: SessionDep) -> GameView:
    """Record a finished game."""
    logger.info(f"Recording game with {len(body.records)} players")
    game = record_game(session, body.records, date=body.date)
    return _game_view(game, player_names(load_ledger(session).players))


@router.put("/{game_id}", response_model=GameView)
def edit_game(game_id: str, body: GameInput, session: SessionDep) -> GameView:
    """Correct the buy-ins and cash-outs of a past game."""
    logger.info(f"Editing game {game_id}")
    game = update_game(session, game_id, body.records)
    return _game_view(game, player_names(load_ledger(session).players))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: str, session: SessionDep) -> None:
    """Delete a game; player stats are rebuilt without it."""
    logger.info(f"Deleting game {game_id}")
    remove_game(session, game_id)
