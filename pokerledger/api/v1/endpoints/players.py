"""
Players API endpoints.

The roster: listing, registering and removing players. Stats on the returned
players are always the ones produced by the last full recompute.
"""

from fastapi import APIRouter, status
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.core.exceptions import NotFoundError
from pokerledger.dao.player_dao import get_all_players, get_player_by_id
from pokerledger.schemas.schemas import PlayerCreate, PlayerView
from pokerledger.services.ledger_service import add_player, player_to_schema, remove_player

router = APIRouter()


@router.get("/", response_model=list[PlayerView])
def read_players(
    session: SessionDep, offset: int = 0, limit: int = 100
) -> list[PlayerView]:
    """Retrieve a paginated list of players from the database."""
    logger.info(f"Fetching players list (offset={offset}, limit={limit})")
    players = get_all_players(session, offset=offset, limit=limit)
    logger.debug(f"Retrieved {len(players)} players")
    return [PlayerView.from_player(player_to_schema(p)) for p in players]


@router.get("/{player_id}", response_model=PlayerView)
def read_player(player_id: str, session: SessionDep) -> PlayerView:
    """Retrieve a specific player by ID from the database."""
    logger.info(f"Fetching player with ID: {player_id}")
    player = get_player_by_id(session, player_id)
    if player is None:
        raise NotFoundError(
            message=f"Player {player_id} not found", details={"player_id": player_id}
        )
    logger.debug(f"Found player: {player.name}")
    return PlayerView.from_player(player_to_schema(player))


@router.post("/", response_model=PlayerView, status_code=status.HTTP_201_CREATED)
def create_player(body: PlayerCreate, session: SessionDep) -> PlayerView:
    """Register a new player."""
    logger.info(f"Registering player: {body.name}")
    player = add_player(session, body.name, avatar=body.avatar, player_id=body.id)
    return PlayerView.from_player(player)


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_player(player_id: str, session: SessionDep) -> None:
    """Remove a player from the roster. Their game history is kept."""
    logger.info(f"Removing player with ID: {player_id}")
    remove_player(session, player_id)
