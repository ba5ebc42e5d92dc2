"""Ledger operations that change the stored history.

Every mutation goes through ``commit_ledger``, which recomputes all player
stats from the full session history and writes players and games in the same
transaction. Nothing in here patches ``total_winnings`` or ``games_played``
incrementally.
"""

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
import uuid

from loguru import logger
import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from pokerledger import models
from pokerledger.core.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from pokerledger.dao.game_dao import (
    create_game,
    delete_game,
    get_all_games,
    get_game_by_id,
    get_records_for_player,
)
from pokerledger.dao.player_dao import (
    create_player,
    delete_player,
    get_all_players,
    get_player_by_id,
    update_player,
)
from pokerledger.schemas.ledger import (
    GameSession,
    LedgerDocument,
    Player,
    SessionRecord,
    Settlement,
)
from pokerledger.services.player_stats_service import recalculate_player_stats, to_utc
from pokerledger.services.settlement_service import calculate_settlements

UNKNOWN_PLAYER = "Unknown"
MIN_PLAYERS = 2


# ----------------------------------------------------------------------------
# Row <-> snapshot conversion
# ----------------------------------------------------------------------------


def player_to_schema(row: models.Player) -> Player:
    """Snapshot a stored player."""
    return Player(
        id=row.id,
        name=row.name,
        avatar=row.avatar,
        total_winnings=row.total_winnings,
        games_played=row.games_played,
    )


def game_to_schema(row: models.Game) -> GameSession:
    """Snapshot a stored game with its records and settlements."""
    return GameSession(
        id=row.id,
        date=datetime.fromisoformat(row.date),
        records=[
            SessionRecord(player_id=r.player_id, buy_in=r.buy_in, cash_out=r.cash_out)
            for r in row.records
        ],
        settlements=[
            Settlement(from_id=s.from_id, to_id=s.to_id, amount=s.amount)
            for s in row.settlements
        ],
    )


def stored_date(date: datetime) -> str:
    """ISO-8601 text in UTC, so the column sorts in time order."""
    return to_utc(date).isoformat()


def _fill_game_row(row: models.Game, game: GameSession) -> None:
    row.date = stored_date(game.date)
    row.records = [
        models.GameRecord(
            position=position,
            player_id=r.player_id,
            buy_in=r.buy_in,
            cash_out=r.cash_out,
        )
        for position, r in enumerate(game.records)
    ]
    row.settlements = [
        models.SettlementEntry(
            position=position, from_id=s.from_id, to_id=s.to_id, amount=s.amount
        )
        for position, s in enumerate(game.settlements)
    ]


# ----------------------------------------------------------------------------
# Snapshot and commit
# ----------------------------------------------------------------------------


def load_ledger(session: Session) -> LedgerDocument:
    """Read the whole ledger as one snapshot, games most recent first."""
    players = [player_to_schema(p) for p in get_all_players(session)]
    games = [game_to_schema(g) for g in get_all_games(session)]
    logger.debug(f"Loaded ledger: {len(players)} players, {len(games)} games")
    return LedgerDocument(players=players, sessions=games)


def commit_ledger(
    session: Session, players: Sequence[Player], games: Sequence[GameSession]
) -> LedgerDocument:
    """Recompute stats for ``players`` over ``games`` and persist both.

    The stored roster and history are replaced by the given ones: rows missing
    from the snapshot are deleted, changed rows are rewritten and unchanged
    rows are left alone. Everything is committed together.

    Returns:
        The committed snapshot, with recomputed player stats.
    """
    recalculated = recalculate_player_stats(players, games)

    stored_players = {p.id: p for p in get_all_players(session)}
    for player in recalculated:
        row = stored_players.pop(player.id, None)
        if row is None:
            create_player(session, models.Player(**player.model_dump()))
            continue
        if player_to_schema(row) != player:
            row.name = player.name
            row.avatar = player.avatar
            row.total_winnings = player.total_winnings
            row.games_played = player.games_played
            update_player(session, row)
    for row in stored_players.values():
        delete_player(session, row)

    stored_games = {g.id: g for g in get_all_games(session)}
    for game in games:
        row = stored_games.pop(game.id, None)
        if row is None:
            row = models.Game(id=game.id, date=stored_date(game.date))
            _fill_game_row(row, game)
            create_game(session, row)
        elif game_to_schema(row) != game:
            _fill_game_row(row, game)
            session.add(row)
    for row in stored_games.values():
        delete_game(session, row)

    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to commit ledger: {e!s}")
        raise InternalError(message="Failed to save the ledger") from e
    logger.success(
        f"Committed ledger: {len(recalculated)} players, {len(games)} games"
    )
    return LedgerDocument(players=recalculated, sessions=list(games))


# ----------------------------------------------------------------------------
# Roster
# ----------------------------------------------------------------------------


def add_player(
    session: Session,
    name: str,
    avatar: str | None = None,
    player_id: str | None = None,
) -> Player:
    """Register a new player."""
    name = name.strip()
    if not name:
        raise ValidationError(message="Player name cannot be empty")

    player_id = player_id or str(uuid.uuid4())
    if get_player_by_id(session, player_id) is not None:
        raise ConflictError(
            message=f"Player {player_id} already exists",
            details={"player_id": player_id},
        )

    ledger = load_ledger(session)
    new_player = Player(id=player_id, name=name, avatar=avatar)
    committed = commit_ledger(session, [*ledger.players, new_player], ledger.sessions)
    logger.info(f"Added player {name} ({player_id})")
    return next(p for p in committed.players if p.id == player_id)


def remove_player(session: Session, player_id: str) -> None:
    """Take a player off the roster. Their past games stay in the history."""
    if get_player_by_id(session, player_id) is None:
        raise NotFoundError(
            message=f"Player {player_id} not found", details={"player_id": player_id}
        )

    orphaned = len(get_records_for_player(session, player_id))
    ledger = load_ledger(session)
    commit_ledger(
        session, [p for p in ledger.players if p.id != player_id], ledger.sessions
    )
    logger.info(f"Removed player {player_id}, {orphaned} historical record(s) kept")


def player_names(players: Sequence[Player]) -> dict[str, str]:
    """Map player ids to display names."""
    return {p.id: p.name for p in players}


def resolve_name(names: Mapping[str, str], player_id: str) -> str:
    """Display name for a player id, ``Unknown`` once they left the roster."""
    return names.get(player_id, UNKNOWN_PLAYER)


# ----------------------------------------------------------------------------
# Games
# ----------------------------------------------------------------------------


def _validate_records(
    records: Sequence[SessionRecord], allowed_ids: set[str] | None = None
) -> None:
    """Check a session's records before they reach the solver."""
    if len(records) < MIN_PLAYERS:
        raise ValidationError(
            message=f"A game needs at least {MIN_PLAYERS} players",
            details={"players": len(records)},
        )

    seen: set[str] = set()
    duplicates: list[str] = []
    for record in records:
        if record.player_id in seen:
            duplicates.append(record.player_id)
        seen.add(record.player_id)
    if duplicates:
        raise ValidationError(
            message="Each player can only appear once per game",
            details={"duplicates": duplicates},
        )

    if allowed_ids is not None:
        unknown = sorted(seen - allowed_ids)
        if unknown:
            raise ValidationError(
                message="Game contains players who are not on the roster",
                details={"unknown_players": unknown},
            )


def preview_settlements(records: Sequence[SessionRecord]) -> list[Settlement]:
    """Validate records and run the solver without storing anything."""
    _validate_records(records)
    return calculate_settlements(records)


def record_game(
    session: Session,
    records: Sequence[SessionRecord],
    date: datetime | None = None,
    game_id: str | None = None,
) -> GameSession:
    """Solve a finished session and add it to the history.

    Raises:
        ValidationError: Fewer than two players, duplicates, or players not
            on the roster.
        ImbalanceError: Buy-ins and cash-outs do not add up. Nothing is saved.
        ConflictError: ``game_id`` is already taken.
    """
    ledger = load_ledger(session)
    _validate_records(records, {p.id for p in ledger.players})
    settlements = calculate_settlements(records)

    game_id = game_id or str(uuid.uuid4())
    if get_game_by_id(session, game_id) is not None:
        raise ConflictError(
            message=f"Game {game_id} already exists", details={"game_id": game_id}
        )

    game = GameSession(
        id=game_id,
        date=to_utc(date) if date else datetime.now(UTC),
        records=list(records),
        settlements=settlements,
    )
    commit_ledger(session, ledger.players, [game, *ledger.sessions])
    logger.info(
        f"Recorded game {game.id} with {len(records)} players, "
        + f"{len(settlements)} settlement(s)"
    )
    return game


def update_game(
    session: Session, game_id: str, records: Sequence[SessionRecord]
) -> GameSession:
    """Replace a past game's records and re-solve its settlements.

    The game keeps its id and date. Players who already took part may stay
    even if they have since left the roster.
    """
    ledger = load_ledger(session)
    existing = next((g for g in ledger.sessions if g.id == game_id), None)
    if existing is None:
        raise NotFoundError(
            message=f"Game {game_id} not found", details={"game_id": game_id}
        )

    allowed = {p.id for p in ledger.players} | {r.player_id for r in existing.records}
    _validate_records(records, allowed)
    settlements = calculate_settlements(records)

    updated = existing.model_copy(
        update={"records": list(records), "settlements": settlements}
    )
    games = [updated if g.id == game_id else g for g in ledger.sessions]
    commit_ledger(session, ledger.players, games)
    logger.info(f"Updated game {game_id}")
    return updated


def remove_game(session: Session, game_id: str) -> None:
    """Delete a game from the history and rebuild everyone's stats."""
    ledger = load_ledger(session)
    games = [g for g in ledger.sessions if g.id != game_id]
    if len(games) == len(ledger.sessions):
        raise NotFoundError(
            message=f"Game {game_id} not found", details={"game_id": game_id}
        )
    commit_ledger(session, ledger.players, games)
    logger.info(f"Deleted game {game_id}")


# ----------------------------------------------------------------------------
# Import / export
# ----------------------------------------------------------------------------


def import_ledger(session: Session, payload: object) -> LedgerDocument:
    """Replace the whole ledger with an exported document.

    The document is fully validated before anything is written, so a bad
    file leaves the stored ledger untouched. Stats in the document are
    ignored and recomputed from its sessions.
    """
    if not isinstance(payload, dict):
        raise ValidationError(message="Invalid file format: expected a JSON object")
    missing = [key for key in ("players", "sessions") if key not in payload]
    if missing:
        raise ValidationError(
            message="Invalid file format: missing players or sessions",
            details={"missing": missing},
        )
    if not isinstance(payload["sessions"], list):
        raise ValidationError(message="Invalid file format: sessions must be a list")

    try:
        document = LedgerDocument.model_validate(payload)
    except pydantic.ValidationError as e:
        logger.warning(f"Rejected ledger import: {e.error_count()} validation error(s)")
        raise ValidationError(
            message="Invalid file format",
            details={
                "errors": [
                    f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ]
            },
        ) from e

    for kind, ids in (
        ("player", [p.id for p in document.players]),
        ("session", [g.id for g in document.sessions]),
    ):
        if len(set(ids)) != len(ids):
            raise ValidationError(
                message=f"Invalid file format: duplicate {kind} ids",
                details={"kind": kind},
            )

    committed = commit_ledger(session, document.players, document.sessions)
    logger.info(
        f"Imported {len(committed.players)} players and {len(committed.sessions)} games"
    )
    return committed


def export_ledger(session: Session) -> LedgerDocument:
    """Snapshot of the whole ledger for download."""
    return load_ledger(session)
