"""Unit tests for game DAO."""

from datetime import UTC, datetime, timedelta, timezone

from pokerledger.dao.game_dao import (
    create_game,
    delete_game,
    get_all_games,
    get_game_by_id,
    get_records_for_player,
)
from pokerledger.models import Game, GameRecord, SettlementEntry
from pokerledger.services.ledger_service import stored_date


def _stored_game(game_id: str, date: str, *players: str) -> Game:
    game = Game(id=game_id, date=date)
    game.records = [
        GameRecord(position=i, player_id=pid, buy_in=10.0, cash_out=10.0)
        for i, pid in enumerate(players)
    ]
    return game


class TestGetGame:
    """Tests for get_game_by_id and get_all_games."""

    def test_returns_game_with_children(self, session):
        """Test that records and settlements load in stored order."""
        game = _stored_game("g1", "2024-03-01T20:00:00+00:00", "bob", "alice")
        game.settlements = [
            SettlementEntry(position=0, from_id="alice", to_id="bob", amount=5.0)
        ]
        create_game(session, game)
        session.commit()
        session.expire_all()

        result = get_game_by_id(session, "g1")
        assert result is not None
        assert [r.player_id for r in result.records] == ["bob", "alice"]
        assert [(s.from_id, s.amount) for s in result.settlements] == [("alice", 5.0)]

    def test_returns_none_when_not_found(self, session):
        """Test that None is returned for non-existent game."""
        assert get_game_by_id(session, "missing") is None

    def test_all_games_most_recent_first(self, session):
        """Test ordering of the history."""
        create_game(session, _stored_game("old", "2024-01-01T20:00:00+00:00", "a"))
        create_game(session, _stored_game("new", "2024-06-01T20:00:00+00:00", "a"))
        create_game(session, _stored_game("mid", "2024-03-01T20:00:00+00:00", "a"))
        session.commit()

        assert [g.id for g in get_all_games(session)] == ["new", "mid", "old"]


class TestDeleteGame:
    """Tests for delete_game."""

    def test_children_deleted_with_game(self, session):
        """Test that records go away with their game."""
        create_game(session, _stored_game("g1", "2024-03-01T20:00:00+00:00", "a", "b"))
        session.commit()

        delete_game(session, get_game_by_id(session, "g1"))
        session.commit()

        assert get_game_by_id(session, "g1") is None
        assert get_records_for_player(session, "a") == []


class TestGetRecordsForPlayer:
    """Tests for get_records_for_player."""

    def test_collects_across_games(self, session):
        """Test that a player's records from every game are returned."""
        create_game(session, _stored_game("g1", "2024-03-01T20:00:00+00:00", "a", "b"))
        create_game(session, _stored_game("g2", "2024-03-08T20:00:00+00:00", "a", "c"))
        session.commit()

        assert sorted(r.game_id for r in get_records_for_player(session, "a")) == [
            "g1",
            "g2",
        ]
        assert len(get_records_for_player(session, "c")) == 1


class TestGameDateOrdering:
    """Tests for history order when games were entered with different offsets."""

    def test_newest_first_across_utc_offsets(self, session):
        """Test that dates stored through the ledger sort by actual time."""
        eastern = timezone(timedelta(hours=-5))
        # 04:00Z on March 2nd, written with a -05:00 offset
        later = datetime(2024, 3, 1, 23, 0, tzinfo=eastern)
        earlier = datetime(2024, 3, 2, 1, 0, tzinfo=UTC)
        create_game(session, _stored_game("earlier", stored_date(earlier), "a"))
        create_game(session, _stored_game("later", stored_date(later), "a"))
        session.commit()

        assert [g.id for g in get_all_games(session)] == ["later", "earlier"]
        assert get_game_by_id(session, "later").date == "2024-03-02T04:00:00+00:00"
