"""Tests for display-name lookups."""

from datetime import datetime, timezone

from playledger.domain.models import Game, Member
from playledger.services.lookup import (
    format_display_timestamp,
    game_name,
    member_name,
    option_label,
    resolve_display_name,
)


class TestResolveDisplayName:
    """Tests for foreign-key name resolution."""

    def test_known_member(self, members):
        assert member_name(2, members) == "Ben"

    def test_known_game(self, games):
        assert game_name(8, games) == "Go"

    def test_unknown_falls_back_to_id(self, members):
        assert member_name(99, members) == "99"

    def test_empty_cache_falls_back_to_id(self):
        assert game_name(7, []) == "7"

    def test_unnamed_entries_fall_back_to_id(self):
        """A member or game with a null name is labelled by its id."""
        members = [Member.from_wire({"memberId": 1, "name": None})]
        games = [Game.from_wire({"gameId": 7})]

        assert member_name(1, members) == "1"
        assert game_name(7, games) == "7"

    def test_first_match_wins(self):
        entries = [Member(member_id=1, name="First"), Member(member_id=1, name="Second")]
        assert resolve_display_name(1, entries) == "First"


class TestOptionLabel:
    def test_member_label(self, members):
        assert option_label(members[0]) == "Ana (ID:1)"

    def test_game_label(self, games):
        assert option_label(games[1]) == "Go (ID:8)"

    def test_unnamed_label(self):
        assert option_label(Member(member_id=3, name="")) == "3 (ID:3)"


class TestFormatDisplayTimestamp:
    def test_naive(self):
        assert format_display_timestamp(datetime(2024, 1, 1, 10, 0, 5)) == "2024-01-01 10:00:05"

    def test_aware_is_local(self):
        value = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        expected = value.astimezone().strftime("%Y-%m-%d %H:%M:%S")

        assert format_display_timestamp(value) == expected

    def test_none(self):
        assert format_display_timestamp(None) == ""
