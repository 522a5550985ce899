"""
Opponent Set Builder Tests

Each team's 17 opponents across the five structural categories.
"""

from collections import defaultdict

import pytest

from scheduling.models import CATEGORY_GAME_COUNTS, GameCategory
from scheduling.opponent_builder import OpponentSetBuilder, create_default_previous_standings
from team_registry.models import Conference, Division


@pytest.fixture
def builder_2025(league, default_previous_standings):
    return OpponentSetBuilder(league, default_previous_standings, 2025)


class TestOpponentCounts:
    """Category sizes and totals"""

    def test_every_team_has_17_games(self, builder_2025):
        sets = builder_2025.build_all()
        assert len(sets) == 32
        for team_id, opponents in sets.items():
            assert opponents.game_count == 17, f"{team_id} has {opponents.game_count} games"

    def test_category_sizes(self, builder_2025):
        """3 rivals (twice), 4 intra, 4 inter, 2 same-place, 1 extra"""
        for opponents in builder_2025.build_all().values():
            grouped = opponents.by_category()
            for category, expected_games in CATEGORY_GAME_COUNTS.items():
                games = len(grouped[category]) * category.games_per_pair
                assert games == expected_games, (
                    f"{opponents.team_id} {category.value}: {games} games"
                )

    def test_opponents_are_distinct(self, builder_2025):
        for opponents in builder_2025.build_all().values():
            all_opponents = opponents.all_opponents()
            assert len(all_opponents) == len(set(all_opponents)) == 14
            assert opponents.team_id not in all_opponents


class TestRotationTargets:
    """Which division each category draws from (2025 rotations)"""

    def test_afc_east_intra_conference(self, builder_2025):
        assert builder_2025.build("BUF").intra_conference == ["HOU", "IND", "JAX", "TEN"]

    def test_afc_east_inter_conference(self, builder_2025):
        assert builder_2025.build("BUF").inter_conference == ["ATL", "CAR", "NO", "TB"]

    def test_same_place_and_extra_by_finish(self, builder_2025):
        """BUF finished first (id order): first-place teams of the other divisions"""
        opponents = builder_2025.build("BUF")
        assert opponents.same_place == ["BAL", "DEN"]
        assert opponents.extra == ["DAL"]
        assert opponents.category_of("DAL") is GameCategory.EXTRA
        assert opponents.category_of("KC") is None

    def test_finish_position_follows_previous_standings(self, league, default_previous_standings):
        """Reordering last season's division changes same-place matchups"""
        standings = default_previous_standings
        standings[Conference.AFC][Division.EAST] = ["NYJ", "NE", "MIA", "BUF"]

        builder = OpponentSetBuilder(league, standings, 2025)
        assert builder.finish_position(league.get_team("BUF")) == 3
        assert builder.build("BUF").same_place == ["PIT", "LV"]
        assert builder.build("NYJ").same_place == ["BAL", "DEN"]


class TestSymmetry:
    """Single-game categories must agree from both sides"""

    @pytest.mark.parametrize("year", [2024, 2025, 2026, 2027])
    def test_single_game_categories_are_mutual(self, league, year):
        sets = OpponentSetBuilder(
            league, create_default_previous_standings(league), year
        ).build_all()

        for team_id, opponents in sets.items():
            for category, opponent_ids in opponents.by_category().items():
                for opponent_id in opponent_ids:
                    assert team_id in sets[opponent_id].by_category()[category], (
                        f"{year}: {team_id} -> {opponent_id} ({category.value}) not mutual"
                    )

    def test_intra_conference_division_pairs_once(self, builder_2025):
        """Every intra-conference opponent is counted from both teams"""
        tally = defaultdict(int)
        for opponents in builder_2025.build_all().values():
            for opponent_id in opponents.intra_conference:
                tally[tuple(sorted((opponents.team_id, opponent_id)))] += 1
        assert set(tally.values()) == {2}
        assert len(tally) == 64


class TestMissingHistory:
    """Teams absent from previous standings default to first place"""

    def test_missing_team_defaults_to_position_zero(self, league, default_previous_standings):
        standings = default_previous_standings
        standings[Conference.AFC][Division.EAST] = ["MIA", "NE", "NYJ"]

        builder = OpponentSetBuilder(league, standings, 2025)
        assert builder.finish_position(league.get_team("BUF")) == 0
        assert builder.build("BUF").same_place == ["BAL", "DEN"]
