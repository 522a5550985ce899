"""
Week Assigner Tests

Small hand-built slates where the greedy phases and the solver repair can be
checked exactly, plus the repair on a full 2025 slate.
"""

from collections import defaultdict

import pytest

from scheduling.bye_weeks import assign_bye_weeks
from scheduling.config import ScheduleConfig
from scheduling.game_assembler import GameAssembler
from scheduling.models import GameCategory, ScheduledGame
from scheduling.opponent_builder import OpponentSetBuilder, create_default_previous_standings
from scheduling.week_assigner import (
    PHASE_CATCH_ALL,
    PHASE_CONSTRAINED,
    PHASE_FINAL_WEEK,
    PHASE_SOLVER,
    WeekAssigner,
    compute_tightness,
    count_late_divisional,
    late_window_start,
)


def divisional(game_id, home, away):
    return ScheduledGame(
        game_id, home, away, GameCategory.DIVISIONAL,
        is_divisional=True, is_conference=True, is_rivalry=True
    )


def non_divisional(game_id, home, away):
    return ScheduledGame(game_id, home, away, GameCategory.INTER_CONFERENCE)


def small_config(total_weeks, late_window=1, solver=True):
    return ScheduleConfig(
        season_year=2025,
        total_weeks=total_weeks,
        games_per_team=total_weeks - 1,
        late_divisional_window=late_window,
        use_solver_repair=solver,
    )


def weeks_by_id(result):
    return {game.game_id: game.week for game in result.games}


def assert_no_conflicts(result, bye_weeks=None):
    bye_weeks = bye_weeks or {}
    seen = defaultdict(set)
    for game in result.games:
        for team_id in game.team_ids:
            assert game.week not in seen[team_id], f"{team_id} plays twice in week {game.week}"
            assert bye_weeks.get(team_id) != game.week, f"{team_id} plays on its bye"
            seen[team_id].add(game.week)


class TestGreedyPhases:
    """Placement order of the greedy phases"""

    def test_final_week_goes_to_divisional_games(self):
        games = [non_divisional("X1", "C", "D"), divisional("D1", "A", "B")]
        result = WeekAssigner(small_config(4)).assign(games, {})

        weeks = weeks_by_id(result)
        assert weeks["D1"] == 4
        assert weeks["X1"] == 1
        assert result.phase_counts[PHASE_FINAL_WEEK] == 1
        assert result.phase_counts[PHASE_CONSTRAINED] == 1
        assert result.is_complete
        assert not result.solver_used

    def test_bye_week_is_respected(self):
        games = [non_divisional("X1", "A", "C")]
        result = WeekAssigner(small_config(4)).assign(games, {"A": 1})
        assert weeks_by_id(result)["X1"] == 2

    def test_divisional_backfill_runs_latest_first(self):
        """Second meeting of a pair lands in the week before the final"""
        games = [divisional("D1", "A", "B"), divisional("D2", "B", "A")]
        result = WeekAssigner(small_config(4, late_window=2)).assign(games, {})

        weeks = weeks_by_id(result)
        assert weeks == {"D1": 4, "D2": 3}

    def test_catch_all_uses_final_week_for_non_divisional(self):
        """With no other room, a non-divisional game may land in the final week"""
        games = [
            non_divisional("X1", "A", "B"),
            non_divisional("X2", "A", "C"),
        ]
        result = WeekAssigner(small_config(2, solver=False)).assign(games, {})

        weeks = weeks_by_id(result)
        assert weeks == {"X1": 1, "X2": 2}
        assert result.phase_counts[PHASE_CATCH_ALL] == 1

    def test_input_order_is_preserved(self):
        games = [non_divisional("X2", "C", "D"), divisional("D1", "A", "B")]
        result = WeekAssigner(small_config(3)).assign(games, {})
        assert [game.game_id for game in result.games] == ["X2", "D1"]


class TestTightness:
    """Free-week count used to order non-divisional games"""

    def test_tightness_is_min_over_both_teams(self):
        game = non_divisional("X1", "A", "B")
        commitments = {"A": {1, 2, 3}, "B": {1}}
        assert compute_tightness(game, commitments, 18) == 15

    def test_unknown_team_counts_as_free(self):
        game = non_divisional("X1", "A", "B")
        assert compute_tightness(game, {}, 18) == 18


class TestSolverRepair:
    """CP-SAT pass after the greedy phases leave games behind"""

    @staticmethod
    def _chain():
        # Path A-B-C-D-E: greedy puts A-B and D-E in the final week, then
        # B-C in week 1, leaving C-D with no free week. Alternating weeks works.
        return [
            divisional("AB", "A", "B"),
            divisional("DE", "D", "E"),
            divisional("BC", "B", "C"),
            divisional("CD", "C", "D"),
        ]

    def test_greedy_alone_drops_a_game(self):
        result = WeekAssigner(small_config(2, solver=False)).assign(self._chain(), {})

        assert [game.game_id for game in result.dropped] == ["CD"]
        assert not result.is_complete
        assert not result.solver_used
        assert_no_conflicts(result)

    def test_solver_places_every_game(self):
        result = WeekAssigner(small_config(2)).assign(self._chain(), {})

        assert result.is_complete
        assert result.solver_used
        assert result.solver_status in ("OPTIMAL", "FEASIBLE")
        assert result.phase_counts[PHASE_SOLVER] == 1
        assert len(result.games) == 4
        assert_no_conflicts(result)

    def test_solver_keeps_greedy_weeks_where_it_can(self):
        """Only D-E has to move to make room for C-D"""
        result = WeekAssigner(small_config(2)).assign(self._chain(), {})

        assert result.greedy_weeks == {"AB": 2, "DE": 2, "BC": 1}
        assert weeks_by_id(result) == {"AB": 2, "DE": 1, "BC": 1, "CD": 2}
        assert result.solver_status == "OPTIMAL"
        assert result.solver_moved == 1

    def test_solver_result_is_deterministic(self):
        first = WeekAssigner(small_config(2)).assign(self._chain(), {})
        second = WeekAssigner(small_config(2)).assign(self._chain(), {})
        assert weeks_by_id(first) == weeks_by_id(second)

    def test_infeasible_slate_is_dropped(self):
        """Three non-divisional games for one team in two weeks cannot fit"""
        games = [
            non_divisional("X1", "A", "B"),
            non_divisional("X2", "A", "C"),
            non_divisional("X3", "A", "D"),
        ]
        result = WeekAssigner(small_config(2)).assign(games, {})

        assert result.solver_used
        assert result.solver_status == "INFEASIBLE"
        assert [game.game_id for game in result.dropped] == ["X3"]
        assert all(game.week is None for game in result.dropped)
        assert_no_conflicts(result)

    @pytest.mark.parametrize("bye_week", [1, 2])
    def test_bye_blocks_week_in_chain(self, bye_week):
        games = self._chain() + [divisional("EF", "E", "F")]
        result = WeekAssigner(small_config(3)).assign(games, {"F": bye_week})
        assert result.is_complete
        assert_no_conflicts(result, {"F": bye_week})


@pytest.fixture(scope="module")
def season_assignment(league):
    """Greedy plus repair on the default 2025 slate"""
    config = ScheduleConfig.default_for_year(2025)
    builder = OpponentSetBuilder(league, create_default_previous_standings(league), 2025)
    games = GameAssembler(league, 2025).assemble(builder.build_all())
    byes = assign_bye_weeks(league, config)
    return config, games, byes, WeekAssigner(config).assign(games, byes)


class TestFullSeasonRepair:
    """Solver repair on a full league slate"""

    def test_every_game_placed(self, season_assignment):
        config, games, byes, result = season_assignment
        assert result.is_complete
        assert len(result.games) == len(games) == 272
        assert_no_conflicts(result, byes)

    def test_solver_counts(self, season_assignment):
        config, games, byes, result = season_assignment
        leftover = len(games) - len(result.greedy_weeks)
        final = weeks_by_id(result)

        if not leftover:
            assert not result.solver_used
            assert result.solver_moved == 0
            return

        assert result.solver_used
        assert result.phase_counts[PHASE_SOLVER] == leftover
        assert result.solver_moved == sum(
            1 for game_id, week in result.greedy_weeks.items() if final[game_id] != week
        )

    def test_most_greedy_placements_survive(self, season_assignment):
        config, games, byes, result = season_assignment
        assert result.solver_moved <= len(result.greedy_weeks) // 2

    def test_late_divisional_games_kept(self, season_assignment):
        config, games, byes, result = season_assignment
        window_start = late_window_start(config)
        leftover = len(games) - len(result.greedy_weeks)

        greedy_late = count_late_divisional(result.greedy_weeks, games, window_start)
        final_late = count_late_divisional(weeks_by_id(result), games, window_start)

        assert final_late >= greedy_late - leftover

    def test_final_week_is_divisional(self, season_assignment):
        config, games, byes, result = season_assignment
        final_week = [game for game in result.games if game.week == config.total_weeks]
        assert len(final_week) == 16
        assert all(game.is_divisional for game in final_week)
