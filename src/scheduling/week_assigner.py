"""
Week Assigner

Places every assembled game into a week 1..N while keeping each team to one
commitment (game or bye) per week.

Greedy phases, each touching only games left over by the previous ones:

1. Final week, divisional games only
2. Divisional backfill over the late window, latest week first
3. Divisional catch-all over the earlier weeks, latest week first
4. Non-divisional games, tightest first, weeks 1..N-1 ascending
5. Catch-all, any game, weeks 1..N ascending

When games remain after phase 5 the whole set is re-solved with the CP-SAT
solver. The objective rewards keeping each greedy placement and keeping
divisional games inside the late window, so the repair moves as few games as
it can. Games that still cannot be placed are dropped and returned
separately; the schedule validator turns any drop into a hard error.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from ortools.sat.python import cp_model

from .config import ScheduleConfig
from .models import ScheduledGame


PHASE_FINAL_WEEK = "final_week"
PHASE_DIVISIONAL_BACKFILL = "divisional_backfill"
PHASE_DIVISIONAL_CATCH_ALL = "divisional_catch_all"
PHASE_CONSTRAINED = "non_divisional"
PHASE_CATCH_ALL = "catch_all"
PHASE_SOLVER = "solver_repair"

# Objective weights for the solver repair
KEEP_GREEDY_WEIGHT = 1
LATE_DIVISIONAL_WEIGHT = 2


@dataclass
class WeekAssignmentResult:
    """
    Outcome of week assignment.

    Attributes:
        games: Placed games with ``week`` set, in input order
        dropped: Games no phase could place (``week`` is None)
        phase_counts: Games placed by each phase; the solver entry counts
            games the greedy phases had left over
        greedy_weeks: game_id -> week as the greedy phases left it
        solver_used: Whether the CP-SAT repair ran
        solver_status: CP-SAT status name when the solver ran
        solver_moved: Greedy placements the solver changed
    """
    games: List[ScheduledGame] = field(default_factory=list)
    dropped: List[ScheduledGame] = field(default_factory=list)
    phase_counts: Dict[str, int] = field(default_factory=dict)
    greedy_weeks: Dict[str, int] = field(default_factory=dict)
    solver_used: bool = False
    solver_status: Optional[str] = None
    solver_moved: int = 0

    @property
    def is_complete(self) -> bool:
        return not self.dropped


def late_window_start(config: ScheduleConfig) -> int:
    """First week of the late divisional window"""
    return max(1, config.total_weeks - config.late_divisional_window)


def count_late_divisional(weeks: Dict[str, int], games: Iterable[ScheduledGame], window_start: int) -> int:
    """Divisional games whose week in ``weeks`` falls at or after ``window_start``"""
    return sum(
        1 for game in games
        if game.is_divisional and weeks.get(game.game_id, 0) >= window_start
    )


def compute_tightness(
    game: ScheduledGame,
    commitments: Dict[str, Set[int]],
    total_weeks: int
) -> int:
    """Fewest free weeks left to either team in the game"""
    return min(
        total_weeks - len(commitments.get(game.home_team_id, ())),
        total_weeks - len(commitments.get(game.away_team_id, ()))
    )


class WeekAssigner:
    """
    Assign weeks to games for one season.

    Args:
        config: Schedule configuration (weeks, late window, solver settings)
    """

    def __init__(self, config: ScheduleConfig):
        self.config = config
        self.total_weeks = config.total_weeks
        self.logger = logging.getLogger(__name__)

        self._weeks: Dict[str, int] = {}
        self._commitments: Dict[str, Set[int]] = {}

    # ------------------------------------------------------------------
    # Greedy placement
    # ------------------------------------------------------------------

    def _reset(self, games: List[ScheduledGame], bye_weeks: Dict[str, int]) -> None:
        self._weeks = {}
        self._commitments = {}
        for game in games:
            for team_id in game.team_ids:
                self._commitments.setdefault(team_id, set())
        for team_id, week in bye_weeks.items():
            self._commitments.setdefault(team_id, set()).add(week)

    def _offer(self, game: ScheduledGame, week: int) -> bool:
        """Place the game in ``week`` if both teams are free"""
        home = self._commitments[game.home_team_id]
        away = self._commitments[game.away_team_id]
        if week in home or week in away:
            return False
        home.add(week)
        away.add(week)
        self._weeks[game.game_id] = week
        return True

    def _offer_weeks(self, games: List[ScheduledGame], weeks: Iterable[int]) -> int:
        weeks = list(weeks)
        placed = 0
        for game in games:
            if game.game_id in self._weeks:
                continue
            for week in weeks:
                if self._offer(game, week):
                    placed += 1
                    break
        return placed

    def _unassigned(self, games: List[ScheduledGame]) -> List[ScheduledGame]:
        return [game for game in games if game.game_id not in self._weeks]

    def _run_greedy(self, games: List[ScheduledGame]) -> Dict[str, int]:
        final_week = self.total_weeks
        window_start = late_window_start(self.config)
        divisional = [game for game in games if game.is_divisional]

        counts = {}

        # Phase 1: final week reserved for divisional games
        counts[PHASE_FINAL_WEEK] = self._offer_weeks(divisional, [final_week])

        # Phase 2: late window, latest first
        counts[PHASE_DIVISIONAL_BACKFILL] = self._offer_weeks(
            divisional, range(final_week - 1, window_start - 1, -1)
        )

        # Phase 3: everything before the window, latest first
        counts[PHASE_DIVISIONAL_CATCH_ALL] = self._offer_weeks(
            divisional, range(window_start - 1, 0, -1)
        )

        # Phase 4: tightest teams first, final week excluded
        remaining = [game for game in self._unassigned(games) if not game.is_divisional]
        remaining.sort(key=lambda game: compute_tightness(game, self._commitments, self.total_weeks))
        counts[PHASE_CONSTRAINED] = self._offer_weeks(remaining, range(1, final_week))

        # Phase 5: anything left, any week
        counts[PHASE_CATCH_ALL] = self._offer_weeks(
            self._unassigned(games), range(1, final_week + 1)
        )

        return counts

    # ------------------------------------------------------------------
    # Solver repair
    # ------------------------------------------------------------------

    def _solve(
        self,
        games: List[ScheduledGame],
        bye_weeks: Dict[str, int]
    ) -> Optional[Dict[str, int]]:
        """
        Re-solve every game's week with CP-SAT.

        Constraints:
        - Each game gets exactly one week
        - A team plays at most once per week
        - No game in either team's bye week
        - The final week holds divisional games only

        Objective (maximized):
        - Each game left in its greedy week
        - Each divisional game inside the late window

        Returns:
            game_id -> week, or None when no assignment was found
        """
        model = cp_model.CpModel()
        final_week = self.total_weeks
        window_start = late_window_start(self.config)

        x: Dict[tuple, cp_model.IntVar] = {}
        team_week_vars: Dict[tuple, list] = {}
        objective_terms = []

        for index, game in enumerate(games):
            greedy_week = self._weeks.get(game.game_id)
            allowed = []
            for week in range(1, final_week + 1):
                if week == final_week and not game.is_divisional:
                    continue
                if bye_weeks.get(game.home_team_id) == week or bye_weeks.get(game.away_team_id) == week:
                    continue
                var = model.NewBoolVar(f"g{index}_w{week}")
                x[(index, week)] = var
                allowed.append(var)
                for team_id in game.team_ids:
                    team_week_vars.setdefault((team_id, week), []).append(var)

                if week == greedy_week:
                    objective_terms.append(KEEP_GREEDY_WEIGHT * var)
                if game.is_divisional and week >= window_start:
                    objective_terms.append(LATE_DIVISIONAL_WEIGHT * var)

            if not allowed:
                self.logger.warning(f"Game {game.game_id} has no legal week; solver skipped")
                return None

            model.Add(sum(allowed) == 1)

        for team_week, week_vars in sorted(team_week_vars.items()):
            if len(week_vars) > 1:
                model.Add(sum(week_vars) <= 1)

        if objective_terms:
            model.Maximize(sum(objective_terms))

        for index, game in enumerate(games):
            hinted_week = self._weeks.get(game.game_id)
            if hinted_week is None:
                continue
            for week in range(1, final_week + 1):
                var = x.get((index, week))
                if var is not None:
                    model.AddHint(var, 1 if week == hinted_week else 0)

        solver = cp_model.CpSolver()
        solver.parameters.num_workers = 1
        solver.parameters.random_seed = self.config.solver_random_seed
        solver.parameters.max_deterministic_time = self.config.solver_max_deterministic_time
        solver.parameters.log_search_progress = False

        status = solver.Solve(model)
        self._solver_status = solver.StatusName(status)
        self.logger.info(
            f"Solver repair finished: {self._solver_status} "
            f"({solver.WallTime():.2f}s wall, {len(games)} games)"
        )

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            return None

        weeks = {}
        for (index, week), var in x.items():
            if solver.Value(var):
                weeks[games[index].game_id] = week
        return weeks

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def assign(
        self,
        games: List[ScheduledGame],
        bye_weeks: Dict[str, int]
    ) -> WeekAssignmentResult:
        """
        Assign a week to every game.

        Args:
            games: Assembled games, week unset
            bye_weeks: team_id -> bye week

        Returns:
            WeekAssignmentResult with placed and dropped games
        """
        self._reset(games, bye_weeks)
        self._solver_status = None

        result = WeekAssignmentResult()
        result.phase_counts = self._run_greedy(games)
        result.greedy_weeks = dict(self._weeks)

        leftover = self._unassigned(games)
        self.logger.debug(f"Greedy phases placed: {result.phase_counts}")

        if leftover:
            self.logger.warning(
                f"{len(leftover)} of {len(games)} games unplaced after greedy phases"
            )
            if self.config.use_solver_repair:
                result.solver_used = True
                solved = self._solve(games, bye_weeks)
                result.solver_status = self._solver_status
                if solved is not None:
                    result.phase_counts[PHASE_SOLVER] = len(leftover)
                    result.solver_moved = sum(
                        1 for game_id, week in result.greedy_weeks.items()
                        if solved.get(game_id) != week
                    )
                    window_start = late_window_start(self.config)
                    self.logger.info(
                        f"Solver placed {len(leftover)} leftover games and moved "
                        f"{result.solver_moved} of {len(result.greedy_weeks)} greedy placements; "
                        f"late divisional games "
                        f"{count_late_divisional(result.greedy_weeks, games, window_start)} -> "
                        f"{count_late_divisional(solved, games, window_start)}"
                    )
                    self._weeks = solved

        for game in games:
            week = self._weeks.get(game.game_id)
            if week is None:
                result.dropped.append(game)
            else:
                result.games.append(game.with_week(week))

        if result.dropped:
            self.logger.warning(
                f"Dropping {len(result.dropped)} unschedulable games: "
                + ", ".join(game.game_id for game in result.dropped)
            )
        else:
            self.logger.info(f"All {len(games)} games assigned to weeks")

        return result
