"""
Schedule Validator

Post-generation health checks for a season schedule. Runs before a season
starts so constraint violations surface as an itemized list instead of
showing up weeks later as a team with 16 games.

Hard checks (ERROR):
- Per-team and league-wide game counts
- Divisional pairs: two games, each team hosting once
- No repeated non-divisional pairing
- Bye coverage: one bye per team, inside the window, no game that week
- No team plays twice in a week
- Every game has a week inside the season
- Category counts per team (6/4/4/2/1)
- Rotation targets match the rotation tables
- Extra game comes from a different division than the inter-conference rotation
- Same-place and extra games pair teams with the same previous-year finish

Soft checks (WARNING):
- Home/away balance
- Final week reserved for divisional games

Usage Example:
    validator = ScheduleValidator(directory, config, previous_standings)
    result = validator.validate(schedule)
    if not result.valid:
        for error in result.errors:
            print(error)
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple
import logging

from team_registry.team_directory import TeamDirectory

from .config import ScheduleConfig
from .models import CATEGORY_GAME_COUNTS, GameCategory, PreviousYearStandings, SeasonSchedule
from .opponent_builder import create_default_previous_standings
from .rotations import (
    extra_game_division,
    inter_conference_division,
    intra_conference_division,
    same_place_divisions,
)


class ValidationSeverity(Enum):
    """Severity levels for validation findings"""
    ERROR = "error"        # Schedule unusable
    WARNING = "warning"    # Schedule usable, review recommended
    INFO = "info"          # Informational, no action needed


@dataclass
class ValidationError:
    """
    Single validation finding.

    Attributes:
        severity: Finding severity level
        category: Check that produced it (e.g., "game_counts", "bye_weeks")
        message: Human-readable message
        context: Additional context (team ids, weeks, game ids)
    """
    severity: ValidationSeverity
    category: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """String representation for logging"""
        return f"[{self.severity.value.upper()}] {self.category}: {self.message}"


@dataclass
class ValidationResult:
    """
    Result of a validation run.

    Attributes:
        valid: Whether validation passed (no errors)
        errors: Hard violations
        warnings: Soft findings
        info: Informational messages
        total_checks: Number of checks performed
    """
    valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    info: List[ValidationError] = field(default_factory=list)
    total_checks: int = 0

    def add_error(
        self,
        severity: ValidationSeverity,
        category: str,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """Add a finding to the result"""
        error = ValidationError(
            severity=severity,
            category=category,
            message=message,
            context=context or {}
        )

        if severity == ValidationSeverity.ERROR:
            self.errors.append(error)
            self.valid = False
        elif severity == ValidationSeverity.WARNING:
            self.warnings.append(error)
        else:
            self.info.append(error)

    @property
    def error_messages(self) -> List[str]:
        return [error.message for error in self.errors]

    def get_summary(self) -> str:
        """Get human-readable summary"""
        return (
            f"Validation Result: {'PASS' if self.valid else 'FAIL'}\n"
            f"  Total Checks: {self.total_checks}\n"
            f"  Errors: {len(self.errors)}\n"
            f"  Warnings: {len(self.warnings)}\n"
            f"  Info: {len(self.info)}"
        )


class ScheduleValidator:
    """
    Validates a generated season schedule.

    Attributes:
        directory: League roster
        config: Schedule configuration (weeks, games per team, bye window)
        previous_standings: Last season's division finish order the schedule
            was built from; defaults to id order, as the generator does
    """

    def __init__(
        self,
        directory: TeamDirectory,
        config: ScheduleConfig,
        previous_standings: Optional[PreviousYearStandings] = None
    ):
        self.directory = directory
        self.config = config
        if previous_standings is None:
            previous_standings = create_default_previous_standings(directory)
        self.previous_standings = previous_standings
        self._logger = logging.getLogger(__name__)

    def validate(self, schedule: SeasonSchedule) -> ValidationResult:
        """
        Run every check against a schedule.

        Returns:
            ValidationResult with hard errors and soft warnings
        """
        result = ValidationResult()

        self._validate_game_counts(schedule, result)
        self._validate_divisional_pairs(schedule, result)
        self._validate_unique_pairings(schedule, result)
        self._validate_bye_weeks(schedule, result)
        self._validate_week_conflicts(schedule, result)
        self._validate_week_range(schedule, result)
        self._validate_category_counts(schedule, result)
        self._validate_rotations(schedule, result)
        self._validate_finish_positions(schedule, result)
        self._validate_home_away_balance(schedule, result)
        self._validate_final_week(schedule, result)

        self._logger.info(
            f"Schedule {schedule.year} validation: {result.total_checks} checks, "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result

    def _validate_game_counts(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 2

        counts: Dict[str, int] = defaultdict(int)
        for game in schedule.games:
            counts[game.home_team_id] += 1
            counts[game.away_team_id] += 1

        for team_id in self.directory.team_ids:
            if counts[team_id] != self.config.games_per_team:
                result.add_error(
                    ValidationSeverity.ERROR,
                    "game_counts",
                    f"{team_id} has {counts[team_id]} games, expected {self.config.games_per_team}",
                    {"team_id": team_id, "games": counts[team_id]}
                )

        expected_total = len(self.directory) // 2 * self.config.games_per_team
        if len(schedule.games) != expected_total:
            result.add_error(
                ValidationSeverity.ERROR,
                "game_counts",
                f"League has {len(schedule.games)} games, expected {expected_total}",
                {"games": len(schedule.games), "expected": expected_total}
            )

    def _validate_divisional_pairs(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 1

        hosted: Dict[Tuple[str, str], int] = defaultdict(int)
        for game in schedule.games:
            if game.is_divisional:
                hosted[(game.home_team_id, game.away_team_id)] += 1

        for team in self.directory.teams:
            for rival in self.directory.division_teams(team.conference, team.division):
                if rival.team_id <= team.team_id:
                    continue
                forward = hosted[(team.team_id, rival.team_id)]
                reverse = hosted[(rival.team_id, team.team_id)]
                if forward != 1 or reverse != 1:
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "divisional_pairs",
                        f"{team.team_id}/{rival.team_id} divisional series is "
                        f"{forward} home + {reverse} away, expected 1 + 1",
                        {"teams": [team.team_id, rival.team_id]}
                    )

    def _validate_unique_pairings(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 1

        pairs = Counter(game.pair_key for game in schedule.games if not game.is_divisional)
        for pair, count in sorted(pairs.items()):
            if count > 1:
                result.add_error(
                    ValidationSeverity.ERROR,
                    "duplicate_pairings",
                    f"{pair[0]} vs {pair[1]} scheduled {count} times",
                    {"teams": list(pair), "count": count}
                )

    def _validate_bye_weeks(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 2
        start_week = self.config.bye_week.start_week
        end_week = self.config.bye_week.end_week

        weeks_played: Dict[str, Set[int]] = defaultdict(set)
        for game in schedule.games:
            if game.week is not None:
                weeks_played[game.home_team_id].add(game.week)
                weeks_played[game.away_team_id].add(game.week)

        for team_id in self.directory.team_ids:
            bye = schedule.bye_weeks.get(team_id)
            if bye is None:
                result.add_error(
                    ValidationSeverity.ERROR,
                    "bye_weeks",
                    f"{team_id} has no bye week",
                    {"team_id": team_id}
                )
                continue
            if not start_week <= bye <= end_week:
                result.add_error(
                    ValidationSeverity.ERROR,
                    "bye_weeks",
                    f"{team_id} bye in week {bye}, outside window {start_week}-{end_week}",
                    {"team_id": team_id, "week": bye}
                )
            if bye in weeks_played[team_id]:
                result.add_error(
                    ValidationSeverity.ERROR,
                    "bye_weeks",
                    f"{team_id} plays during its bye week {bye}",
                    {"team_id": team_id, "week": bye}
                )

    def _validate_week_conflicts(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 1

        per_team_week: Dict[Tuple[str, int], List[str]] = defaultdict(list)
        for game in schedule.games:
            if game.week is None:
                continue
            per_team_week[(game.home_team_id, game.week)].append(game.game_id)
            per_team_week[(game.away_team_id, game.week)].append(game.game_id)

        for (team_id, week), game_ids in sorted(per_team_week.items()):
            if len(game_ids) > 1:
                result.add_error(
                    ValidationSeverity.ERROR,
                    "week_conflicts",
                    f"{team_id} plays {len(game_ids)} games in week {week}",
                    {"team_id": team_id, "week": week, "game_ids": game_ids}
                )

    def _validate_week_range(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 1

        for game in schedule.games:
            if game.week is None or not 1 <= game.week <= self.config.total_weeks:
                result.add_error(
                    ValidationSeverity.ERROR,
                    "week_range",
                    f"Game {game.game_id} has week {game.week}, expected 1-{self.config.total_weeks}",
                    {"game_id": game.game_id}
                )

    def _validate_category_counts(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 1

        counts: Dict[Tuple[str, GameCategory], int] = defaultdict(int)
        for game in schedule.games:
            counts[(game.home_team_id, game.category)] += 1
            counts[(game.away_team_id, game.category)] += 1

        for team_id in self.directory.team_ids:
            for category, expected in CATEGORY_GAME_COUNTS.items():
                actual = counts[(team_id, category)]
                if actual != expected:
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "category_counts",
                        f"{team_id} has {actual} {category.value} games, expected {expected}",
                        {"team_id": team_id, "category": category.value}
                    )

    def _validate_rotations(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 3
        year = schedule.year

        for game in schedule.games:
            home = self.directory.get_team(game.home_team_id)
            away = self.directory.get_team(game.away_team_id)

            if game.category is GameCategory.INTRA_CONFERENCE:
                if (home.conference is not away.conference
                        or intra_conference_division(home.division, year) is not away.division):
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "rotations",
                        f"Game {game.game_id} ({home.team_id} vs {away.team_id}) breaks the "
                        f"intra-conference rotation for {year}",
                        {"game_id": game.game_id}
                    )

            elif game.category is GameCategory.INTER_CONFERENCE:
                if inter_conference_division(home.conference, home.division, year) != (
                        away.conference, away.division):
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "rotations",
                        f"Game {game.game_id} ({home.team_id} vs {away.team_id}) breaks the "
                        f"inter-conference rotation for {year}",
                        {"game_id": game.game_id}
                    )

            elif game.category is GameCategory.EXTRA:
                rotation_target = inter_conference_division(home.conference, home.division, year)
                extra_target = extra_game_division(home.conference, home.division, year)
                if extra_target != (away.conference, away.division):
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "rotations",
                        f"Game {game.game_id} ({home.team_id} vs {away.team_id}) is not against "
                        f"the extra-game division for {year}",
                        {"game_id": game.game_id}
                    )
                if rotation_target == extra_target:
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "rotations",
                        f"Extra game {game.game_id} repeats the inter-conference division",
                        {"game_id": game.game_id}
                    )

            elif game.category is GameCategory.SAME_PLACE:
                if (home.conference is not away.conference
                        or away.division not in same_place_divisions(home.division, year)):
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "rotations",
                        f"Game {game.game_id} ({home.team_id} vs {away.team_id}) is not against "
                        f"a same-place division for {year}",
                        {"game_id": game.game_id}
                    )

    def _finish_position(self, team_id: str) -> int:
        conference, division = self.directory.division_of(team_id)
        order = self.previous_standings.get(conference, {}).get(division, [])
        return order.index(team_id) if team_id in order else 0

    def _validate_finish_positions(self, schedule: SeasonSchedule, result: ValidationResult):
        """Same-place and extra opponents sit at the team's own finish position"""
        result.total_checks += 2

        for game in schedule.games:
            if game.category not in (GameCategory.SAME_PLACE, GameCategory.EXTRA):
                continue

            for team_id, opponent_id in (
                    (game.home_team_id, game.away_team_id),
                    (game.away_team_id, game.home_team_id)):
                position = self._finish_position(team_id)
                conference, division = self.directory.division_of(opponent_id)
                order = self.previous_standings.get(conference, {}).get(division, [])
                expected = order[position] if position < len(order) else None
                if expected != opponent_id:
                    result.add_error(
                        ValidationSeverity.ERROR,
                        "finish_positions",
                        f"{team_id} (finished {position + 1}) plays {opponent_id} in "
                        f"{game.category.value} game {game.game_id}, expected {expected} "
                        f"from {conference.value} {division.value}",
                        {"game_id": game.game_id, "team_id": team_id, "expected": expected}
                    )

    def _validate_home_away_balance(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 1

        home_games = Counter(game.home_team_id for game in schedule.games)
        low = self.config.games_per_team // 2
        high = low + self.config.games_per_team % 2
        outliers = {
            team_id: home_games[team_id]
            for team_id in self.directory.team_ids
            if not low <= home_games[team_id] <= high
        }
        if outliers:
            result.add_error(
                ValidationSeverity.WARNING,
                "home_away_balance",
                f"{len(outliers)} teams outside {low}-{high} home games: "
                + ", ".join(f"{team_id}={count}" for team_id, count in outliers.items()),
                {"home_games": outliers}
            )

    def _validate_final_week(self, schedule: SeasonSchedule, result: ValidationResult):
        result.total_checks += 1

        final_week = self.config.total_weeks
        outliers = [
            game.game_id for game in schedule.games
            if game.week == final_week and not game.is_divisional
        ]
        if outliers:
            result.add_error(
                ValidationSeverity.WARNING,
                "final_week",
                f"{len(outliers)} non-divisional games in week {final_week}",
                {"game_ids": outliers}
            )
