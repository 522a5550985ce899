"""
Configuration for League Schedule Generation

Centralized configuration for schedule generation parameters: season
shape, bye window, divisional placement window and solver repair settings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple
import json


MIN_SEASON_YEAR = 1920
MAX_SEASON_YEAR = 2200

LEAGUE_TEAM_COUNT = 32


@dataclass
class ByeWeekConfig:
    """Configuration for bye week scheduling"""
    start_week: int = 5           # Earliest bye week
    end_week: int = 14            # Latest bye week
    max_teams_per_week: int = 6   # Maximum teams on bye each week
    min_teams_per_week: int = 2   # Minimum teams on bye in weeks the default allocator uses
    division_spread: bool = True  # Spread division teams' byes

    def validate(self, total_weeks: int = 18) -> bool:
        """Validate bye week configuration"""
        if self.start_week < 1 or self.end_week >= total_weeks:
            return False
        if self.start_week > self.end_week:
            return False
        if self.max_teams_per_week < self.min_teams_per_week:
            return False

        # Check total bye capacity
        weeks_available = self.end_week - self.start_week + 1
        if weeks_available * self.max_teams_per_week < LEAGUE_TEAM_COUNT:
            return False

        return True

    @property
    def weeks(self) -> List[int]:
        return list(range(self.start_week, self.end_week + 1))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start_week': self.start_week,
            'end_week': self.end_week,
            'max_teams_per_week': self.max_teams_per_week,
            'min_teams_per_week': self.min_teams_per_week,
            'division_spread': self.division_spread
        }


@dataclass
class ScheduleConfig:
    """Complete configuration for league schedule generation"""

    # Basic parameters
    season_year: int
    total_weeks: int = 18
    games_per_team: int = 17

    bye_week: ByeWeekConfig = field(default_factory=ByeWeekConfig)

    # Weeks before the final week offered to divisional games in backfill
    late_divisional_window: int = 4

    # CP-SAT repair when greedy placement leaves games unassigned
    use_solver_repair: bool = True
    solver_max_deterministic_time: float = 60.0
    solver_random_seed: int = 17

    # Validation settings
    strict_validation: bool = True

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate entire configuration"""
        errors = []

        if not MIN_SEASON_YEAR <= self.season_year <= MAX_SEASON_YEAR:
            errors.append(f"Invalid season year: {self.season_year}")

        if self.games_per_team != self.total_weeks - 1:
            errors.append(
                f"games_per_team ({self.games_per_team}) must equal total_weeks - 1 "
                f"({self.total_weeks - 1}) so every team gets exactly one bye"
            )

        if not self.bye_week.validate(self.total_weeks):
            errors.append("Invalid bye week configuration")

        if not 0 <= self.late_divisional_window < self.total_weeks:
            errors.append(f"Invalid late divisional window: {self.late_divisional_window}")

        if self.solver_max_deterministic_time <= 0:
            errors.append("Solver deterministic time limit must be positive")

        return len(errors) == 0, errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season_year': self.season_year,
            'total_weeks': self.total_weeks,
            'games_per_team': self.games_per_team,
            'bye_week': self.bye_week.to_dict(),
            'late_divisional_window': self.late_divisional_window,
            'solver': {
                'enabled': self.use_solver_repair,
                'max_deterministic_time': self.solver_max_deterministic_time,
                'random_seed': self.solver_random_seed
            },
            'strict_validation': self.strict_validation
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleConfig':
        config = cls(season_year=data['season_year'])
        config.total_weeks = data.get('total_weeks', 18)
        config.games_per_team = data.get('games_per_team', 17)

        if 'bye_week' in data:
            bye_data = data['bye_week']
            config.bye_week = ByeWeekConfig(
                start_week=bye_data.get('start_week', 5),
                end_week=bye_data.get('end_week', 14),
                max_teams_per_week=bye_data.get('max_teams_per_week', 6),
                min_teams_per_week=bye_data.get('min_teams_per_week', 2),
                division_spread=bye_data.get('division_spread', True)
            )

        config.late_divisional_window = data.get('late_divisional_window', 4)

        if 'solver' in data:
            solver_data = data['solver']
            config.use_solver_repair = solver_data.get('enabled', True)
            config.solver_max_deterministic_time = solver_data.get('max_deterministic_time', 60.0)
            config.solver_random_seed = solver_data.get('random_seed', 17)

        config.strict_validation = data.get('strict_validation', True)
        return config

    def to_json(self, filepath: str):
        """Save configuration to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, filepath: str) -> 'ScheduleConfig':
        """Load configuration from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def default_for_year(cls, year: int) -> 'ScheduleConfig':
        """Create default configuration for a season"""
        return cls(season_year=year)
