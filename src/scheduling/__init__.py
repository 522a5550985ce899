"""
Scheduling Module

Handles regular-season schedule generation and result recording:
- Opponent sets from divisional, rotation, same-place and extra categories
- Game assembly with deterministic home/away
- Week assignment with bye weeks and a CP-SAT repair pass
- Post-generation validation and schedule queries
"""

from .config import ScheduleConfig, ByeWeekConfig
from .models import GameCategory, ScheduledGame, SeasonSchedule, PreviousYearStandings
from .opponent_builder import OpponentSet, OpponentSetBuilder, create_default_previous_standings
from .game_assembler import GameAssembler
from .week_assigner import WeekAssigner, WeekAssignmentResult
from .bye_weeks import assign_bye_weeks, validate_bye_weeks
from .schedule_generator import NFLScheduleGenerator, generate_schedule, create_schedule_generator
from .schedule_validator import ScheduleValidator, ValidationResult, ValidationSeverity
from .schedule_queries import record_game_result

__all__ = [
    'ScheduleConfig',
    'ByeWeekConfig',
    'GameCategory',
    'ScheduledGame',
    'SeasonSchedule',
    'PreviousYearStandings',
    'OpponentSet',
    'OpponentSetBuilder',
    'create_default_previous_standings',
    'GameAssembler',
    'WeekAssigner',
    'WeekAssignmentResult',
    'assign_bye_weeks',
    'validate_bye_weeks',
    'NFLScheduleGenerator',
    'generate_schedule',
    'create_schedule_generator',
    'ScheduleValidator',
    'ValidationResult',
    'ValidationSeverity',
    'record_game_result',
]
