"""
Season Management System

Season progression as an immutable state value: creation, start, result
recording, week advancement and hand-off to next season's schedule.
"""

from .season_state import (
    SeasonPhase,
    SeasonState,
    advance_week,
    apply_game_result,
    create_season,
    get_current_week_games,
    next_season_previous_standings,
    start_season,
)
from .season_exceptions import (
    SeasonException,
    InvalidPhaseTransitionException,
    SeasonBoundaryException,
    InvalidSeasonStateException,
)

__all__ = [
    'SeasonPhase',
    'SeasonState',
    'advance_week',
    'apply_game_result',
    'create_season',
    'get_current_week_games',
    'next_season_previous_standings',
    'start_season',
    'SeasonException',
    'InvalidPhaseTransitionException',
    'SeasonBoundaryException',
    'InvalidSeasonStateException',
]
