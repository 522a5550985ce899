"""
Season State

The season is an immutable, serializable value advanced by pure functions:

    state = create_season(directory, 2025)
    state = start_season(state)
    state = apply_game_result(state, game_id, 24, 17)
    state = advance_week(state)

Each call returns a new SeasonState; nothing is modified in place. Standings
are recomputed from the schedule after every result.

Phases:
    not_started -> in_progress (weeks 1..N) -> season_complete
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

from scheduling.config import ScheduleConfig
from scheduling.models import PreviousYearStandings, ScheduledGame, SeasonSchedule
from scheduling.schedule_generator import generate_schedule
from scheduling.schedule_queries import (
    get_game,
    get_week_games,
    is_regular_season_complete,
    is_week_complete,
    record_game_result,
)
from standings.models import LeagueStandings
from standings.standings_calculator import compute_standings
from standings.standings_queries import build_previous_year_standings
from team_registry.models import Conference, Division, Team
from team_registry.team_directory import TeamDirectory

from .season_exceptions import (
    InvalidSeasonStateException,
    SeasonBoundaryException,
    validate_phase_transition,
)


logger = logging.getLogger(__name__)


class SeasonPhase(Enum):
    """Season progression phases"""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SEASON_COMPLETE = "season_complete"


@dataclass(frozen=True)
class SeasonState:
    """
    Snapshot of a season.

    Attributes:
        year: Season year
        phase: Current phase
        current_week: 0 before the season, 1..N while in progress
        schedule: Schedule including every recorded result
        standings: Standings computed from the schedule
        directory: League roster
    """
    year: int
    phase: SeasonPhase
    current_week: int
    schedule: SeasonSchedule
    standings: LeagueStandings
    directory: TeamDirectory

    @property
    def total_weeks(self) -> int:
        return self.schedule.total_weeks

    def _context(self) -> Dict[str, Any]:
        return {"year": self.year, "phase": self.phase.value, "week": self.current_week}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'year': self.year,
            'phase': self.phase.value,
            'current_week': self.current_week,
            'teams': [
                {
                    'team_id': team.team_id,
                    'conference': team.conference.value,
                    'division': team.division.value,
                    'city': team.city,
                    'nickname': team.nickname
                }
                for team in self.directory.teams
            ],
            'schedule': self.schedule.to_dict(),
            'standings': self.standings.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SeasonState':
        """
        Rebuild a state from ``to_dict`` output.

        Standings are recomputed from the schedule rather than read back.
        """
        directory = TeamDirectory(
            Team(
                team_id=team['team_id'],
                conference=Conference(team['conference']),
                division=Division(team['division']),
                city=team.get('city', ''),
                nickname=team.get('nickname', '')
            )
            for team in data['teams']
        )
        schedule = SeasonSchedule.from_dict(data['schedule'])
        state = cls(
            year=data['year'],
            phase=SeasonPhase(data['phase']),
            current_week=data['current_week'],
            schedule=schedule,
            standings=compute_standings(schedule.games, directory),
            directory=directory
        )
        _check_week_matches_phase(state)
        return state


def _check_week_matches_phase(state: SeasonState) -> None:
    if state.phase is SeasonPhase.NOT_STARTED:
        valid = state.current_week == 0
    elif state.phase is SeasonPhase.IN_PROGRESS:
        valid = 1 <= state.current_week <= state.total_weeks
    else:
        valid = state.current_week == state.total_weeks

    if not valid:
        raise InvalidSeasonStateException(
            f"Week {state.current_week} is not valid in phase {state.phase.value}",
            state_issue="week_phase_mismatch",
            season_context=state._context()
        )


def _require_phase(state: SeasonState, phase: SeasonPhase, operation: str) -> None:
    if state.phase is not phase:
        raise InvalidSeasonStateException(
            f"{operation} requires phase {phase.value}, season is {state.phase.value}",
            state_issue="wrong_phase",
            season_context=state._context(),
            operation=operation
        )


def create_season(
    directory: TeamDirectory,
    year: int,
    previous_standings: Optional[PreviousYearStandings] = None,
    bye_weeks: Optional[Dict[str, int]] = None,
    config: Optional[ScheduleConfig] = None
) -> SeasonState:
    """Generate the schedule and return a season that has not started."""
    schedule = generate_schedule(directory, year, previous_standings, bye_weeks, config)
    logger.info(f"Season {year} created with {len(schedule.games)} games")
    return SeasonState(
        year=year,
        phase=SeasonPhase.NOT_STARTED,
        current_week=0,
        schedule=schedule,
        standings=compute_standings(schedule.games, directory),
        directory=directory
    )


def start_season(state: SeasonState) -> SeasonState:
    """Move to week 1."""
    validate_phase_transition(state.phase.value, SeasonPhase.IN_PROGRESS.value)
    logger.info(f"Season {state.year} started")
    return replace(state, phase=SeasonPhase.IN_PROGRESS, current_week=1)


def apply_game_result(
    state: SeasonState,
    game_id: str,
    home_score: int,
    away_score: int
) -> SeasonState:
    """
    Record a final score and recompute standings.

    Raises:
        InvalidSeasonStateException: Season not in progress
        SeasonBoundaryException: Game is scheduled after the current week
        GameNotFoundException / GameAlreadyCompleteException /
        InvalidGameResultException: from result recording
    """
    _require_phase(state, SeasonPhase.IN_PROGRESS, "apply_game_result")

    game = get_game(state.schedule, game_id)
    if game.week is not None and game.week > state.current_week:
        raise SeasonBoundaryException(
            f"Game {game_id} is in week {game.week}, season is at week {state.current_week}",
            boundary_type="future_game",
            season_context=state._context(),
            operation="apply_game_result"
        )

    schedule = record_game_result(state.schedule, game_id, home_score, away_score)
    return replace(
        state,
        schedule=schedule,
        standings=compute_standings(schedule.games, state.directory)
    )


def advance_week(state: SeasonState) -> SeasonState:
    """
    Move to the next week, or complete the season after the final week.

    Raises:
        SeasonBoundaryException: Current week still has unplayed games
    """
    _require_phase(state, SeasonPhase.IN_PROGRESS, "advance_week")

    if not is_week_complete(state.schedule, state.current_week):
        remaining = [
            game.game_id for game in get_week_games(state.schedule, state.current_week)
            if not game.is_complete
        ]
        raise SeasonBoundaryException(
            f"Week {state.current_week} has {len(remaining)} unplayed games",
            boundary_type="week_incomplete",
            season_context={**state._context(), "unplayed": remaining},
            operation="advance_week"
        )

    if state.current_week >= state.total_weeks:
        if not is_regular_season_complete(state.schedule):
            raise InvalidSeasonStateException(
                "Final week reached with unplayed games",
                state_issue="unplayed_games",
                season_context=state._context(),
                operation="advance_week"
            )
        validate_phase_transition(state.phase.value, SeasonPhase.SEASON_COMPLETE.value)
        logger.info(f"Season {state.year} complete")
        return replace(state, phase=SeasonPhase.SEASON_COMPLETE)

    logger.debug(f"Season {state.year} advanced to week {state.current_week + 1}")
    return replace(state, current_week=state.current_week + 1)


def get_current_week_games(state: SeasonState) -> List[ScheduledGame]:
    return get_week_games(state.schedule, state.current_week)


def next_season_previous_standings(state: SeasonState) -> PreviousYearStandings:
    """Final division order, to seed next season's schedule"""
    _require_phase(state, SeasonPhase.SEASON_COMPLETE, "next_season_previous_standings")
    return build_previous_year_standings(state.standings)
