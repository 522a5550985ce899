"""
Schedule queries and result recording.

All functions take a SeasonSchedule value and never modify it.
``record_game_result`` is the only way a result enters the schedule; it
returns a new schedule.
"""

import logging
from typing import List, Optional

from .models import ScheduledGame, SeasonSchedule, game_sort_key
from .scheduling_exceptions import (
    GameAlreadyCompleteException,
    GameNotFoundException,
    InvalidGameResultException,
)


logger = logging.getLogger(__name__)


def get_game(schedule: SeasonSchedule, game_id: str) -> ScheduledGame:
    for game in schedule.games:
        if game.game_id == game_id:
            return game
    raise GameNotFoundException(game_id, schedule.year)


def get_week_games(schedule: SeasonSchedule, week: int) -> List[ScheduledGame]:
    return [game for game in schedule.games if game.week == week]


def get_team_schedule(schedule: SeasonSchedule, team_id: str) -> List[ScheduledGame]:
    """All games for a team, ordered by week"""
    games = [game for game in schedule.games if game.involves(team_id)]
    return sorted(games, key=game_sort_key)


def get_team_remaining_games(schedule: SeasonSchedule, team_id: str) -> List[ScheduledGame]:
    return [game for game in get_team_schedule(schedule, team_id) if not game.is_complete]


def get_team_completed_games(schedule: SeasonSchedule, team_id: str) -> List[ScheduledGame]:
    return [game for game in get_team_schedule(schedule, team_id) if game.is_complete]


def get_team_bye_week(schedule: SeasonSchedule, team_id: str) -> Optional[int]:
    return schedule.bye_weeks.get(team_id)


def get_matchups(schedule: SeasonSchedule, team_a: str, team_b: str) -> List[ScheduledGame]:
    """Every game between two teams, ordered by week"""
    games = [
        game for game in schedule.games
        if game.involves(team_a) and game.involves(team_b) and team_a != team_b
    ]
    return sorted(games, key=game_sort_key)


def get_matchup(schedule: SeasonSchedule, team_a: str, team_b: str) -> Optional[ScheduledGame]:
    """First game between two teams, or None if they don't meet"""
    games = get_matchups(schedule, team_a, team_b)
    return games[0] if games else None


def get_completed_game_count(schedule: SeasonSchedule) -> int:
    return sum(1 for game in schedule.games if game.is_complete)


def get_completed_games(schedule: SeasonSchedule) -> List[ScheduledGame]:
    return [game for game in schedule.games if game.is_complete]


def is_week_complete(schedule: SeasonSchedule, week: int) -> bool:
    return all(game.is_complete for game in get_week_games(schedule, week))


def is_regular_season_complete(schedule: SeasonSchedule) -> bool:
    return bool(schedule.games) and all(game.is_complete for game in schedule.games)


def _is_valid_score(score) -> bool:
    return isinstance(score, int) and not isinstance(score, bool) and score >= 0


def record_game_result(
    schedule: SeasonSchedule,
    game_id: str,
    home_score: int,
    away_score: int
) -> SeasonSchedule:
    """
    Apply a final score to a game.

    The winner is the team with the higher score; equal scores are a tie
    with no winner.

    Args:
        schedule: Current schedule
        game_id: Game to complete
        home_score: Final home score
        away_score: Final away score

    Returns:
        New schedule containing the completed game

    Raises:
        GameNotFoundException: Unknown game id
        GameAlreadyCompleteException: Game already has a result
        InvalidGameResultException: Score is not a non-negative integer
    """
    game = get_game(schedule, game_id)

    if game.is_complete:
        raise GameAlreadyCompleteException(game_id, game.home_score, game.away_score)

    if not _is_valid_score(home_score) or not _is_valid_score(away_score):
        raise InvalidGameResultException(game_id, home_score, away_score)

    completed = game.with_result(home_score, away_score)
    logger.debug(
        f"Recorded {game_id}: {game.home_team_id} {home_score} - "
        f"{game.away_team_id} {away_score} (winner: {completed.winner_id or 'tie'})"
    )
    return schedule.replace_game(completed)
