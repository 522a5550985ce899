"""
Standings Module

Computes league standings from completed games:
- Per-team records, sub-records, head-to-head, streaks
- Strength of victory / schedule
- Division and wildcard tiebreak cascades
- Playoff picture and seeds
"""

from .models import (
    HeadToHeadRecord,
    LeagueStandings,
    PlayoffPosition,
    PlayoffSeed,
    PlayoffTeams,
    TeamStanding,
)
from .standings_calculator import StandingsEngine, compute_standings, fold_game
from .tiebreakers import DIVISION_CASCADE, WILDCARD_CASCADE, TiebreakResolver
from .standings_queries import (
    build_previous_year_standings,
    determine_playoff_teams,
    format_record,
    get_conference_standings,
    get_division_standings,
    get_head_to_head,
    get_playoff_picture,
    get_playoff_seeds,
)

__all__ = [
    'HeadToHeadRecord',
    'LeagueStandings',
    'PlayoffPosition',
    'PlayoffSeed',
    'PlayoffTeams',
    'TeamStanding',
    'StandingsEngine',
    'compute_standings',
    'fold_game',
    'DIVISION_CASCADE',
    'WILDCARD_CASCADE',
    'TiebreakResolver',
    'build_previous_year_standings',
    'determine_playoff_teams',
    'format_record',
    'get_conference_standings',
    'get_division_standings',
    'get_head_to_head',
    'get_playoff_picture',
    'get_playoff_seeds',
]
