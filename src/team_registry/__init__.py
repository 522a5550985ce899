"""
Team Registry Module

Provides the league structure consumed by scheduling and standings:
conference/division membership and the default 32-team league.
"""

from .models import Conference, Division, Team
from .team_directory import TeamDirectory, create_default_league
from .registry_exceptions import TeamRegistryException, InvalidTeamRosterException

__all__ = [
    'Conference',
    'Division',
    'Team',
    'TeamDirectory',
    'create_default_league',
    'TeamRegistryException',
    'InvalidTeamRosterException',
]
