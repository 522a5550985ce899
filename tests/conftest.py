"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- The default 32-team league
- A generated 2025 schedule (built once per session)
- Completed-game factory for standings scenarios
"""

import sys
from pathlib import Path
import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src must come before tests/ so that test directories never shadow the
    scheduling, standings or season packages.
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p != str(tests_path):
            seen.add(p)
            new_path.append(p)

    for path in [str(src_path), str(project_root)]:
        if path in new_path:
            new_path.remove(path)

    new_path.insert(0, str(project_root))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def league():
    """Standard 32-team league directory."""
    from team_registry import create_default_league
    return create_default_league()


@pytest.fixture
def default_previous_standings(league):
    """Previous standings for a league with no history (id order)."""
    from scheduling.opponent_builder import create_default_previous_standings
    return create_default_previous_standings(league)


@pytest.fixture(scope="session")
def schedule_2025(league):
    """
    Generated 2025 schedule.

    Session scoped: generation runs the solver, so tests share one copy.
    The schedule is immutable, so sharing is safe.
    """
    from scheduling import generate_schedule
    return generate_schedule(league, 2025)


# ============================================================================
# GAME FACTORY
# ============================================================================

@pytest.fixture
def make_game():
    """
    Factory for completed games between teams of the default league.

    Usage:
        game = make_game("G1", "BUF", "MIA", week=1, home_score=24, away_score=17)
    """
    from scheduling.models import GameCategory, ScheduledGame
    from team_registry import create_default_league

    directory = create_default_league()

    def _make(game_id, home, away, week, home_score=None, away_score=None):
        divisional = directory.are_division_rivals(home, away)
        conference = directory.same_conference(home, away)
        if divisional:
            category = GameCategory.DIVISIONAL
        elif conference:
            category = GameCategory.INTRA_CONFERENCE
        else:
            category = GameCategory.INTER_CONFERENCE

        game = ScheduledGame(
            game_id=game_id,
            home_team_id=home,
            away_team_id=away,
            category=category,
            is_divisional=divisional,
            is_conference=conference,
            is_rivalry=divisional,
            week=week,
        )
        if home_score is not None:
            game = game.with_result(home_score, away_score)
        return game

    return _make
