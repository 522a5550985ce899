"""
Bye week allocation and validation.

Bye weeks normally come from an external allocator as a plain
``{team_id: week}`` mapping. ``assign_bye_weeks`` is the deterministic
default used when none is supplied.
"""

import logging
from collections import Counter
from typing import Dict, List, Tuple

from team_registry.models import ALL_DIVISIONS, Conference
from team_registry.team_directory import TeamDirectory

from .config import ScheduleConfig
from .scheduling_exceptions import InvalidByeWeekException


logger = logging.getLogger(__name__)


def assign_bye_weeks(directory: TeamDirectory, config: ScheduleConfig) -> Dict[str, int]:
    """
    Default bye allocation.

    Each AFC team is paired with the NFC team in the same division slot, and
    pairs are dealt round-robin across the bye window in division order, so
    every bye week holds an even number of teams and division-mates land in
    different weeks.

    Returns:
        team_id -> bye week, ordered by team id
    """
    window = config.bye_week.weeks
    pairs: List[Tuple[str, str]] = []
    for division in ALL_DIVISIONS:
        afc = directory.division_teams(Conference.AFC, division)
        nfc = directory.division_teams(Conference.NFC, division)
        for afc_team, nfc_team in zip(afc, nfc):
            pairs.append((afc_team.team_id, nfc_team.team_id))

    byes: Dict[str, int] = {}
    for index, (afc_id, nfc_id) in enumerate(pairs):
        week = window[index % len(window)]
        byes[afc_id] = week
        byes[nfc_id] = week

    logger.debug(f"Default bye weeks: {dict(sorted(Counter(byes.values()).items()))}")
    return {team_id: byes[team_id] for team_id in sorted(byes)}


def validate_bye_weeks(
    bye_weeks: Dict[str, int],
    directory: TeamDirectory,
    config: ScheduleConfig
) -> None:
    """
    Reject bye assignments that cannot produce a full schedule.

    Raises:
        InvalidByeWeekException: listing every missing, unknown or
            out-of-window entry and every week with an odd or excessive
            number of teams off
    """
    start_week = config.bye_week.start_week
    end_week = config.bye_week.end_week
    problems = []

    for team_id in directory.team_ids:
        if team_id not in bye_weeks:
            problems.append(f"{team_id} has no bye week")

    for team_id, week in sorted(bye_weeks.items()):
        if team_id not in directory:
            problems.append(f"bye week given for unknown team {team_id}")
            continue
        if not isinstance(week, int) or not start_week <= week <= end_week:
            problems.append(f"{team_id} bye week {week!r} outside window {start_week}-{end_week}")

    per_week = Counter(week for week in bye_weeks.values() if isinstance(week, int))
    for week, count in sorted(per_week.items()):
        if count % 2:
            problems.append(f"week {week} has an odd number of teams on bye ({count})")
        if count > config.bye_week.max_teams_per_week:
            problems.append(
                f"week {week} has {count} teams on bye "
                f"(max {config.bye_week.max_teams_per_week})"
            )

    if problems:
        logger.error(f"Bye week validation failed: {problems}")
        raise InvalidByeWeekException(problems, start_week, end_week)
