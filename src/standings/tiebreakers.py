"""
Tiebreak Resolver

Orders teams with a cascade of comparison criteria. Each criterion is
consulted only when every earlier one was level; the last criterion (team
id) always discriminates, so any set of teams gets a total order.

Division cascade (teams in one division):
    1. Win percentage
    2. Head-to-head win percentage (only if the two teams have met)
    3. Division win percentage
    4. Conference win percentage
    5. Strength of victory
    6. Strength of schedule
    7. Point differential
    8. Net touchdowns
    9. Team id (stands in for the coin flip)

Wildcard cascade (teams across divisions): the same without step 3.
"""

from functools import cmp_to_key
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
import logging

from .models import TeamStanding


Comparator = Callable[[TeamStanding, TeamStanding], int]


def _higher_first(value_a, value_b) -> int:
    """Negative when ``value_a`` is larger, so that team sorts first"""
    return (value_b > value_a) - (value_b < value_a)


def compare_win_percentage(a: TeamStanding, b: TeamStanding) -> int:
    return _higher_first(a.win_percentage, b.win_percentage)


def compare_head_to_head(a: TeamStanding, b: TeamStanding) -> int:
    a_record = a.head_to_head.get(b.team_id)
    b_record = b.head_to_head.get(a.team_id)
    if a_record is None or b_record is None:
        return 0
    return _higher_first(a_record.win_percentage, b_record.win_percentage)


def compare_division_record(a: TeamStanding, b: TeamStanding) -> int:
    return _higher_first(a.division_win_percentage, b.division_win_percentage)


def compare_conference_record(a: TeamStanding, b: TeamStanding) -> int:
    return _higher_first(a.conference_win_percentage, b.conference_win_percentage)


def compare_strength_of_victory(a: TeamStanding, b: TeamStanding) -> int:
    return _higher_first(a.strength_of_victory, b.strength_of_victory)


def compare_strength_of_schedule(a: TeamStanding, b: TeamStanding) -> int:
    return _higher_first(a.strength_of_schedule, b.strength_of_schedule)


def compare_point_differential(a: TeamStanding, b: TeamStanding) -> int:
    return _higher_first(a.point_differential, b.point_differential)


def compare_net_touchdowns(a: TeamStanding, b: TeamStanding) -> int:
    return _higher_first(a.net_touchdowns, b.net_touchdowns)


def compare_team_id(a: TeamStanding, b: TeamStanding) -> int:
    return (a.team_id > b.team_id) - (a.team_id < b.team_id)


DIVISION_CASCADE: Tuple[Tuple[str, Comparator], ...] = (
    ("win_percentage", compare_win_percentage),
    ("head_to_head", compare_head_to_head),
    ("division_record", compare_division_record),
    ("conference_record", compare_conference_record),
    ("strength_of_victory", compare_strength_of_victory),
    ("strength_of_schedule", compare_strength_of_schedule),
    ("point_differential", compare_point_differential),
    ("net_touchdowns", compare_net_touchdowns),
    ("team_id", compare_team_id),
)

WILDCARD_CASCADE: Tuple[Tuple[str, Comparator], ...] = tuple(
    step for step in DIVISION_CASCADE if step[0] != "division_record"
)


class TiebreakResolver:
    """
    Sorts standings with the division or wildcard cascade.

    Sorting is stable and the input is first put in team-id order, so the
    result does not depend on the order teams were passed in.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def compare(
        a: TeamStanding,
        b: TeamStanding,
        cascade: Sequence[Tuple[str, Comparator]]
    ) -> int:
        for _, comparator in cascade:
            result = comparator(a, b)
            if result != 0:
                return result
        return 0

    def sort(
        self,
        standings: Iterable[TeamStanding],
        cascade: Sequence[Tuple[str, Comparator]]
    ) -> List[TeamStanding]:
        ordered = sorted(standings, key=lambda standing: standing.team_id)
        result = sorted(ordered, key=cmp_to_key(lambda a, b: self.compare(a, b, cascade)))

        if self.logger.isEnabledFor(logging.DEBUG):
            for higher, lower in zip(result, result[1:]):
                criterion = self.deciding_criterion(higher, lower, cascade)
                if criterion != "win_percentage":
                    self.logger.debug(
                        f"{higher.team_id} ahead of {lower.team_id} on {criterion}"
                    )
        return result

    def sort_division(self, standings: Iterable[TeamStanding]) -> List[TeamStanding]:
        """Order teams from one division, best first"""
        return self.sort(standings, DIVISION_CASCADE)

    def sort_wildcard(self, standings: Iterable[TeamStanding]) -> List[TeamStanding]:
        """Order teams from any divisions of a conference, best first"""
        return self.sort(standings, WILDCARD_CASCADE)

    @staticmethod
    def deciding_criterion(
        a: TeamStanding,
        b: TeamStanding,
        cascade: Sequence[Tuple[str, Comparator]] = DIVISION_CASCADE
    ) -> Optional[str]:
        """
        Name of the first criterion that separates two teams.

        Returns:
            Criterion name, or None when comparing a team with itself
        """
        for name, comparator in cascade:
            if comparator(a, b) != 0:
                return name
        return None
