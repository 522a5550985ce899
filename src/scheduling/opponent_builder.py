"""
Opponent Set Builder

Derives each team's 17 opponents from five structural categories:

- Divisional: the three division rivals (played twice each)
- Intra-conference rotation: one full same-conference division (3-year cycle)
- Inter-conference rotation: one full opposite-conference division (4-year cycle)
- Same-place: one team from each of the two remaining same-conference
  divisions, matched on last season's finish position
- Extra: one opposite-conference team from the division played two years
  ago, matched on finish position

Finish position is the index of a team in its division's previous-standings
list. A team missing from that list (expansion team) is treated as the
division winner, position 0.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from team_registry.models import ALL_CONFERENCES, ALL_DIVISIONS, Conference, Division, Team
from team_registry.team_directory import TeamDirectory

from .models import GameCategory, PreviousYearStandings
from .rotations import (
    extra_game_division,
    inter_conference_division,
    intra_conference_division,
    same_place_divisions,
)


@dataclass
class OpponentSet:
    """Opponents for one team, grouped by category"""
    team_id: str
    divisional: List[str] = field(default_factory=list)
    intra_conference: List[str] = field(default_factory=list)
    inter_conference: List[str] = field(default_factory=list)
    same_place: List[str] = field(default_factory=list)
    extra: List[str] = field(default_factory=list)

    def by_category(self) -> Dict[GameCategory, List[str]]:
        return {
            GameCategory.DIVISIONAL: self.divisional,
            GameCategory.INTRA_CONFERENCE: self.intra_conference,
            GameCategory.INTER_CONFERENCE: self.inter_conference,
            GameCategory.SAME_PLACE: self.same_place,
            GameCategory.EXTRA: self.extra,
        }

    def all_opponents(self) -> List[str]:
        """Distinct opponents in category order"""
        result = []
        for opponents in self.by_category().values():
            result.extend(opponents)
        return result

    def category_of(self, opponent_id: str) -> Optional[GameCategory]:
        for category, opponents in self.by_category().items():
            if opponent_id in opponents:
                return category
        return None

    @property
    def game_count(self) -> int:
        """Games implied by this set (divisional opponents count twice)"""
        return sum(
            len(opponents) * category.games_per_pair
            for category, opponents in self.by_category().items()
        )


def create_default_previous_standings(directory: TeamDirectory) -> PreviousYearStandings:
    """
    Previous standings for a league with no history.

    Each division is ordered by team id so the result is deterministic.
    """
    standings: PreviousYearStandings = {}
    for conference in ALL_CONFERENCES:
        standings[conference] = {}
        for division in ALL_DIVISIONS:
            standings[conference][division] = sorted(
                team.team_id for team in directory.division_teams(conference, division)
            )
    return standings


class OpponentSetBuilder:
    """
    Builds per-team opponent sets for one season.

    Args:
        directory: League roster
        previous_standings: Last season's division finish order
        year: Season year (drives the rotation tables)
    """

    def __init__(
        self,
        directory: TeamDirectory,
        previous_standings: PreviousYearStandings,
        year: int
    ):
        self.directory = directory
        self.previous_standings = previous_standings
        self.year = year
        self.logger = logging.getLogger(__name__)

    def finish_position(self, team: Team) -> int:
        """0-based finish in the team's division last season; 0 when unknown"""
        order = self._division_order(team.conference, team.division)
        if team.team_id in order:
            return order.index(team.team_id)
        return 0

    def _division_order(self, conference: Conference, division: Division) -> List[str]:
        return list(self.previous_standings.get(conference, {}).get(division, []))

    def _team_at_position(
        self,
        conference: Conference,
        division: Division,
        position: int
    ) -> Optional[str]:
        order = self._division_order(conference, division)
        if position >= len(order):
            return None
        team_id = order[position]
        if team_id not in self.directory:
            return None
        return team_id

    def build(self, team_id: str) -> OpponentSet:
        """Build the five opponent groups for one team."""
        team = self.directory.get_team(team_id)
        opponents = OpponentSet(team_id=team_id)
        position = self.finish_position(team)

        # Divisional
        opponents.divisional = [
            rival.team_id
            for rival in self.directory.division_teams(team.conference, team.division)
            if rival.team_id != team_id
        ]

        # Intra-conference rotation
        intra_division = intra_conference_division(team.division, self.year)
        opponents.intra_conference = [
            opponent.team_id
            for opponent in self.directory.division_teams(team.conference, intra_division)
        ]

        # Inter-conference rotation
        inter_conference, inter_division = inter_conference_division(
            team.conference, team.division, self.year
        )
        opponents.inter_conference = [
            opponent.team_id
            for opponent in self.directory.division_teams(inter_conference, inter_division)
        ]

        # Same-place, one per remaining same-conference division
        for division in same_place_divisions(team.division, self.year):
            opponent_id = self._team_at_position(team.conference, division, position)
            if opponent_id is None:
                self.logger.warning(
                    f"{self.year}: no same-place opponent for {team_id} in "
                    f"{team.conference.value} {division.value} at position {position}"
                )
                continue
            opponents.same_place.append(opponent_id)

        # Extra cross-conference game
        extra_conference, extra_division = extra_game_division(
            team.conference, team.division, self.year
        )
        opponent_id = self._team_at_position(extra_conference, extra_division, position)
        if opponent_id is None:
            self.logger.warning(
                f"{self.year}: no extra-game opponent for {team_id} in "
                f"{extra_conference.value} {extra_division.value} at position {position}"
            )
        else:
            opponents.extra.append(opponent_id)

        return opponents

    def build_all(self) -> Dict[str, OpponentSet]:
        """Opponent sets for every team, keyed by team id in id order"""
        result = {team.team_id: self.build(team.team_id) for team in self.directory.teams}
        self.logger.debug(
            f"{self.year}: built opponent sets for {len(result)} teams"
        )
        return result
