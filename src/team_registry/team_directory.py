"""
Team Directory

Single source of truth for conference/division membership. Scheduling and
standings only read from it.

Usage Example:
    from team_registry import create_default_league

    directory = create_default_league()
    rivals = directory.division_teams(Conference.AFC, Division.EAST)
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Tuple

from .models import ALL_CONFERENCES, ALL_DIVISIONS, Conference, Division, Team
from .registry_exceptions import InvalidTeamRosterException


logger = logging.getLogger(__name__)


CONFERENCE_COUNT = 2
DIVISIONS_PER_CONFERENCE = 4
TEAMS_PER_DIVISION = 4

# (conference, division) -> [(team_id, city, nickname), ...]
STANDARD_LEAGUE: Dict[Tuple[str, str], List[Tuple[str, str, str]]] = {
    ("AFC", "East"): [
        ("BUF", "Buffalo", "Bills"),
        ("MIA", "Miami", "Dolphins"),
        ("NE", "New England", "Patriots"),
        ("NYJ", "New York", "Jets"),
    ],
    ("AFC", "North"): [
        ("BAL", "Baltimore", "Ravens"),
        ("CIN", "Cincinnati", "Bengals"),
        ("CLE", "Cleveland", "Browns"),
        ("PIT", "Pittsburgh", "Steelers"),
    ],
    ("AFC", "South"): [
        ("HOU", "Houston", "Texans"),
        ("IND", "Indianapolis", "Colts"),
        ("JAX", "Jacksonville", "Jaguars"),
        ("TEN", "Tennessee", "Titans"),
    ],
    ("AFC", "West"): [
        ("DEN", "Denver", "Broncos"),
        ("KC", "Kansas City", "Chiefs"),
        ("LAC", "Los Angeles", "Chargers"),
        ("LV", "Las Vegas", "Raiders"),
    ],
    ("NFC", "East"): [
        ("DAL", "Dallas", "Cowboys"),
        ("NYG", "New York", "Giants"),
        ("PHI", "Philadelphia", "Eagles"),
        ("WAS", "Washington", "Commanders"),
    ],
    ("NFC", "North"): [
        ("CHI", "Chicago", "Bears"),
        ("DET", "Detroit", "Lions"),
        ("GB", "Green Bay", "Packers"),
        ("MIN", "Minnesota", "Vikings"),
    ],
    ("NFC", "South"): [
        ("ATL", "Atlanta", "Falcons"),
        ("CAR", "Carolina", "Panthers"),
        ("NO", "New Orleans", "Saints"),
        ("TB", "Tampa Bay", "Buccaneers"),
    ],
    ("NFC", "West"): [
        ("ARI", "Arizona", "Cardinals"),
        ("LAR", "Los Angeles", "Rams"),
        ("SEA", "Seattle", "Seahawks"),
        ("SF", "San Francisco", "49ers"),
    ],
}


class TeamDirectory:
    """
    Read-only roster of teams with conference/division lookups.

    The roster is validated on construction; an invalid roster raises
    InvalidTeamRosterException listing every problem found.
    """

    def __init__(self, teams: Iterable[Team]):
        teams = list(teams)
        self._validate(teams)

        self._teams: Dict[str, Team] = {
            team.team_id: team for team in sorted(teams, key=lambda t: t.team_id)
        }
        self._divisions: Dict[Tuple[Conference, Division], List[Team]] = defaultdict(list)
        for team in self._teams.values():
            self._divisions[(team.conference, team.division)].append(team)

        logger.debug(f"TeamDirectory built with {len(self._teams)} teams")

    @staticmethod
    def _validate(teams: List[Team]) -> None:
        problems = []

        seen = set()
        for team in teams:
            if team.team_id in seen:
                problems.append(f"duplicate team id '{team.team_id}'")
            seen.add(team.team_id)
            if not team.team_id:
                problems.append("team with empty id")

        counts: Dict[Tuple[Conference, Division], int] = defaultdict(int)
        for team in teams:
            counts[(team.conference, team.division)] += 1

        for conference in ALL_CONFERENCES:
            for division in ALL_DIVISIONS:
                count = counts.get((conference, division), 0)
                if count != TEAMS_PER_DIVISION:
                    problems.append(
                        f"{conference.value} {division.value} has {count} teams, "
                        f"expected {TEAMS_PER_DIVISION}"
                    )

        if problems:
            logger.error(f"Team roster rejected: {problems}")
            raise InvalidTeamRosterException(problems)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def teams(self) -> List[Team]:
        """All teams, sorted by id"""
        return list(self._teams.values())

    @property
    def team_ids(self) -> List[str]:
        return list(self._teams.keys())

    def get_team(self, team_id: str) -> Team:
        try:
            return self._teams[team_id]
        except KeyError:
            raise KeyError(f"Unknown team id: {team_id!r}") from None

    def division_teams(self, conference: Conference, division: Division) -> List[Team]:
        """Teams in one division, sorted by id"""
        return list(self._divisions[(conference, division)])

    def conference_teams(self, conference: Conference) -> List[Team]:
        return [team for team in self._teams.values() if team.conference is conference]

    def division_of(self, team_id: str) -> Tuple[Conference, Division]:
        team = self.get_team(team_id)
        return team.conference, team.division

    def are_division_rivals(self, team_a: str, team_b: str) -> bool:
        if team_a == team_b:
            return False
        return self.division_of(team_a) == self.division_of(team_b)

    def same_conference(self, team_a: str, team_b: str) -> bool:
        return self.get_team(team_a).conference is self.get_team(team_b).conference

    def __len__(self) -> int:
        return len(self._teams)

    def __iter__(self) -> Iterator[Team]:
        return iter(self._teams.values())

    def __contains__(self, team_id: object) -> bool:
        return team_id in self._teams


def create_default_league() -> TeamDirectory:
    """Build the standard 32-team league directory."""
    teams = []
    for (conference, division), members in STANDARD_LEAGUE.items():
        for team_id, city, nickname in members:
            teams.append(Team(
                team_id=team_id,
                conference=Conference(conference),
                division=Division(division),
                city=city,
                nickname=nickname,
            ))
    return TeamDirectory(teams)
