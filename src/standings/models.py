"""
Standings data models.

TeamStanding is an immutable value. It changes only through
``standings_calculator.fold_game`` and the ranking pass that follows the fold.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from team_registry.models import Conference, Division


class PlayoffPosition(Enum):
    """Where a team sits in its conference playoff race"""
    DIVISION_LEADER = "division_leader"
    WILDCARD = "wildcard"
    IN_HUNT = "in_hunt"


def win_percentage(wins: int, losses: int, ties: int) -> float:
    """Ties count as half a win; 0.0 with no games"""
    total = wins + losses + ties
    if total == 0:
        return 0.0
    return (wins + ties * 0.5) / total


@dataclass(frozen=True)
class HeadToHeadRecord:
    """Record against a single opponent"""
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        return win_percentage(self.wins, self.losses, self.ties)

    def to_dict(self) -> Dict[str, int]:
        return {'wins': self.wins, 'losses': self.losses, 'ties': self.ties}


@dataclass(frozen=True)
class TeamStanding:
    """Complete standing for one team"""
    team_id: str
    conference: Conference
    division: Division

    # Overall record
    wins: int = 0
    losses: int = 0
    ties: int = 0

    # Sub-records
    division_wins: int = 0
    division_losses: int = 0
    division_ties: int = 0
    conference_wins: int = 0
    conference_losses: int = 0
    conference_ties: int = 0

    points_for: int = 0
    points_against: int = 0

    head_to_head: Dict[str, HeadToHeadRecord] = field(default_factory=dict)

    # Derived after the fold
    strength_of_victory: float = 0.0   # Combined win % of teams beaten
    strength_of_schedule: float = 0.0  # Combined win % of all opponents
    net_touchdowns: int = 0            # round(point differential / 7)
    current_streak: int = 0            # +N win streak, -N losing streak, 0 after a tie

    # Ranking
    division_rank: int = 0
    conference_rank: int = 0
    playoff_position: Optional[PlayoffPosition] = None
    games_behind: float = 0.0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        return win_percentage(self.wins, self.losses, self.ties)

    @property
    def division_win_percentage(self) -> float:
        return win_percentage(self.division_wins, self.division_losses, self.division_ties)

    @property
    def conference_win_percentage(self) -> float:
        return win_percentage(self.conference_wins, self.conference_losses, self.conference_ties)

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def record_string(self) -> str:
        """Get record as string (e.g., '10-6' or '10-6-1')"""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def division_record(self) -> str:
        if self.division_ties > 0:
            return f"{self.division_wins}-{self.division_losses}-{self.division_ties}"
        return f"{self.division_wins}-{self.division_losses}"

    @property
    def conference_record(self) -> str:
        if self.conference_ties > 0:
            return f"{self.conference_wins}-{self.conference_losses}-{self.conference_ties}"
        return f"{self.conference_wins}-{self.conference_losses}"

    @property
    def streak_string(self) -> str:
        """e.g. 'W3', 'L2'; empty when there is no streak"""
        if self.current_streak > 0:
            return f"W{self.current_streak}"
        if self.current_streak < 0:
            return f"L{-self.current_streak}"
        return ""

    def head_to_head_with(self, opponent_id: str) -> Optional[HeadToHeadRecord]:
        return self.head_to_head.get(opponent_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'team_id': self.team_id,
            'conference': self.conference.value,
            'division': self.division.value,
            'wins': self.wins,
            'losses': self.losses,
            'ties': self.ties,
            'division_wins': self.division_wins,
            'division_losses': self.division_losses,
            'division_ties': self.division_ties,
            'conference_wins': self.conference_wins,
            'conference_losses': self.conference_losses,
            'conference_ties': self.conference_ties,
            'points_for': self.points_for,
            'points_against': self.points_against,
            'head_to_head': {
                opponent_id: self.head_to_head[opponent_id].to_dict()
                for opponent_id in sorted(self.head_to_head)
            },
            'strength_of_victory': self.strength_of_victory,
            'strength_of_schedule': self.strength_of_schedule,
            'net_touchdowns': self.net_touchdowns,
            'current_streak': self.current_streak,
            'division_rank': self.division_rank,
            'conference_rank': self.conference_rank,
            'playoff_position': self.playoff_position.value if self.playoff_position else None,
            'games_behind': self.games_behind,
        }


@dataclass(frozen=True)
class LeagueStandings:
    """Standings for every team, keyed by team id in id order"""
    standings: Dict[str, TeamStanding]

    def get(self, team_id: str) -> TeamStanding:
        try:
            return self.standings[team_id]
        except KeyError:
            raise KeyError(f"No standing for team {team_id!r}") from None

    @property
    def teams(self) -> List[TeamStanding]:
        return list(self.standings.values())

    def to_dict(self) -> Dict[str, Any]:
        return {team_id: self.standings[team_id].to_dict() for team_id in sorted(self.standings)}


@dataclass(frozen=True)
class PlayoffSeed:
    """One conference playoff seed"""
    seed: int
    team_id: str
    conference: Conference
    record: str
    win_percentage: float
    division_winner: bool


@dataclass(frozen=True)
class PlayoffTeams:
    """Division winners (seeded) and wild cards per conference"""
    division_winners: Dict[Conference, List[str]]
    wild_cards: Dict[Conference, List[str]]

    def seeded(self, conference: Conference) -> List[str]:
        """All playoff team ids for a conference in seed order"""
        return list(self.division_winners[conference]) + list(self.wild_cards[conference])
