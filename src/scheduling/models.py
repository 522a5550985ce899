"""
Schedule data models.

ScheduledGame and SeasonSchedule are immutable values. Week assignment and
result recording return new instances instead of editing in place.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from team_registry.models import Conference, Division


# conference -> division -> team ids, best finish first
PreviousYearStandings = Dict[Conference, Dict[Division, List[str]]]


class GameCategory(Enum):
    """Structural category a game was generated from"""
    DIVISIONAL = "divisional"
    INTRA_CONFERENCE = "intra_conference"
    INTER_CONFERENCE = "inter_conference"
    SAME_PLACE = "same_place"
    EXTRA = "extra_cross_conference"

    @property
    def code(self) -> str:
        """Short code used in game ids"""
        return _CATEGORY_CODES[self]

    @property
    def games_per_pair(self) -> int:
        return 2 if self is GameCategory.DIVISIONAL else 1


_CATEGORY_CODES = {
    GameCategory.DIVISIONAL: "DIV",
    GameCategory.INTRA_CONFERENCE: "ICR",
    GameCategory.INTER_CONFERENCE: "XCR",
    GameCategory.SAME_PLACE: "SPL",
    GameCategory.EXTRA: "EXT",
}

# Declared order; opponent sets and assembly iterate categories this way
CATEGORY_ORDER = (
    GameCategory.DIVISIONAL,
    GameCategory.INTRA_CONFERENCE,
    GameCategory.INTER_CONFERENCE,
    GameCategory.SAME_PLACE,
    GameCategory.EXTRA,
)

# Expected opponent-game counts per team for each category
CATEGORY_GAME_COUNTS = {
    GameCategory.DIVISIONAL: 6,
    GameCategory.INTRA_CONFERENCE: 4,
    GameCategory.INTER_CONFERENCE: 4,
    GameCategory.SAME_PLACE: 2,
    GameCategory.EXTRA: 1,
}

LATE_DIVISIONAL_SLOTS = ['sunday_night', 'monday_night', 'late_sunday']
STANDARD_SLOTS = ['early_sunday', 'early_sunday', 'early_sunday', 'late_sunday', 'sunday_night']


@dataclass(frozen=True)
class ScheduledGame:
    """
    A single regular-season game.

    ``week`` is None until week assignment. Result fields are set once via
    ``with_result``; a completed game is never edited again.
    """
    game_id: str
    home_team_id: str
    away_team_id: str
    category: GameCategory
    is_divisional: bool = False
    is_conference: bool = False
    is_rivalry: bool = False
    week: Optional[int] = None

    # Result
    is_complete: bool = False
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[str] = None

    @property
    def team_ids(self) -> Tuple[str, str]:
        return (self.home_team_id, self.away_team_id)

    @property
    def pair_key(self) -> Tuple[str, str]:
        """Canonical (sorted) team pair"""
        return tuple(sorted(self.team_ids))

    @property
    def time_slot(self) -> Optional[str]:
        """Broadcast slot derived from week and divisional status"""
        if self.week is None:
            return None
        if self.week == 1:
            return 'sunday_night'
        if self.is_divisional and self.week >= 10:
            return LATE_DIVISIONAL_SLOTS[self.week % 3]
        return STANDARD_SLOTS[self.week % 5]

    @property
    def is_tie(self) -> bool:
        return self.is_complete and self.winner_id is None

    @property
    def loser_id(self) -> Optional[str]:
        if not self.is_complete or self.winner_id is None:
            return None
        return self.away_team_id if self.winner_id == self.home_team_id else self.home_team_id

    def involves(self, team_id: str) -> bool:
        return team_id == self.home_team_id or team_id == self.away_team_id

    def opponent_of(self, team_id: str) -> str:
        if team_id == self.home_team_id:
            return self.away_team_id
        if team_id == self.away_team_id:
            return self.home_team_id
        raise ValueError(f"Team {team_id} does not play in game {self.game_id}")

    def points_for(self, team_id: str) -> int:
        return self.home_score if team_id == self.home_team_id else self.away_score

    def points_against(self, team_id: str) -> int:
        return self.away_score if team_id == self.home_team_id else self.home_score

    def with_week(self, week: Optional[int]) -> 'ScheduledGame':
        return replace(self, week=week)

    def with_result(self, home_score: int, away_score: int) -> 'ScheduledGame':
        """Return the completed game; higher score wins, equal scores tie"""
        if home_score > away_score:
            winner = self.home_team_id
        elif away_score > home_score:
            winner = self.away_team_id
        else:
            winner = None
        return replace(
            self,
            is_complete=True,
            home_score=home_score,
            away_score=away_score,
            winner_id=winner
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game_id': self.game_id,
            'week': self.week,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'category': self.category.value,
            'is_divisional': self.is_divisional,
            'is_conference': self.is_conference,
            'is_rivalry': self.is_rivalry,
            'time_slot': self.time_slot,
            'is_complete': self.is_complete,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'winner_id': self.winner_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduledGame':
        return cls(
            game_id=data['game_id'],
            home_team_id=data['home_team_id'],
            away_team_id=data['away_team_id'],
            category=GameCategory(data['category']),
            is_divisional=data.get('is_divisional', False),
            is_conference=data.get('is_conference', False),
            is_rivalry=data.get('is_rivalry', False),
            week=data.get('week'),
            is_complete=data.get('is_complete', False),
            home_score=data.get('home_score'),
            away_score=data.get('away_score'),
            winner_id=data.get('winner_id')
        )


def game_sort_key(game: ScheduledGame) -> Tuple[int, str]:
    """Order games by week (unassigned last), then id"""
    return (game.week if game.week is not None else 10 ** 6, game.game_id)


@dataclass(frozen=True)
class SeasonSchedule:
    """Full regular-season schedule for one year"""
    year: int
    games: Tuple[ScheduledGame, ...]
    bye_weeks: Dict[str, int] = field(default_factory=dict)
    playoff_bracket_id: Optional[str] = None

    @property
    def game_index(self) -> Dict[str, int]:
        """game_id -> position in ``games``"""
        return {game.game_id: index for index, game in enumerate(self.games)}

    @property
    def total_weeks(self) -> int:
        weeks = [game.week for game in self.games if game.week is not None]
        return max(weeks) if weeks else 0

    def replace_game(self, game: ScheduledGame) -> 'SeasonSchedule':
        """Return a schedule with the game of the same id swapped out"""
        index = self.game_index[game.game_id]
        games = self.games[:index] + (game,) + self.games[index + 1:]
        return replace(self, games=games)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'year': self.year,
            'games': [game.to_dict() for game in self.games],
            'bye_weeks': {team_id: self.bye_weeks[team_id] for team_id in sorted(self.bye_weeks)},
            'playoff_bracket_id': self.playoff_bracket_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SeasonSchedule':
        return cls(
            year=data['year'],
            games=tuple(ScheduledGame.from_dict(game) for game in data['games']),
            bye_weeks=dict(data.get('bye_weeks', {})),
            playoff_bracket_id=data.get('playoff_bracket_id')
        )
