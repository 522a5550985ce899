"""
League structure types.

Teams are immutable identities. Conference and division membership never
changes during a season.
"""

from dataclasses import dataclass
from enum import Enum


class Conference(Enum):
    """League conferences"""
    AFC = "AFC"
    NFC = "NFC"

    @property
    def opponent(self) -> 'Conference':
        """The opposite conference"""
        return Conference.NFC if self is Conference.AFC else Conference.AFC


class Division(Enum):
    """Divisions within a conference, in rotation-table order"""
    EAST = "East"
    NORTH = "North"
    SOUTH = "South"
    WEST = "West"

    @property
    def index(self) -> int:
        """Position of this division in the rotation tables (East=0 .. West=3)"""
        return _DIVISION_ORDER.index(self)

    @classmethod
    def from_index(cls, index: int) -> 'Division':
        return _DIVISION_ORDER[index]


_DIVISION_ORDER = (Division.EAST, Division.NORTH, Division.SOUTH, Division.WEST)

ALL_CONFERENCES = (Conference.AFC, Conference.NFC)
ALL_DIVISIONS = _DIVISION_ORDER


@dataclass(frozen=True)
class Team:
    """Team identity with its conference/division membership"""
    team_id: str
    conference: Conference
    division: Division
    city: str = ""
    nickname: str = ""

    @property
    def full_name(self) -> str:
        if self.city and self.nickname:
            return f"{self.city} {self.nickname}"
        return self.nickname or self.city or self.team_id

    @property
    def division_name(self) -> str:
        """Display name such as 'AFC East'"""
        return f"{self.conference.value} {self.division.value}"
