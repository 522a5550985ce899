"""
Division rotation tables.

Division indices: East=0, North=1, South=2, West=3.

Intra-conference rotation is a 3-year cycle; each row is one division and
each column a value of ``year % 3``. Every column is a pairing: if East plays
South, South plays East.

Inter-conference rotation is a 4-year cycle keyed by AFC division; the NFC
side is the reverse lookup of the same column.

| year % 4 | AFC East | AFC North | AFC South | AFC West |
|----------|----------|-----------|-----------|----------|
| 0        | NFC West | NFC South | NFC North | NFC East |
| 1        | NFC South| NFC North | NFC East  | NFC West |
| 2        | NFC North| NFC East  | NFC West  | NFC South|
| 3        | NFC East | NFC West  | NFC South | NFC North|
"""

from typing import List, Tuple

from team_registry.models import Conference, Division


INTRA_ROTATION: List[List[int]] = [
    [2, 1, 3],  # East  -> South, North, West
    [3, 0, 2],  # North -> West, East, South
    [0, 3, 1],  # South -> East, West, North
    [1, 2, 0],  # West  -> North, South, East
]

INTER_ROTATION_AFC: List[List[int]] = [
    [3, 2, 1, 0],  # AFC East
    [2, 1, 0, 3],  # AFC North
    [1, 0, 3, 2],  # AFC South
    [0, 3, 2, 1],  # AFC West
]

# Extra cross-conference game repeats the inter-conference pairing from two years back
EXTRA_GAME_YEAR_OFFSET = 2


def intra_conference_division(division: Division, year: int) -> Division:
    """Same-conference division played in full this year."""
    return Division.from_index(INTRA_ROTATION[division.index][year % 3])


def inter_conference_division(
    conference: Conference,
    division: Division,
    year: int
) -> Tuple[Conference, Division]:
    """Opposite-conference division played in full this year."""
    column = year % 4
    if conference is Conference.AFC:
        return Conference.NFC, Division.from_index(INTER_ROTATION_AFC[division.index][column])

    for afc_index, row in enumerate(INTER_ROTATION_AFC):
        if row[column] == division.index:
            return Conference.AFC, Division.from_index(afc_index)
    raise ValueError(f"Inter-conference rotation lookup failed for NFC {division.value} in {year}")


def extra_game_division(
    conference: Conference,
    division: Division,
    year: int
) -> Tuple[Conference, Division]:
    """Opposite-conference division supplying the single extra game."""
    return inter_conference_division(conference, division, year - EXTRA_GAME_YEAR_OFFSET)


def same_place_divisions(division: Division, year: int) -> List[Division]:
    """
    The two same-conference divisions not covered by the intra rotation.

    Returned in division-index order.
    """
    rotation_target = intra_conference_division(division, year)
    return [
        candidate for candidate in (Division.EAST, Division.NORTH, Division.SOUTH, Division.WEST)
        if candidate is not division and candidate is not rotation_target
    ]
