"""
Game Assembler

Turns opponent sets into deduplicated game records with home/away decided.

Divisional pairs yield two games keyed by the ordered (home, away) tuple so
each rival hosts once. Every other category yields a single game keyed by
the sorted pair, so the same pairing discovered from either team collapses
to one game.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Set, Tuple

from team_registry.team_directory import TeamDirectory

from .models import CATEGORY_ORDER, GameCategory, ScheduledGame
from .opponent_builder import OpponentSet


def stable_label_hash(label: str) -> int:
    """32-bit polynomial string hash, identical across processes"""
    value = 0
    for char in label:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    return value


def choose_home_team(team_a: str, team_b: str, label: str) -> Tuple[str, str]:
    """
    Pick (home, away) for a single-game pairing.

    The ids are sorted, then the parity of the category label hash selects
    the first (even) or second (odd) as host.
    """
    first, second = sorted((team_a, team_b))
    if stable_label_hash(label) % 2 == 0:
        return first, second
    return second, first


class GameAssembler:
    """
    Assemble the season's games from per-team opponent sets.

    Args:
        directory: League roster, used for conference flags
        year: Season year, used in game ids
    """

    def __init__(self, directory: TeamDirectory, year: int):
        self.directory = directory
        self.year = year
        self.logger = logging.getLogger(__name__)

    def _make_game(
        self,
        category: GameCategory,
        sequence: int,
        home_id: str,
        away_id: str
    ) -> ScheduledGame:
        is_divisional = category is GameCategory.DIVISIONAL
        return ScheduledGame(
            game_id=f"{self.year}-{category.code}-{sequence:03d}",
            home_team_id=home_id,
            away_team_id=away_id,
            category=category,
            is_divisional=is_divisional,
            is_conference=self.directory.same_conference(home_id, away_id),
            is_rivalry=is_divisional,
        )

    def assemble(self, opponent_sets: Dict[str, OpponentSet]) -> List[ScheduledGame]:
        """
        Build games for every team, in team-id then category order.

        Returns:
            Games with ``week`` unset
        """
        games: List[ScheduledGame] = []
        seen_keys: Set[Tuple[str, str]] = set()
        sequence: Dict[GameCategory, int] = defaultdict(int)

        for team_id in sorted(opponent_sets):
            grouped = opponent_sets[team_id].by_category()
            for category in CATEGORY_ORDER:
                for opponent_id in grouped[category]:
                    if category is GameCategory.DIVISIONAL:
                        matchups = [(team_id, opponent_id), (opponent_id, team_id)]
                        for home_id, away_id in matchups:
                            if (home_id, away_id) in seen_keys:
                                continue
                            seen_keys.add((home_id, away_id))
                            sequence[category] += 1
                            games.append(self._make_game(category, sequence[category], home_id, away_id))
                    else:
                        key = tuple(sorted((team_id, opponent_id)))
                        if key in seen_keys:
                            continue
                        seen_keys.add(key)
                        home_id, away_id = choose_home_team(team_id, opponent_id, category.value)
                        sequence[category] += 1
                        games.append(self._make_game(category, sequence[category], home_id, away_id))

        self.logger.debug(
            f"{self.year}: assembled {len(games)} games "
            + ", ".join(f"{category.value}={sequence[category]}" for category in CATEGORY_ORDER)
        )
        return games
