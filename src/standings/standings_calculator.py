"""
Standings Engine

Computes standings as a pure function of the completed games and the league
roster. Standings are always rebuilt from the full game list rather than
patched, so recomputing twice from the same games gives identical values.

Steps:
1. Fold every completed game (in week order) into both teams' standings
2. Strength of victory / schedule from the folded records (one pass, not
   recursive)
3. Division ranks and games behind
4. Conference ranks and playoff positions
"""

from collections import defaultdict
from dataclasses import replace
from typing import Dict, Iterable, List, Tuple
import logging
import math

from scheduling.models import ScheduledGame, game_sort_key
from team_registry.models import ALL_CONFERENCES, ALL_DIVISIONS, Conference, Division
from team_registry.team_directory import TeamDirectory

from .models import HeadToHeadRecord, LeagueStandings, PlayoffPosition, TeamStanding, win_percentage
from .tiebreakers import TiebreakResolver


POINTS_PER_TOUCHDOWN = 7
WILDCARD_SPOTS = 3


def round_half_up(value: float) -> int:
    """Round .5 toward positive infinity (-1.5 -> -1, 1.5 -> 2)"""
    return int(math.floor(value + 0.5))


def _next_streak(streak: int, outcome: int) -> int:
    if outcome == 0:
        return 0
    if outcome > 0:
        return streak + 1 if streak > 0 else 1
    return streak - 1 if streak < 0 else -1


def fold_game(standing: TeamStanding, game: ScheduledGame) -> TeamStanding:
    """
    Apply one completed game to a team's standing.

    Args:
        standing: Standing before the game
        game: Completed game involving ``standing.team_id``

    Returns:
        New standing including the game
    """
    if not game.is_complete:
        raise ValueError(f"Game {game.game_id} is not complete")

    team_id = standing.team_id
    opponent_id = game.opponent_of(team_id)
    scored = game.points_for(team_id)
    allowed = game.points_against(team_id)

    if game.winner_id is None:
        outcome = 0
    elif game.winner_id == team_id:
        outcome = 1
    else:
        outcome = -1

    won, lost, tied = int(outcome > 0), int(outcome < 0), int(outcome == 0)

    previous = standing.head_to_head.get(opponent_id, HeadToHeadRecord())
    head_to_head = dict(standing.head_to_head)
    head_to_head[opponent_id] = HeadToHeadRecord(
        wins=previous.wins + won,
        losses=previous.losses + lost,
        ties=previous.ties + tied
    )

    changes = dict(
        wins=standing.wins + won,
        losses=standing.losses + lost,
        ties=standing.ties + tied,
        points_for=standing.points_for + scored,
        points_against=standing.points_against + allowed,
        head_to_head=head_to_head,
        current_streak=_next_streak(standing.current_streak, outcome),
    )

    if game.is_divisional:
        changes.update(
            division_wins=standing.division_wins + won,
            division_losses=standing.division_losses + lost,
            division_ties=standing.division_ties + tied,
        )

    if game.is_conference:
        changes.update(
            conference_wins=standing.conference_wins + won,
            conference_losses=standing.conference_losses + lost,
            conference_ties=standing.conference_ties + tied,
        )

    point_differential = changes['points_for'] - changes['points_against']
    changes['net_touchdowns'] = round_half_up(point_differential / POINTS_PER_TOUCHDOWN)

    return replace(standing, **changes)


def _combined_win_percentage(team_ids: Iterable[str], standings: Dict[str, TeamStanding]) -> float:
    wins = losses = ties = 0
    for team_id in team_ids:
        opponent = standings.get(team_id)
        if opponent is None:
            continue
        wins += opponent.wins
        losses += opponent.losses
        ties += opponent.ties
    return win_percentage(wins, losses, ties)


class StandingsEngine:
    """
    Builds league standings from completed games.

    Attributes:
        directory: League roster
        resolver: Tiebreak resolver used for ranking
    """

    def __init__(self, directory: TeamDirectory, resolver: TiebreakResolver = None):
        self.directory = directory
        self.resolver = resolver or TiebreakResolver()
        self.logger = logging.getLogger(__name__)

    def _empty_standings(self) -> Dict[str, TeamStanding]:
        return {
            team.team_id: TeamStanding(
                team_id=team.team_id,
                conference=team.conference,
                division=team.division
            )
            for team in self.directory.teams
        }

    def fold(self, games: Iterable[ScheduledGame]) -> Dict[str, TeamStanding]:
        """Fold completed games (week order) into fresh standings"""
        standings = self._empty_standings()
        completed = sorted((game for game in games if game.is_complete), key=game_sort_key)

        for game in completed:
            for team_id in game.team_ids:
                if team_id not in standings:
                    raise KeyError(f"Game {game.game_id} references unknown team {team_id!r}")
                standings[team_id] = fold_game(standings[team_id], game)

        return standings

    @staticmethod
    def apply_strength_metrics(standings: Dict[str, TeamStanding]) -> Dict[str, TeamStanding]:
        """Strength of victory and schedule from the folded records"""
        result = {}
        for team_id, standing in standings.items():
            beaten = [
                opponent_id for opponent_id, record in standing.head_to_head.items()
                if record.wins > 0
            ]
            result[team_id] = replace(
                standing,
                strength_of_victory=_combined_win_percentage(beaten, standings),
                strength_of_schedule=_combined_win_percentage(standing.head_to_head, standings)
            )
        return result

    def _rank_divisions(
        self,
        standings: Dict[str, TeamStanding]
    ) -> Dict[Tuple[Conference, Division], List[TeamStanding]]:
        grouped: Dict[Tuple[Conference, Division], List[TeamStanding]] = defaultdict(list)
        for standing in standings.values():
            grouped[(standing.conference, standing.division)].append(standing)

        divisions = {}
        for conference in ALL_CONFERENCES:
            for division in ALL_DIVISIONS:
                ordered = self.resolver.sort_division(grouped[(conference, division)])
                if not ordered:
                    divisions[(conference, division)] = []
                    continue

                leader = ordered[0]
                ranked = []
                for index, standing in enumerate(ordered):
                    average_games = (standing.games_played + leader.games_played) / 2
                    games_behind = max(
                        0.0, (leader.win_percentage - standing.win_percentage) * average_games
                    )
                    ranked.append(replace(
                        standing, division_rank=index + 1, games_behind=games_behind
                    ))
                divisions[(conference, division)] = ranked
        return divisions

    def _rank_conference(self, divisions: List[List[TeamStanding]]) -> List[TeamStanding]:
        leaders = [division[0] for division in divisions if division]
        others = [standing for division in divisions for standing in division[1:]]

        ranked = []
        for index, standing in enumerate(self.resolver.sort_wildcard(leaders)):
            ranked.append(replace(
                standing,
                conference_rank=index + 1,
                playoff_position=PlayoffPosition.DIVISION_LEADER
            ))

        for index, standing in enumerate(self.resolver.sort_wildcard(others)):
            position = PlayoffPosition.WILDCARD if index < WILDCARD_SPOTS else PlayoffPosition.IN_HUNT
            ranked.append(replace(
                standing,
                conference_rank=len(leaders) + index + 1,
                playoff_position=position
            ))
        return ranked

    def compute(self, games: Iterable[ScheduledGame]) -> LeagueStandings:
        """
        Compute standings for every team.

        Args:
            games: Schedule games; incomplete games are ignored

        Returns:
            LeagueStandings keyed by team id in id order
        """
        standings = self.apply_strength_metrics(self.fold(games))
        divisions = self._rank_divisions(standings)

        final: Dict[str, TeamStanding] = {}
        for conference in ALL_CONFERENCES:
            conference_divisions = [divisions[(conference, division)] for division in ALL_DIVISIONS]
            for standing in self._rank_conference(conference_divisions):
                final[standing.team_id] = standing

        played = sum(standing.games_played for standing in final.values()) // 2
        self.logger.debug(f"Standings computed from {played} completed games")

        return LeagueStandings(standings={team_id: final[team_id] for team_id in sorted(final)})


def compute_standings(games: Iterable[ScheduledGame], directory: TeamDirectory) -> LeagueStandings:
    """Compute league standings; see StandingsEngine.compute."""
    return StandingsEngine(directory).compute(games)
