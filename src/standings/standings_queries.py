"""
Standings queries.

Read-only views over LeagueStandings: division and conference tables, the
playoff picture, seeds, and the previous-year order used by next season's
schedule.
"""

from typing import Dict, List, Optional

from scheduling.models import PreviousYearStandings
from team_registry.models import ALL_CONFERENCES, ALL_DIVISIONS, Conference, Division

from .models import HeadToHeadRecord, LeagueStandings, PlayoffPosition, PlayoffSeed, PlayoffTeams, TeamStanding


PLAYOFF_TEAMS_PER_CONFERENCE = 7


def get_team_standing(league: LeagueStandings, team_id: str) -> TeamStanding:
    return league.get(team_id)


def get_division_standings(
    league: LeagueStandings,
    conference: Conference,
    division: Division
) -> List[TeamStanding]:
    """Division table ordered by division rank"""
    teams = [
        standing for standing in league.teams
        if standing.conference is conference and standing.division is division
    ]
    return sorted(teams, key=lambda standing: standing.division_rank)


def get_conference_standings(league: LeagueStandings, conference: Conference) -> List[TeamStanding]:
    """Conference table ordered by conference rank"""
    teams = [standing for standing in league.teams if standing.conference is conference]
    return sorted(teams, key=lambda standing: standing.conference_rank)


def get_playoff_picture(league: LeagueStandings) -> Dict[Conference, List[TeamStanding]]:
    """Every team per conference, ordered by conference rank"""
    return {
        conference: get_conference_standings(league, conference)
        for conference in ALL_CONFERENCES
    }


def get_playoff_seeds(
    league: LeagueStandings,
    conference: Conference,
    count: int = PLAYOFF_TEAMS_PER_CONFERENCE
) -> List[PlayoffSeed]:
    """
    Current playoff seeds for a conference.

    Seeds 1-4 are division leaders, the rest wild cards, in conference rank
    order.
    """
    seeds = []
    for standing in get_conference_standings(league, conference)[:count]:
        seeds.append(PlayoffSeed(
            seed=standing.conference_rank,
            team_id=standing.team_id,
            conference=conference,
            record=format_record(standing),
            win_percentage=standing.win_percentage,
            division_winner=standing.playoff_position is PlayoffPosition.DIVISION_LEADER
        ))
    return seeds


def determine_playoff_teams(league: LeagueStandings) -> PlayoffTeams:
    """Division winners and wild cards for both conferences"""
    division_winners: Dict[Conference, List[str]] = {}
    wild_cards: Dict[Conference, List[str]] = {}

    for conference in ALL_CONFERENCES:
        table = get_conference_standings(league, conference)
        division_winners[conference] = [
            standing.team_id for standing in table
            if standing.playoff_position is PlayoffPosition.DIVISION_LEADER
        ]
        wild_cards[conference] = [
            standing.team_id for standing in table
            if standing.playoff_position is PlayoffPosition.WILDCARD
        ]

    return PlayoffTeams(division_winners=division_winners, wild_cards=wild_cards)


def get_head_to_head(league: LeagueStandings, team_id: str, opponent_id: str) -> Optional[HeadToHeadRecord]:
    """Record of ``team_id`` against ``opponent_id``, None if they haven't met"""
    return league.get(team_id).head_to_head_with(opponent_id)


def format_record(standing: TeamStanding) -> str:
    """'W-L', or 'W-L-T' when the team has ties"""
    return standing.record_string


def build_previous_year_standings(league: LeagueStandings) -> PreviousYearStandings:
    """Division finish order (best first) for next season's schedule"""
    return {
        conference: {
            division: [
                standing.team_id
                for standing in get_division_standings(league, conference, division)
            ]
            for division in ALL_DIVISIONS
        }
        for conference in ALL_CONFERENCES
    }
