"""
Standings Engine Tests

Folding completed games into records and ranking divisions and
conferences.
"""

from dataclasses import replace

import pytest

from standings.models import PlayoffPosition, TeamStanding
from standings.standings_calculator import (
    StandingsEngine,
    compute_standings,
    fold_game,
    round_half_up,
)
from team_registry.models import Conference, Division


@pytest.fixture
def afc_east_games(make_game):
    """NYJ 3-0, NE 2-1, MIA 1-2, BUF 0-3"""
    return [
        make_game("W1-A", "NYJ", "NE", 1, 21, 10),
        make_game("W1-B", "MIA", "BUF", 1, 17, 14),
        make_game("W2-A", "NE", "MIA", 2, 20, 13),
        make_game("W2-B", "BUF", "NYJ", 2, 3, 27),
        make_game("W3-A", "MIA", "NYJ", 3, 10, 24),
        make_game("W3-B", "NE", "BUF", 3, 30, 7),
    ]


class TestFold:
    """Single-game updates"""

    def test_round_trip_24_17(self, league, make_game):
        standings = compute_standings([make_game("G1", "BUF", "MIA", 1, 24, 17)], league)

        buf = standings.get("BUF")
        mia = standings.get("MIA")
        assert (buf.wins, buf.losses, buf.ties) == (1, 0, 0)
        assert (mia.wins, mia.losses, mia.ties) == (0, 1, 0)
        assert (buf.points_for, buf.points_against) == (24, 17)
        assert (mia.points_for, mia.points_against) == (17, 24)
        assert buf.division_record == "1-0"
        assert buf.conference_record == "1-0"
        assert buf.current_streak == 1
        assert mia.current_streak == -1
        assert buf.net_touchdowns == 1
        assert mia.net_touchdowns == -1
        assert buf.head_to_head["MIA"].wins == 1
        assert mia.head_to_head["BUF"].losses == 1

    def test_cross_conference_game_counts_overall_only(self, league, make_game):
        standings = compute_standings([make_game("G1", "BUF", "DAL", 1, 20, 10)], league)
        buf = standings.get("BUF")
        assert buf.record_string == "1-0"
        assert buf.division_record == "0-0"
        assert buf.conference_record == "0-0"

    def test_tie(self, league, make_game):
        games = [
            make_game("G1", "BUF", "MIA", 1, 24, 17),
            make_game("G2", "BUF", "NE", 2, 10, 10),
        ]
        buf = compute_standings(games, league).get("BUF")
        assert buf.record_string == "1-0-1"
        assert buf.current_streak == 0
        assert buf.streak_string == ""
        assert buf.win_percentage == pytest.approx(0.75)

    def test_incomplete_game_rejected(self, make_game):
        game = make_game("G1", "BUF", "MIA", 1)
        standing = TeamStanding("BUF", Conference.AFC, Division.EAST)
        with pytest.raises(ValueError):
            fold_game(standing, game)

    def test_incomplete_games_ignored(self, league, make_game):
        games = [make_game("G1", "BUF", "MIA", 1), make_game("G2", "NE", "NYJ", 1, 3, 0)]
        standings = compute_standings(games, league)
        assert standings.get("BUF").games_played == 0
        assert standings.get("NE").games_played == 1

    def test_unknown_team_rejected(self, league, make_game):
        game = make_game("G1", "BUF", "MIA", 1, 7, 0)
        stray = replace(game, away_team_id="XXX")
        with pytest.raises(KeyError):
            compute_standings([stray], league)


class TestStreaks:
    """Streak extends on the same result, resets on a change"""

    def test_streak_sequence(self, league, make_game):
        games = [
            make_game("G1", "NE", "BUF", 1, 20, 10),
            make_game("G2", "NE", "MIA", 2, 20, 10),
            make_game("G3", "NYJ", "NE", 3, 20, 10),
            make_game("G4", "KC", "NE", 4, 20, 10),
        ]
        ne = compute_standings(games, league).get("NE")
        assert ne.current_streak == -2
        assert ne.streak_string == "L2"

    def test_games_fold_in_week_order(self, league, make_game):
        """Input order does not matter; week order does"""
        games = [
            make_game("G2", "NE", "MIA", 2, 0, 10),
            make_game("G1", "NE", "BUF", 1, 20, 10),
        ]
        assert compute_standings(games, league).get("NE").current_streak == -1


class TestNetTouchdowns:
    """Half-up rounding of point differential / 7"""

    @pytest.mark.parametrize("value, expected", [
        (0.5, 1), (-0.5, 0), (2.5, 3), (-1.5, -1), (3.43, 3), (-0.57, -1), (0.0, 0),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_net_touchdowns_from_differential(self, league, make_game):
        standings = compute_standings([make_game("G1", "KC", "DEN", 1, 31, 7)], league)
        assert standings.get("KC").net_touchdowns == 3
        assert standings.get("DEN").net_touchdowns == -3


class TestDivisionRanking:
    """Ranks, games behind and derived metrics for a decided division"""

    def test_division_ranks(self, league, afc_east_games):
        standings = compute_standings(afc_east_games, league)
        ranks = {team_id: standings.get(team_id).division_rank for team_id in ("NYJ", "NE", "MIA", "BUF")}
        assert ranks == {"NYJ": 1, "NE": 2, "MIA": 3, "BUF": 4}

    def test_games_behind(self, league, afc_east_games):
        standings = compute_standings(afc_east_games, league)
        assert standings.get("NYJ").games_behind == 0.0
        assert standings.get("NE").games_behind == pytest.approx(1.0)
        assert standings.get("BUF").games_behind == pytest.approx(3.0)

    def test_streaks(self, league, afc_east_games):
        standings = compute_standings(afc_east_games, league)
        assert standings.get("NYJ").current_streak == 3
        assert standings.get("NE").current_streak == 2
        assert standings.get("MIA").current_streak == -2
        assert standings.get("BUF").current_streak == -3

    def test_strength_of_victory_and_schedule(self, league, afc_east_games):
        standings = compute_standings(afc_east_games, league)
        nyj = standings.get("NYJ")
        buf = standings.get("BUF")
        # NYJ beat NE (2-1), MIA (1-2) and BUF (0-3)
        assert nyj.strength_of_victory == pytest.approx(3 / 9)
        assert nyj.strength_of_schedule == pytest.approx(3 / 9)
        assert buf.strength_of_victory == 0.0
        assert buf.strength_of_schedule == pytest.approx(6 / 9)

    def test_untouched_divisions_rank_by_id(self, league, afc_east_games):
        standings = compute_standings(afc_east_games, league)
        west = sorted(
            (standings.get(team_id) for team_id in ("DEN", "KC", "LAC", "LV")),
            key=lambda standing: standing.division_rank
        )
        assert [standing.team_id for standing in west] == ["DEN", "KC", "LAC", "LV"]


class TestConferenceRanking:
    """Leaders first, then the wildcard race"""

    def test_empty_league(self, league):
        standings = compute_standings([], league)
        afc = sorted(
            (s for s in standings.teams if s.conference is Conference.AFC),
            key=lambda s: s.conference_rank
        )
        assert [s.conference_rank for s in afc] == list(range(1, 17))
        assert [s.team_id for s in afc[:7]] == ["BAL", "BUF", "DEN", "HOU", "CIN", "CLE", "IND"]

        positions = [s.playoff_position for s in afc]
        assert positions.count(PlayoffPosition.DIVISION_LEADER) == 4
        assert positions.count(PlayoffPosition.WILDCARD) == 3
        assert positions.count(PlayoffPosition.IN_HUNT) == 9

    def test_leader_and_wildcards(self, league, afc_east_games):
        standings = compute_standings(afc_east_games, league)
        nyj = standings.get("NYJ")
        ne = standings.get("NE")
        mia = standings.get("MIA")

        assert nyj.conference_rank == 1
        assert nyj.playoff_position is PlayoffPosition.DIVISION_LEADER
        assert ne.conference_rank == 5
        assert ne.playoff_position is PlayoffPosition.WILDCARD
        assert mia.conference_rank == 6

    def test_every_team_ranked(self, league, afc_east_games):
        standings = compute_standings(afc_east_games, league)
        for conference in Conference:
            ranks = sorted(s.conference_rank for s in standings.teams if s.conference is conference)
            assert ranks == list(range(1, 17))


class TestPurity:
    """Standings are a pure function of the games"""

    def test_recompute_is_identical(self, league, afc_east_games):
        first = compute_standings(afc_east_games, league)
        second = compute_standings(afc_east_games, league)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_input_order_does_not_matter(self, league, afc_east_games):
        forward = compute_standings(afc_east_games, league)
        backward = compute_standings(list(reversed(afc_east_games)), league)
        assert forward == backward

    def test_engine_reusable(self, league, afc_east_games):
        engine = StandingsEngine(league)
        assert engine.compute(afc_east_games) == engine.compute(afc_east_games)
        assert list(engine.compute([]).standings) == league.team_ids
