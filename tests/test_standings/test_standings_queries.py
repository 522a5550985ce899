"""
Standings Query Tests
"""

import pytest

from scheduling.opponent_builder import OpponentSetBuilder
from standings.standings_calculator import compute_standings
from standings.standings_queries import (
    build_previous_year_standings,
    determine_playoff_teams,
    format_record,
    get_conference_standings,
    get_division_standings,
    get_head_to_head,
    get_playoff_picture,
    get_playoff_seeds,
    get_team_standing,
)
from team_registry.models import Conference, Division


@pytest.fixture
def league_standings(league, make_game):
    """NYJ 3-0, NE 2-1, MIA 1-2, BUF 0-3; KC 1-0-1 over DEN and LV"""
    games = [
        make_game("W1-A", "NYJ", "NE", 1, 21, 10),
        make_game("W1-B", "MIA", "BUF", 1, 17, 14),
        make_game("W1-C", "KC", "DEN", 1, 27, 20),
        make_game("W2-A", "NE", "MIA", 2, 20, 13),
        make_game("W2-B", "BUF", "NYJ", 2, 3, 27),
        make_game("W2-C", "LV", "KC", 2, 17, 17),
        make_game("W3-A", "MIA", "NYJ", 3, 10, 24),
        make_game("W3-B", "NE", "BUF", 3, 30, 7),
    ]
    return compute_standings(games, league)


class TestTables:
    """Division and conference tables"""

    def test_division_table(self, league_standings):
        table = get_division_standings(league_standings, Conference.AFC, Division.EAST)
        assert [s.team_id for s in table] == ["NYJ", "NE", "MIA", "BUF"]
        assert [s.division_rank for s in table] == [1, 2, 3, 4]

    def test_conference_table(self, league_standings):
        table = get_conference_standings(league_standings, Conference.AFC)
        assert len(table) == 16
        assert [s.conference_rank for s in table] == list(range(1, 17))
        assert table[0].team_id == "NYJ"

    def test_playoff_picture_covers_both_conferences(self, league_standings):
        picture = get_playoff_picture(league_standings)
        assert set(picture) == {Conference.AFC, Conference.NFC}
        assert all(len(teams) == 16 for teams in picture.values())

    def test_team_standing_lookup(self, league_standings):
        assert get_team_standing(league_standings, "KC").record_string == "1-0-1"
        with pytest.raises(KeyError):
            get_team_standing(league_standings, "XXX")


class TestPlayoffs:
    """Seeds and playoff teams"""

    def test_seeds(self, league_standings):
        seeds = get_playoff_seeds(league_standings, Conference.AFC)
        assert [seed.seed for seed in seeds] == list(range(1, 8))
        assert [seed.division_winner for seed in seeds] == [True] * 4 + [False] * 3
        assert seeds[0].team_id == "NYJ"
        assert seeds[0].record == "3-0"

    def test_seed_count(self, league_standings):
        assert len(get_playoff_seeds(league_standings, Conference.NFC, count=4)) == 4

    def test_playoff_teams(self, league_standings):
        teams = determine_playoff_teams(league_standings)
        afc = teams.seeded(Conference.AFC)
        assert len(afc) == 7
        assert teams.division_winners[Conference.AFC][0] == "NYJ"
        assert "KC" in teams.division_winners[Conference.AFC]
        assert "NE" in teams.wild_cards[Conference.AFC]
        assert len(set(afc)) == 7


class TestRecords:
    """Head-to-head lookups and record strings"""

    def test_head_to_head(self, league_standings):
        record = get_head_to_head(league_standings, "NYJ", "NE")
        assert (record.wins, record.losses, record.ties) == (1, 0, 0)
        assert get_head_to_head(league_standings, "NYJ", "KC") is None

    def test_format_record(self, league_standings):
        assert format_record(league_standings.get("NE")) == "2-1"
        assert format_record(league_standings.get("KC")) == "1-0-1"
        assert league_standings.get("LV").to_dict()["ties"] == 1


class TestPreviousYearStandings:
    """Final division order feeds next season's schedule"""

    def test_division_order(self, league_standings):
        previous = build_previous_year_standings(league_standings)
        assert previous[Conference.AFC][Division.EAST] == ["NYJ", "NE", "MIA", "BUF"]
        assert previous[Conference.AFC][Division.WEST][0] == "KC"
        assert sum(len(order) for divisions in previous.values() for order in divisions.values()) == 32

    def test_order_drives_same_place_games(self, league, league_standings):
        previous = build_previous_year_standings(league_standings)
        builder = OpponentSetBuilder(league, previous, 2026)
        assert builder.finish_position(league.get_team("NYJ")) == 0
        assert builder.finish_position(league.get_team("BUF")) == 3
