"""
League Schedule Generator

Generates a complete regular-season schedule from the league roster, last
season's standings and the year:

- Opponent sets from the five structural categories (17 games per team)
- Deduplicated games with deterministic home/away
- Week assignment with divisional games pushed late
- Post-generation validation gate

Generation is a pure, deterministic call: identical inputs always produce
the same game ids, weeks and home/away assignments.
"""

from typing import Dict, List, Optional
import logging

from team_registry.models import ALL_CONFERENCES, ALL_DIVISIONS
from team_registry.team_directory import TeamDirectory

from .bye_weeks import assign_bye_weeks, validate_bye_weeks
from .config import MAX_SEASON_YEAR, MIN_SEASON_YEAR, ScheduleConfig
from .game_assembler import GameAssembler
from .models import PreviousYearStandings, SeasonSchedule, game_sort_key
from .opponent_builder import OpponentSetBuilder, create_default_previous_standings
from .schedule_validator import ScheduleValidator, ValidationResult
from .scheduling_exceptions import (
    InvalidPreviousStandingsException,
    InvalidScheduleInputException,
    InvalidSeasonYearException,
    ScheduleGenerationException,
)
from .week_assigner import WeekAssigner


class NFLScheduleGenerator:
    """
    Generates the regular-season schedule for one year.

    The generator ensures:
    - 17 games and one bye per team
    - Each division rival played home and away
    - No team plays twice in a week or during its bye
    - No non-divisional pairing repeats
    """

    def __init__(
        self,
        directory: TeamDirectory,
        config: Optional[ScheduleConfig] = None,
        logger: logging.Logger = None
    ):
        """
        Initialize schedule generator.

        Args:
            directory: League roster
            config: Schedule configuration; the year on it is replaced per call
            logger: Optional logger for tracking generation progress
        """
        self.directory = directory
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def _config_for_year(self, year: int) -> ScheduleConfig:
        if self.config is None:
            config = ScheduleConfig.default_for_year(year)
        else:
            config = ScheduleConfig.from_dict({**self.config.to_dict(), 'season_year': year})

        valid, errors = config.validate()
        if not valid:
            raise InvalidScheduleInputException(
                f"Invalid schedule configuration: {'; '.join(errors)}",
                context={"errors": errors}
            )
        return config

    def _validate_previous_standings(self, previous_standings: PreviousYearStandings) -> None:
        problems = []
        seen = set()
        for conference in ALL_CONFERENCES:
            for division in ALL_DIVISIONS:
                order = previous_standings.get(conference, {}).get(division, [])
                for team_id in order:
                    if team_id in seen:
                        problems.append(f"{team_id} listed more than once")
                    seen.add(team_id)
                    if team_id not in self.directory:
                        problems.append(
                            f"unknown team {team_id} in {conference.value} {division.value}"
                        )
                    elif self.directory.division_of(team_id) != (conference, division):
                        problems.append(
                            f"{team_id} listed under {conference.value} {division.value}"
                        )

        if problems:
            self.logger.error(f"Previous standings rejected: {problems}")
            raise InvalidPreviousStandingsException(problems)

    def generate(
        self,
        year: int,
        previous_standings: Optional[PreviousYearStandings] = None,
        bye_weeks: Optional[Dict[str, int]] = None
    ) -> SeasonSchedule:
        """
        Generate a season schedule.

        Args:
            year: Season year
            previous_standings: Last season's division finish order; defaults
                to id order when there is no history
            bye_weeks: team_id -> bye week; defaults to the built-in allocator

        Returns:
            SeasonSchedule with every game assigned a week

        Raises:
            InvalidScheduleInputException: Bad year, byes, standings or config
            ScheduleGenerationException: Generated schedule failed validation
        """
        if isinstance(year, bool) or not isinstance(year, int) or not (
                MIN_SEASON_YEAR <= year <= MAX_SEASON_YEAR):
            raise InvalidSeasonYearException(year, MIN_SEASON_YEAR, MAX_SEASON_YEAR)

        config = self._config_for_year(year)

        if previous_standings is None:
            previous_standings = create_default_previous_standings(self.directory)
        else:
            self._validate_previous_standings(previous_standings)

        if bye_weeks is None:
            bye_weeks = assign_bye_weeks(self.directory, config)
        validate_bye_weeks(bye_weeks, self.directory, config)
        bye_weeks = {team_id: bye_weeks[team_id] for team_id in sorted(bye_weeks)}

        self.logger.info(f"Generating {year} schedule for {len(self.directory)} teams")

        builder = OpponentSetBuilder(self.directory, previous_standings, year)
        opponent_sets = builder.build_all()

        games = GameAssembler(self.directory, year).assemble(opponent_sets)

        assignment = WeekAssigner(config).assign(games, bye_weeks)

        schedule = SeasonSchedule(
            year=year,
            games=tuple(sorted(assignment.games, key=game_sort_key)),
            bye_weeks=bye_weeks,
        )

        result = ScheduleValidator(self.directory, config, previous_standings).validate(schedule)
        self._apply_validation_gate(schedule, result, config, assignment.dropped)

        self.logger.info(
            f"Generated {year} schedule: {len(schedule.games)} games, "
            f"solver repair {'used' if assignment.solver_used else 'not needed'}"
        )
        return schedule

    def _apply_validation_gate(
        self,
        schedule: SeasonSchedule,
        result: ValidationResult,
        config: ScheduleConfig,
        dropped: List
    ) -> None:
        for warning in result.warnings:
            self.logger.warning(str(warning))

        errors = result.error_messages
        if dropped:
            errors = [
                f"{len(dropped)} games could not be placed in any week: "
                + ", ".join(game.game_id for game in dropped)
            ] + errors

        if not errors:
            return

        for error in errors:
            self.logger.error(error)

        if config.strict_validation:
            raise ScheduleGenerationException(
                schedule.year,
                errors,
                dropped_game_ids=[game.game_id for game in dropped]
            )


def generate_schedule(
    directory: TeamDirectory,
    year: int,
    previous_standings: Optional[PreviousYearStandings] = None,
    bye_weeks: Optional[Dict[str, int]] = None,
    config: Optional[ScheduleConfig] = None
) -> SeasonSchedule:
    """Generate a season schedule; see NFLScheduleGenerator.generate."""
    generator = NFLScheduleGenerator(directory, config)
    return generator.generate(year, previous_standings, bye_weeks)


def create_schedule_generator(
    directory: TeamDirectory,
    config: Optional[ScheduleConfig] = None
) -> NFLScheduleGenerator:
    """
    Factory function to create a schedule generator.

    Args:
        directory: League roster
        config: Optional schedule configuration

    Returns:
        Configured NFLScheduleGenerator instance
    """
    return NFLScheduleGenerator(directory, config)
