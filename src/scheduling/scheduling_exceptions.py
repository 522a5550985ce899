"""
Scheduling Exception Hierarchy

This module defines exceptions for schedule generation and result recording.

Exception Hierarchy:
    SchedulingException (base)
    ├── InvalidScheduleInputException
    │   ├── InvalidSeasonYearException
    │   ├── InvalidByeWeekException
    │   └── InvalidPreviousStandingsException
    ├── ScheduleGenerationException
    ├── GameNotFoundException
    ├── GameAlreadyCompleteException
    └── InvalidGameResultException

All exceptions track:
- Schedule context (year, game id, team ids)
- Operation that failed
- Recovery strategy
"""

from typing import Any, Dict, List, Optional
from datetime import datetime


class SchedulingException(Exception):
    """
    Base exception for all scheduling errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        context: Schedule information (year, game_id, team ids)
        operation: What operation was being performed
        recovery_strategy: How to recover from this error
        original_exception: Wrapped exception if from try/except
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SCHEDULE_000",
        context: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
        recovery_strategy: str = "abort",
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.operation = operation
        self.recovery_strategy = recovery_strategy
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build comprehensive error message with all context"""
        lines = [f"[{self.error_code}] {self.message}"]

        if self.operation:
            lines.append(f"Operation: {self.operation}")

        if self.context:
            lines.append("Schedule Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.original_exception:
            lines.append(
                f"Original Error: {type(self.original_exception).__name__}: "
                f"{self.original_exception}"
            )

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "operation": self.operation,
            "context": self.context,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidScheduleInputException(SchedulingException):
    """
    Raised when schedule generation inputs are malformed.

    Generation never starts on bad input, so no partial schedule exists.
    """

    def __init__(self, message: str, error_code: str = "SCHEDULE_100", **kwargs):
        kwargs.setdefault("operation", "generate_schedule")
        kwargs.setdefault("recovery_strategy", "fix_input")
        super().__init__(message, error_code=error_code, **kwargs)


class InvalidSeasonYearException(InvalidScheduleInputException):
    """Raised when the season year falls outside the supported range."""

    def __init__(self, year: Any, min_year: int, max_year: int):
        self.year = year
        super().__init__(
            f"Season year {year!r} outside supported range {min_year}-{max_year}",
            error_code="SCHEDULE_101",
            context={"year": year, "min_year": min_year, "max_year": max_year}
        )


class InvalidByeWeekException(InvalidScheduleInputException):
    """
    Raised when bye-week assignments are missing, duplicated or out of window.

    ``problems`` holds one entry per violation.
    """

    def __init__(self, problems: List[str], start_week: int, end_week: int):
        self.problems = list(problems)
        super().__init__(
            f"Invalid bye week assignment ({len(self.problems)} problems): "
            + "; ".join(self.problems),
            error_code="SCHEDULE_102",
            context={"bye_window": f"{start_week}-{end_week}", "problems": self.problems}
        )


class InvalidPreviousStandingsException(InvalidScheduleInputException):
    """Raised when previous-year standings reference unknown or misplaced teams."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(
            f"Invalid previous standings ({len(self.problems)} problems): "
            + "; ".join(self.problems),
            error_code="SCHEDULE_103",
            context={"problems": self.problems}
        )


class ScheduleGenerationException(SchedulingException):
    """
    Raised when a generated schedule fails the post-generation validation gate.

    Examples:
    - Week assignment dropped games, leaving teams short of 17
    - Duplicate non-divisional pairing
    - Team scheduled during its bye week

    Attributes:
        errors: Itemized list of violated invariants
    """

    def __init__(self, year: int, errors: List[str], dropped_game_ids: Optional[List[str]] = None):
        self.year = year
        self.errors = list(errors)
        self.dropped_game_ids = list(dropped_game_ids or [])
        listing = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(
            f"Schedule for {year} failed validation with {len(self.errors)} errors:\n{listing}",
            error_code="SCHEDULE_200",
            context={"year": year, "dropped_games": len(self.dropped_game_ids)},
            operation="generate_schedule",
            recovery_strategy="adjust_bye_weeks_or_config"
        )


class GameNotFoundException(SchedulingException):
    """Raised when a game id does not exist in the schedule."""

    def __init__(self, game_id: str, year: Optional[int] = None):
        self.game_id = game_id
        super().__init__(
            f"Game '{game_id}' not found in schedule",
            error_code="SCHEDULE_300",
            context={"game_id": game_id, "year": year},
            operation="record_game_result"
        )


class GameAlreadyCompleteException(SchedulingException):
    """
    Raised when a result is recorded for a game that already has one.

    Results are write-once; a completed game cannot be replayed or edited.
    """

    def __init__(self, game_id: str, home_score: Optional[int], away_score: Optional[int]):
        self.game_id = game_id
        super().__init__(
            f"Game '{game_id}' already complete ({home_score}-{away_score})",
            error_code="SCHEDULE_301",
            context={"game_id": game_id, "home_score": home_score, "away_score": away_score},
            operation="record_game_result",
            recovery_strategy="ignore_duplicate_result"
        )


class InvalidGameResultException(SchedulingException):
    """Raised when a supplied score is not a non-negative integer."""

    def __init__(self, game_id: str, home_score: Any, away_score: Any):
        self.game_id = game_id
        super().__init__(
            f"Invalid score for game '{game_id}': {home_score!r}-{away_score!r}",
            error_code="SCHEDULE_302",
            context={"game_id": game_id, "home_score": home_score, "away_score": away_score},
            operation="record_game_result",
            recovery_strategy="fix_input"
        )
