"""
Season Management Exception Hierarchy

This module defines exceptions for season progression: phase transitions,
week advancement and results arriving at the wrong time.

Exception Hierarchy:
    SeasonException (base)
    ├── InvalidPhaseTransitionException
    ├── SeasonBoundaryException
    └── InvalidSeasonStateException

All exceptions track:
- Season context (year, phase, week)
- Operation that failed
- Recovery strategy
"""

from typing import Any, Dict, Optional
from datetime import datetime


class SeasonException(Exception):
    """
    Base exception for all season management errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        season_context: Season information (year, phase, week)
        operation: What operation was being performed
        recovery_strategy: How to recover from this error
        original_exception: Wrapped exception if from try/except
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SEASON_000",
        season_context: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
        recovery_strategy: str = "abort",
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.season_context = season_context or {}
        self.operation = operation
        self.recovery_strategy = recovery_strategy
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        # Build detailed error message
        full_message = self._build_error_message()
        super().__init__(full_message)

    def _build_error_message(self) -> str:
        """Build comprehensive error message with all context"""
        lines = [f"[{self.error_code}] {self.message}"]

        if self.operation:
            lines.append(f"Operation: {self.operation}")

        if self.season_context:
            lines.append("Season Context:")
            for key, value in self.season_context.items():
                lines.append(f"  {key}: {value}")

        if self.recovery_strategy:
            lines.append(f"Recovery: {self.recovery_strategy}")

        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: {str(self.original_exception)}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "operation": self.operation,
            "season_context": self.season_context,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidPhaseTransitionException(SeasonException):
    """
    Raised when an invalid phase transition is attempted.

    Valid transitions:
    - not_started → in_progress
    - in_progress → season_complete

    Examples:
    - Starting a season that is already in progress
    - Completing a season that never started
    """

    def __init__(
        self,
        from_phase: str,
        to_phase: str,
        message: Optional[str] = None,
        **kwargs
    ):
        context = {
            "from_phase": from_phase,
            "to_phase": to_phase,
            "valid_next_phases": _get_valid_next_phases(from_phase),
            **kwargs.get('season_context', {})
        }

        default_message = message or f"Invalid phase transition: {from_phase} -> {to_phase}"

        super().__init__(
            message=default_message,
            error_code="SEASON_PHASE_001",
            season_context=context,
            operation=kwargs.get('operation', 'phase_transition'),
            recovery_strategy="abort"
        )

        self.from_phase = from_phase
        self.to_phase = to_phase


class SeasonBoundaryException(SeasonException):
    """
    Raised when an operation reaches past the current point of the season.

    Examples:
    - Advancing while games in the current week are still unplayed
    - Recording a result for a game scheduled after the current week
    """

    def __init__(
        self,
        message: str,
        boundary_type: str,
        **kwargs
    ):
        context = {
            "boundary_type": boundary_type,  # e.g., "week_incomplete", "future_game"
            **kwargs.get('season_context', {})
        }

        super().__init__(
            message=message,
            error_code="SEASON_BOUNDARY_002",
            season_context=context,
            operation=kwargs.get('operation', 'boundary_check'),
            recovery_strategy="complete_current_week"
        )

        self.boundary_type = boundary_type


class InvalidSeasonStateException(SeasonException):
    """
    Raised when an operation does not fit the current season state.

    Examples:
    - Recording a result before the season starts
    - Asking for next season's standings while games remain
    - Deserialized state whose week does not match its phase
    """

    def __init__(
        self,
        message: str,
        state_issue: str,
        **kwargs
    ):
        context = {
            "state_issue": state_issue,
            **kwargs.get('season_context', {})
        }

        super().__init__(
            message=message,
            error_code="SEASON_STATE_003",
            season_context=context,
            operation=kwargs.get('operation', 'state_validation'),
            recovery_strategy="abort"
        )

        self.state_issue = state_issue


# Helper functions
def _get_valid_next_phases(from_phase: str) -> list:
    """Get valid next phases for a given current phase"""
    transitions = {
        "not_started": ["in_progress"],
        "in_progress": ["season_complete"],
        "season_complete": []
    }
    return transitions.get(from_phase.lower(), [])


def validate_phase_transition(from_phase: str, to_phase: str) -> bool:
    """
    Validate if a phase transition is allowed.

    Args:
        from_phase: Current phase
        to_phase: Target phase

    Returns:
        True if transition is valid

    Raises:
        InvalidPhaseTransitionException if transition is invalid
    """
    valid_next = _get_valid_next_phases(from_phase)

    if to_phase.lower() not in valid_next:
        raise InvalidPhaseTransitionException(
            from_phase=from_phase,
            to_phase=to_phase,
            message=f"Cannot transition from {from_phase} to {to_phase}. Valid next phases: {valid_next}"
        )

    return True
