"""
Team Registry Exception Hierarchy

Exception Hierarchy:
    TeamRegistryException (base)
    └── InvalidTeamRosterException
"""

from typing import Any, Dict, List, Optional
from datetime import datetime


class TeamRegistryException(Exception):
    """
    Base exception for team registry errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        context: Additional context (team ids, counts)
        timestamp: When the error was raised
    """

    def __init__(
        self,
        message: str,
        error_code: str = "REGISTRY_000",
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.timestamp = datetime.now().isoformat()
        super().__init__(f"[{self.error_code}] {self.message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp,
        }


class InvalidTeamRosterException(TeamRegistryException):
    """
    Raised when a roster does not form a 2 x 4 x 4 league.

    Every problem found is listed in ``problems`` so the caller sees the
    full picture at once.
    """

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        details = "; ".join(self.problems)
        super().__init__(
            f"Invalid team roster ({len(self.problems)} problems): {details}",
            error_code="REGISTRY_001",
            context={"problems": self.problems}
        )
