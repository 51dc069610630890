"""
Custom exceptions for the insights library.

The compute functions never raise for missing or malformed optional data;
these exceptions surface only at the boundaries that are asked to be strict
(entry coercion with ``strict=True``, configuration, CLI input loading).
Each exception carries:
- A descriptive message
- An error code
- Optional details for debugging
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent error payloads."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    ENTRY_INVALID = "ENTRY_INVALID"
    INPUT_UNREADABLE = "INPUT_UNREADABLE"


class PauseInsightsError(Exception):
    """
    Base exception for all insights library errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary payload."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class EntryValidationError(PauseInsightsError):
    """Raised when a log entry record cannot be turned into a LogEntry."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if index is not None:
            error_details["index"] = index
        super().__init__(
            message=message,
            code=ErrorCode.ENTRY_INVALID,
            details=error_details,
        )


class InputReadError(PauseInsightsError):
    """Raised when an entries export cannot be read or decoded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(
            message=f"Could not read entries from {source}: {reason}",
            code=ErrorCode.INPUT_UNREADABLE,
            details={"source": source},
        )
