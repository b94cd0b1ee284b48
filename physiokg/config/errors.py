"""
Error Taxonomy - Consistent error codes across the application.

Each error kind carries the HTTP status the API answers with, so the
engine and the HTTP layer agree on one table.

Usage:
    from physiokg.config.errors import ConditionNotFoundError

    raise ConditionNotFoundError("Frozen Shoulder")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Caller errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONDITION_NOT_FOUND = "CONDITION_NOT_FOUND"

    # Knowledge graph errors
    GRAPH_UNAVAILABLE = "GRAPH_UNAVAILABLE"
    REASONING_TIMEOUT = "REASONING_TIMEOUT"

    # Anything not raised as a PhysioKGError
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PhysioKGError(Exception):
    """Base exception with error code support."""

    http_status = 500

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(PhysioKGError):
    """Malformed caller input (empty search fragment or condition)."""

    http_status = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_ARGUMENT, message, details)


class ConditionNotFoundError(PhysioKGError):
    """The requested condition has no node in the graph."""

    http_status = 404

    def __init__(self, condition: str) -> None:
        super().__init__(
            ErrorCode.CONDITION_NOT_FOUND,
            f"Condition not found: {condition}",
            {"condition": condition},
        )
        self.condition = condition


class UpstreamUnavailableError(PhysioKGError):
    """Graph store connection or query failure."""

    http_status = 503

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.GRAPH_UNAVAILABLE, message, details)


class ReasoningTimeoutError(PhysioKGError):
    """Reasoning generation exceeded its deadline."""

    http_status = 504

    def __init__(self, condition: str, timeout: float) -> None:
        super().__init__(
            ErrorCode.REASONING_TIMEOUT,
            f"Reasoning for '{condition}' timed out after {timeout:g}s",
            {"condition": condition, "timeout_seconds": timeout},
        )
