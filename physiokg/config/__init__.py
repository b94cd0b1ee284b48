"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    ConditionNotFoundError,
    ErrorCode,
    InvalidArgumentError,
    PhysioKGError,
    ReasoningTimeoutError,
    UpstreamUnavailableError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "PhysioKGError",
    "InvalidArgumentError",
    "ConditionNotFoundError",
    "UpstreamUnavailableError",
    "ReasoningTimeoutError",
]
