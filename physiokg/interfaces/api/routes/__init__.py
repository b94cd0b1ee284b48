"""
API Routes.
"""

from . import conditions, health, reasoning

__all__ = ["health", "conditions", "reasoning"]
