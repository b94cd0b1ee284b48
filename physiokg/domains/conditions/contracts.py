"""
Condition Contracts - Interfaces for condition domain.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConditionSearch(Protocol):
    """Contract for condition name lookup."""

    async def search(self, fragment: str) -> list[str]:
        """Return condition names containing the fragment."""
        ...

    async def list_conditions(self) -> list[str]:
        """Return every condition name."""
        ...
