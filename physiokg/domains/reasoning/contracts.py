"""
Reasoning Contracts - Interfaces for reasoning domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from .models import CategoryRecord, ReasoningRecord


@runtime_checkable
class GraphStore(Protocol):
    """Contract for the external graph store (read-only query execution)."""

    async def execute_query(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a parameterized graph query and return its rows."""
        ...


@runtime_checkable
class Fetcher(Protocol):
    """Contract for a single knowledge-category fetch."""

    async def fetch(self, condition: str) -> Sequence[CategoryRecord]:
        """Return ordered records of one category related to a condition."""
        ...


@runtime_checkable
class Aggregator(Protocol):
    """Contract for reasoning record assembly."""

    async def generate(
        self,
        condition: str,
        timeout: float | None = None,
    ) -> ReasoningRecord:
        """Assemble the reasoning record for a condition."""
        ...
