"""
Reasoning Aggregator - Assemble one reasoning record per condition.

Resolves the condition, fans out to every category fetcher concurrently and
merges the ordered results. A failing fetch fails the whole call so that a
store outage is never mistaken for missing knowledge.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from physiokg.config.errors import (
    ConditionNotFoundError,
    InvalidArgumentError,
    ReasoningTimeoutError,
)

from .categories import CATEGORIES, CategoryDescriptor, NodeLabel
from .fetcher import CategoryFetcher
from .models import KnowledgeRecord, ReasoningRecord

if TYPE_CHECKING:
    from .contracts import GraphStore

logger = logging.getLogger(__name__)

__all__ = ["ReasoningAggregator", "CONDITION_LOOKUP_QUERY", "require_condition"]

CONDITION_LOOKUP_QUERY = (
    f"MATCH (c:{NodeLabel.CONDITION.value}) "
    "WHERE toLower(c.name) = toLower($condition) "
    "RETURN c.name AS name "
    "ORDER BY c.name "
    "LIMIT 1"
)


def require_condition(condition: str) -> str:
    """Trim a condition name, rejecting one that is blank."""
    name = condition.strip() if isinstance(condition, str) else ""
    if not name:
        raise InvalidArgumentError("Condition is required", {"condition": condition})
    return name


class ReasoningAggregator:
    """
    Clinical reasoning engine over the knowledge graph.

    Example:
        >>> aggregator = ReasoningAggregator(neo4j_client)
        >>> record = await aggregator.generate("frozen shoulder", timeout=5.0)
        >>> record.condition
        'Frozen Shoulder'
    """

    def __init__(
        self,
        store: GraphStore,
        categories: Sequence[CategoryDescriptor] = CATEGORIES,
        max_concurrency: int = len(CATEGORIES),
        default_timeout: float | None = None,
    ) -> None:
        """
        Initialize aggregator.

        Args:
            store: Graph store shared by the lookup and all fetchers
            categories: Category descriptors to fan out over
            max_concurrency: Concurrent category queries (1 serializes them)
            default_timeout: Deadline in seconds when generate() gets none
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self._store = store
        self._fetchers = [CategoryFetcher(store, d) for d in categories]
        self._max_concurrency = max_concurrency
        self._default_timeout = default_timeout

    async def generate(
        self,
        condition: str,
        timeout: float | None = None,
    ) -> ReasoningRecord:
        """
        Build the reasoning record for a condition.

        Args:
            condition: Condition name (matched case-insensitively)
            timeout: Deadline in seconds; falls back to the default

        Returns:
            ReasoningRecord named with the canonical display name

        Raises:
            InvalidArgumentError: Empty condition
            ConditionNotFoundError: No such condition; no fetcher is run
            UpstreamUnavailableError: Store failure in any query
            ReasoningTimeoutError: Deadline exceeded; in-flight fetches cancelled
        """
        name = require_condition(condition)

        deadline = timeout if timeout is not None else self._default_timeout
        if deadline is None:
            return await self._generate(name)

        try:
            return await asyncio.wait_for(self._generate(name), timeout=deadline)
        except asyncio.TimeoutError:
            logger.warning("Reasoning for '%s' timed out after %.2fs", name, deadline)
            raise ReasoningTimeoutError(name, deadline) from None

    async def exists(self, condition: str) -> str | None:
        """Return the canonical condition name, or None if absent."""
        rows = await self._store.execute_query(
            CONDITION_LOOKUP_QUERY,
            {"condition": condition},
        )
        if not rows:
            return None
        return rows[0].get("name")

    async def _generate(self, condition: str) -> ReasoningRecord:
        canonical = await self.exists(condition)
        if canonical is None:
            logger.info("Condition not found: '%s'", condition)
            raise ConditionNotFoundError(condition)

        results = await self._fan_out(canonical)
        record = ReasoningRecord(condition=canonical, **results)

        logger.info(
            "Generated reasoning for '%s': %s",
            canonical,
            ", ".join(f"{key}={len(items)}" for key, items in results.items()),
        )
        return record

    async def _fan_out(self, condition: str) -> dict[str, list[KnowledgeRecord]]:
        """Run every fetcher concurrently; any failure cancels the rest."""
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def fetch_with_limit(fetcher: CategoryFetcher) -> list[KnowledgeRecord]:
            async with semaphore:
                return await fetcher.fetch(condition)

        tasks = [asyncio.ensure_future(fetch_with_limit(f)) for f in self._fetchers]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return {
            fetcher.key: records
            for fetcher, records in zip(self._fetchers, results)
        }
