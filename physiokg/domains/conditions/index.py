"""
Condition Index - Case-insensitive substring search over condition names.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from physiokg.config.errors import InvalidArgumentError

if TYPE_CHECKING:
    from physiokg.domains.reasoning.contracts import GraphStore

logger = logging.getLogger(__name__)

__all__ = ["ConditionIndex", "DEFAULT_SEARCH_LIMIT"]

DEFAULT_SEARCH_LIMIT = 20

SEARCH_QUERY = """
    MATCH (c:Condition)
    WHERE toLower(c.name) CONTAINS toLower($fragment)
    RETURN c.name AS name
    ORDER BY c.name
    LIMIT $limit
"""

LIST_QUERY = """
    MATCH (c:Condition)
    RETURN c.name AS name
    ORDER BY c.name
"""


class ConditionIndex:
    """
    Search the condition catalog held in the graph store.

    The store does the heavy lifting; containment, ordering and the cap are
    re-applied here so results honour the contract for any store.

    Example:
        >>> index = ConditionIndex(neo4j_client)
        >>> await index.search("shoulder")
        ['Frozen Shoulder']
    """

    def __init__(self, store: GraphStore, limit: int = DEFAULT_SEARCH_LIMIT) -> None:
        """
        Initialize index.

        Args:
            store: Graph store holding ``(:Condition {name})`` nodes
            limit: Maximum names returned by search()
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._store = store
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    async def search(self, fragment: str) -> list[str]:
        """
        Find condition names containing a fragment.

        Args:
            fragment: Search text; surrounding whitespace is ignored

        Returns:
            Matching names, ascending, at most ``limit`` entries

        Raises:
            InvalidArgumentError: Fragment is empty after trimming
            UpstreamUnavailableError: Store failure
        """
        needle = require_fragment(fragment)

        rows = await self._store.execute_query(
            SEARCH_QUERY,
            {"fragment": needle, "limit": self._limit},
        )

        lowered = needle.lower()
        names = [name for name in _names(rows) if lowered in name.lower()]
        matches = sorted(set(names))

        if len(matches) > self._limit:
            logger.debug(
                "Search '%s' truncated from %d to %d results",
                needle,
                len(matches),
                self._limit,
            )
        return matches[: self._limit]

    async def list_conditions(self) -> list[str]:
        """Get every condition name in ascending order."""
        rows = await self._store.execute_query(LIST_QUERY, {})
        names = sorted(set(_names(rows)))
        logger.debug("Listed %d conditions", len(names))
        return names


def require_fragment(fragment: str) -> str:
    """Trim a search fragment, rejecting one that is blank."""
    needle = fragment.strip() if isinstance(fragment, str) else ""
    if not needle:
        raise InvalidArgumentError("Search query is required", {"fragment": fragment})
    return needle


def _names(rows: list[dict[str, Any]]) -> list[str]:
    """Extract usable names from result rows."""
    names = []
    for row in rows:
        name = row.get("name")
        if isinstance(name, str) and name:
            names.append(name)
        else:
            logger.warning("Skipping condition row without a name: %r", row)
    return names
