"""
Category Fetcher - One-hop traversal from a condition to one knowledge category.

A single generic implementation, parameterized by ``CategoryDescriptor``,
serves every category.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .categories import CategoryDescriptor
from .models import KnowledgeRecord

if TYPE_CHECKING:
    from .contracts import GraphStore

logger = logging.getLogger(__name__)

__all__ = ["CategoryFetcher"]


class CategoryFetcher:
    """
    Fetch, map and order the records of one knowledge category.

    Example:
        >>> fetcher = CategoryFetcher(store, red_flags_descriptor)
        >>> flags = await fetcher.fetch("Frozen Shoulder")
    """

    def __init__(self, store: GraphStore, descriptor: CategoryDescriptor) -> None:
        """
        Initialize fetcher.

        Args:
            store: Graph store used for the traversal query
            descriptor: Category schema and ordering rules
        """
        self._store = store
        self._descriptor = descriptor

    @property
    def key(self) -> str:
        return self._descriptor.key

    async def fetch(self, condition: str) -> list[KnowledgeRecord]:
        """
        Get the ordered records related to a condition.

        An unknown condition yields an empty list. Malformed nodes are
        skipped with a warning. Store failures propagate unchanged.

        Args:
            condition: Condition name (matched case-insensitively)

        Returns:
            Records in category order, identical records collapsed
        """
        rows = await self._store.execute_query(
            self._descriptor.query,
            {"condition": condition},
        )

        records: list[KnowledgeRecord] = []
        for row in rows:
            record = self._map_row(row, condition)
            if record is not None and record not in records:
                records.append(record)

        records.sort(key=self._order)

        logger.debug(
            "Fetched %d %s for '%s' (%d rows)",
            len(records),
            self._descriptor.key,
            condition,
            len(rows),
        )
        return records

    def _map_row(self, row: dict[str, Any], condition: str) -> KnowledgeRecord | None:
        """Map a result row onto the category record, or None if malformed."""
        props = row.get("props")
        if not isinstance(props, dict):
            self._warn_partial(condition, "row has no node properties")
            return None

        try:
            return self._descriptor.model.model_validate(props)
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'node'}: {err['msg']}"
                for err in e.errors()
            )
            self._warn_partial(condition, reasons)
            return None

    def _order(self, record: KnowledgeRecord) -> tuple:
        # Serialized form breaks remaining ties so repeated calls agree
        return (*self._descriptor.sort_key(record), record.model_dump_json())

    def _warn_partial(self, condition: str, reason: str) -> None:
        logger.warning(
            "PARTIAL_DATA: skipped %s node for condition '%s': %s",
            self._descriptor.label.value,
            condition,
            reason,
        )
