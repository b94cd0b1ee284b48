"""In-memory graph store for exercising the engine without Neo4j."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any

from physiokg.domains.reasoning.categories import EdgeType

SEARCH = "search"
LIST = "list"
LOOKUP = "lookup"


class FakeGraphStore:
    """
    Answers the Cypher templates the engine issues from in-memory data.

    Query kinds are keyed as ``search``, ``list``, ``lookup`` or the edge type
    value of a category traversal. ``failures`` raises on a kind,
    ``blocked`` suspends a kind until cancelled.
    """

    def __init__(self) -> None:
        self.conditions: list[str] = []
        self.related: dict[tuple[str, str], list[dict[str, Any]]] = defaultdict(list)
        self.failures: dict[str, Exception] = {}
        self.blocked: set[str] = set()
        self.cancelled: list[str] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.connected = False

    def add_condition(self, name: str, **related: list[dict[str, Any]]) -> None:
        """Add a condition; keyword names are edge types, values node properties."""
        self.conditions.append(name)
        for edge_type, nodes in related.items():
            self.related[(name, EdgeType(edge_type).value)].extend(nodes)

    def kinds(self) -> list[str]:
        return [self._kind(query) for query, _ in self.calls]

    # Client lifecycle, so the fake can stand in for Neo4jClient
    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    async def execute_query(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        params = parameters or {}
        kind = self._kind(query)
        self.calls.append((query, params))

        if kind in self.blocked:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled.append(kind)
                raise
        if kind in self.failures:
            raise self.failures[kind]

        if kind == SEARCH:
            needle = params["fragment"].lower()
            names = sorted(c for c in self.conditions if needle in c.lower())
            return [{"name": n} for n in names[: params["limit"]]]
        if kind == LIST:
            return [{"name": n} for n in sorted(self.conditions)]

        canonical = self._canonical(params["condition"])
        if kind == LOOKUP:
            return [{"name": canonical}] if canonical else []
        if canonical is None:
            return []
        return [{"props": dict(p)} for p in self.related[(canonical, kind)]]

    def _canonical(self, condition: str) -> str | None:
        for name in self.conditions:
            if name.lower() == condition.lower():
                return name
        return None

    @staticmethod
    def _kind(query: str) -> str:
        for edge_type in EdgeType:
            if f":{edge_type.value}]" in query:
                return edge_type.value
        if "CONTAINS" in query:
            return SEARCH
        if "$condition" in query:
            return LOOKUP
        return LIST
