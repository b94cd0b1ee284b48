"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of the graph client and domain services.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from physiokg.adapters.neo4j import Neo4jClient
from physiokg.config import UpstreamUnavailableError, get_settings
from physiokg.domains.conditions import ConditionIndex
from physiokg.domains.reasoning import ReasoningAggregator

logger = logging.getLogger(__name__)


@lru_cache
def get_graph_client() -> Neo4jClient:
    """Get Neo4j client singleton (one driver shared by all requests)."""
    settings = get_settings()
    return Neo4jClient(
        uri=settings.neo4j_uri,
        username=settings.neo4j_username,
        password=settings.neo4j_password,
        database=settings.neo4j_database,
    )


@lru_cache
def get_condition_index() -> ConditionIndex:
    """Get condition index singleton."""
    settings = get_settings()
    return ConditionIndex(get_graph_client(), limit=settings.search_limit)


@lru_cache
def get_reasoning_aggregator() -> ReasoningAggregator:
    """Get reasoning aggregator singleton."""
    settings = get_settings()
    return ReasoningAggregator(
        get_graph_client(),
        max_concurrency=settings.reasoning_max_concurrency,
        default_timeout=settings.reasoning_timeout_seconds,
    )


async def init_services() -> None:
    """
    Initialize services on startup.

    This should be called from the FastAPI lifespan handler. An unreachable
    graph does not stop the API; requests report it as 503 until restart.
    """
    client = get_graph_client()
    try:
        await client.connect()
    except UpstreamUnavailableError as e:
        logger.error("Knowledge graph unavailable at startup: %s", e.details)


async def cleanup_services() -> None:
    """Cleanup services on shutdown."""
    await get_graph_client().close()
