"""Tests for the Neo4j client adapter."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from neo4j import READ_ACCESS
from neo4j.exceptions import ServiceUnavailable

from physiokg.config.errors import UpstreamUnavailableError

from .client import Neo4jClient


def _mock_driver(rows: list[dict] | None = None) -> tuple[MagicMock, AsyncMock]:
    """Build a driver whose sessions return the given rows."""
    result = AsyncMock()
    result.data.return_value = rows or []

    session = AsyncMock()
    session.run.return_value = result

    driver = MagicMock()
    driver.verify_connectivity = AsyncMock()
    driver.close = AsyncMock()
    driver.session.return_value.__aenter__.return_value = session
    driver.session.return_value.__aexit__.return_value = False
    return driver, session


async def test_execute_query_requires_connection() -> None:
    """Test querying before connect() is reported as upstream unavailable."""
    client = Neo4jClient()

    with pytest.raises(UpstreamUnavailableError):
        await client.execute_query("RETURN 1")


async def test_execute_query_returns_rows() -> None:
    """Test rows are returned and parameters go through the parameter channel."""
    driver, session = _mock_driver([{"name": "Frozen Shoulder"}])

    with patch(
        "physiokg.adapters.neo4j.client.AsyncGraphDatabase.driver",
        return_value=driver,
    ):
        client = Neo4jClient(database="physio")
        await client.connect()

    assert client.connected
    rows = await client.execute_query(
        "MATCH (c:Condition) WHERE c.name = $condition RETURN c.name AS name",
        {"condition": "Frozen Shoulder"},
    )

    assert rows == [{"name": "Frozen Shoulder"}]
    session.run.assert_awaited_once_with(
        "MATCH (c:Condition) WHERE c.name = $condition RETURN c.name AS name",
        {"condition": "Frozen Shoulder"},
    )
    driver.session.assert_called_once_with(
        database="physio",
        default_access_mode=READ_ACCESS,
    )


async def test_execute_query_wraps_driver_errors() -> None:
    """Test driver failures surface as UpstreamUnavailableError."""
    driver, session = _mock_driver()
    session.run.side_effect = ServiceUnavailable("connection refused")

    with patch(
        "physiokg.adapters.neo4j.client.AsyncGraphDatabase.driver",
        return_value=driver,
    ):
        client = Neo4jClient()
        await client.connect()

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await client.execute_query("RETURN 1")

    assert "connection refused" in exc_info.value.details["reason"]


async def test_connect_failure_closes_driver() -> None:
    """Test a failed connectivity check closes the driver and raises."""
    driver, _ = _mock_driver()
    driver.verify_connectivity.side_effect = ServiceUnavailable("down")

    with patch(
        "physiokg.adapters.neo4j.client.AsyncGraphDatabase.driver",
        return_value=driver,
    ):
        client = Neo4jClient()
        with pytest.raises(UpstreamUnavailableError):
            await client.connect()

    assert not client.connected
    driver.close.assert_awaited_once()


async def test_close_is_idempotent() -> None:
    """Test close() can be called repeatedly."""
    driver, _ = _mock_driver()

    with patch(
        "physiokg.adapters.neo4j.client.AsyncGraphDatabase.driver",
        return_value=driver,
    ):
        client = Neo4jClient()
        await client.connect()

    await client.close()
    await client.close()

    driver.close.assert_awaited_once()
    assert not client.connected
