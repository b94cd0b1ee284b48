"""
Neo4j Client - Read-only graph query execution.

Features:
- Async-compatible operations
- Connection pooling (shared driver, one session per query)
- Parameterized Cypher execution
- Driver failures mapped to the application error taxonomy
"""

from __future__ import annotations

import logging
from typing import Any

from neo4j import READ_ACCESS, AsyncDriver, AsyncGraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from physiokg.config.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

__all__ = ["Neo4jClient"]


class Neo4jClient:
    """
    Neo4j graph database client.

    Implements the ``GraphStore`` contract used by the condition index and
    the reasoning engine.

    Example:
        >>> client = Neo4jClient("bolt://localhost:7687", "neo4j", "password")
        >>> await client.connect()
        >>> rows = await client.execute_query(
        ...     "MATCH (c:Condition) RETURN c.name AS name LIMIT 10", {}
        ... )
    """

    def __init__(
        self,
        uri: str = "bolt://localhost:7687",
        username: str = "neo4j",
        password: str = "password",
        database: str = "neo4j",
    ) -> None:
        """
        Initialize Neo4j client.

        Args:
            uri: Neo4j connection URI
            username: Database username
            password: Database password
            database: Database name
        """
        self.uri = uri
        self.username = username
        self.password = password
        self.database = database
        self._driver: AsyncDriver | None = None

    @property
    def connected(self) -> bool:
        return self._driver is not None

    async def connect(self) -> None:
        """Establish connection to Neo4j."""
        driver = AsyncGraphDatabase.driver(
            self.uri,
            auth=(self.username, self.password),
        )
        try:
            await driver.verify_connectivity()
        except (Neo4jError, DriverError, OSError) as e:
            await driver.close()
            raise UpstreamUnavailableError(
                f"Cannot connect to Neo4j at {self.uri}",
                {"uri": self.uri, "reason": str(e)},
            ) from e

        self._driver = driver
        logger.info("Connected to Neo4j: %s", self.uri)

    async def close(self) -> None:
        """Close connection."""
        if self._driver:
            await self._driver.close()
            self._driver = None

    async def execute_query(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Execute a parameterized Cypher query in a read session.

        Args:
            query: Cypher query template
            parameters: Values bound to the template placeholders

        Returns:
            List of result records as dicts

        Raises:
            UpstreamUnavailableError: Not connected, or the driver failed
        """
        if not self._driver:
            raise UpstreamUnavailableError("Not connected. Call connect() first.")

        try:
            async with self._driver.session(
                database=self.database,
                default_access_mode=READ_ACCESS,
            ) as session:
                result = await session.run(query, parameters or {})
                return await result.data()
        except (Neo4jError, DriverError, OSError) as e:
            logger.error("Neo4j query failed: %s", e)
            raise UpstreamUnavailableError(
                "Graph query failed",
                {"reason": str(e)},
            ) from e
