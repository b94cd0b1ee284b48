"""
Adapters - External service integrations.

All external calls are wrapped here to isolate domains from third-party changes.
"""

from .neo4j import Neo4jClient

__all__ = ["Neo4jClient"]
