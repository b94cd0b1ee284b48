"""
Neo4j Adapter - The only place that talks to the graph database.
"""

from .client import Neo4jClient

__all__ = ["Neo4jClient"]
