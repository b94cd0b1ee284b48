"""
Reasoning Domain - Condition-centred clinical knowledge aggregation.

This domain handles:
- One-hop category traversals from a condition node
- Mapping node properties onto typed category records
- Per-category clinical ordering (urgency, priority, phase)
- Assembly of the reasoning record with all-or-nothing failure semantics
"""

from .aggregator import ReasoningAggregator, require_condition
from .categories import CATEGORIES, CategoryDescriptor, EdgeType, NodeLabel
from .contracts import Aggregator, Fetcher, GraphStore
from .fetcher import CategoryFetcher
from .models import (
    Assessment,
    CategoryRecord,
    Exercise,
    Impairment,
    Intervention,
    KnowledgeRecord,
    Medication,
    OutcomeMeasure,
    Phase,
    Priority,
    ReasoningRecord,
    RedFlag,
    Severity,
    Urgency,
)

__all__ = [
    # Contracts
    "GraphStore",
    "Fetcher",
    "Aggregator",
    # Models
    "KnowledgeRecord",
    "CategoryRecord",
    "Impairment",
    "Assessment",
    "Intervention",
    "Exercise",
    "RedFlag",
    "Medication",
    "OutcomeMeasure",
    "ReasoningRecord",
    "Severity",
    "Priority",
    "Urgency",
    "Phase",
    # Schema
    "CATEGORIES",
    "CategoryDescriptor",
    "EdgeType",
    "NodeLabel",
    # Implementations
    "CategoryFetcher",
    "ReasoningAggregator",
    "require_condition",
]
