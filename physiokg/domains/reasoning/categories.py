"""
Knowledge Categories - Graph schema and ordering rules per category.

Each category is one hop from a ``(:Condition)`` node along its own edge type.
The schema here is the single place that names labels, edges and sort rules;
the fetcher and aggregator are generic over it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .models import (
    Assessment,
    Exercise,
    Impairment,
    Intervention,
    KnowledgeRecord,
    Medication,
    OutcomeMeasure,
    RedFlag,
    rank_of,
)

__all__ = [
    "CATEGORIES",
    "CategoryDescriptor",
    "EdgeType",
    "NodeLabel",
]


class NodeLabel(str, Enum):
    """Node labels in the physiotherapy knowledge graph."""

    CONDITION = "Condition"
    IMPAIRMENT = "Impairment"
    ASSESSMENT = "Assessment"
    INTERVENTION = "Intervention"
    EXERCISE = "Exercise"
    RED_FLAG = "RedFlag"
    MEDICATION = "Medication"
    OUTCOME_MEASURE = "OutcomeMeasure"


class EdgeType(str, Enum):
    """Relationship types leaving a condition node."""

    HAS_IMPAIRMENT = "HAS_IMPAIRMENT"
    ASSESSED_BY = "ASSESSED_BY"
    TREATED_WITH = "TREATED_WITH"
    PRESCRIBES_EXERCISE = "PRESCRIBES_EXERCISE"
    HAS_RED_FLAG = "HAS_RED_FLAG"
    MANAGED_WITH = "MANAGED_WITH"
    MEASURED_BY = "MEASURED_BY"


@dataclass(frozen=True)
class CategoryDescriptor:
    """
    Everything that distinguishes one knowledge category from another.

    Attributes:
        key: Field name on ``ReasoningRecord``
        label: Target node label
        edge_type: Relationship from the condition node
        model: Record type the node properties map onto
        sort_key: Category ordering (before the deterministic final tie-break)
    """

    key: str
    label: NodeLabel
    edge_type: EdgeType
    model: type[KnowledgeRecord]
    sort_key: Callable[[Any], tuple]

    @property
    def query(self) -> str:
        """Cypher template; the condition only travels as ``$condition``."""
        return (
            f"MATCH (c:{NodeLabel.CONDITION.value})"
            f"-[:{self.edge_type.value}]->(n:{self.label.value}) "
            "WHERE toLower(c.name) = toLower($condition) "
            "RETURN properties(n) AS props"
        )


def _by_name(record: Any) -> tuple:
    return (record.name,)


def _red_flag_key(record: RedFlag) -> tuple:
    return (rank_of(record.urgency), record.flag)


def _assessment_key(record: Assessment) -> tuple:
    return (rank_of(record.priority), record.name)


def _exercise_key(record: Exercise) -> tuple:
    return (rank_of(record.phase), record.name)


CATEGORIES: tuple[CategoryDescriptor, ...] = (
    CategoryDescriptor(
        key="impairments",
        label=NodeLabel.IMPAIRMENT,
        edge_type=EdgeType.HAS_IMPAIRMENT,
        model=Impairment,
        sort_key=_by_name,
    ),
    CategoryDescriptor(
        key="assessments",
        label=NodeLabel.ASSESSMENT,
        edge_type=EdgeType.ASSESSED_BY,
        model=Assessment,
        sort_key=_assessment_key,
    ),
    CategoryDescriptor(
        key="interventions",
        label=NodeLabel.INTERVENTION,
        edge_type=EdgeType.TREATED_WITH,
        model=Intervention,
        sort_key=_by_name,
    ),
    CategoryDescriptor(
        key="exercises",
        label=NodeLabel.EXERCISE,
        edge_type=EdgeType.PRESCRIBES_EXERCISE,
        model=Exercise,
        sort_key=_exercise_key,
    ),
    CategoryDescriptor(
        key="red_flags",
        label=NodeLabel.RED_FLAG,
        edge_type=EdgeType.HAS_RED_FLAG,
        model=RedFlag,
        sort_key=_red_flag_key,
    ),
    CategoryDescriptor(
        key="medications",
        label=NodeLabel.MEDICATION,
        edge_type=EdgeType.MANAGED_WITH,
        model=Medication,
        sort_key=_by_name,
    ),
    CategoryDescriptor(
        key="outcome_measures",
        label=NodeLabel.OUTCOME_MEASURE,
        edge_type=EdgeType.MEASURED_BY,
        model=OutcomeMeasure,
        sort_key=_by_name,
    ),
)
