"""
Reasoning Models - Data types for reasoning domain.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrdinalLevel(str, Enum):
    """
    Ordered clinical level parsed from free-form graph properties.

    Member declaration order is the sort order. Parsing ignores case and
    surrounding whitespace; anything else is rejected.
    """

    @classmethod
    def parse(cls, value: Any) -> OrdinalLevel | None:
        if value is None or isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"{cls.__name__} must be a string, got {type(value).__name__}")

        text = value.strip()
        if not text:
            return None
        for member in cls:
            if member.value.lower() == text.lower():
                return member

        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Unrecognized {cls.__name__} '{value}' (expected one of: {allowed})")

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)


class Severity(OrdinalLevel):
    """Impairment severity."""

    MILD = "Mild"
    MODERATE = "Moderate"
    SEVERE = "Severe"


class Priority(OrdinalLevel):
    """Assessment priority."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Urgency(OrdinalLevel):
    """Red flag urgency."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Phase(OrdinalLevel):
    """Rehabilitation phase of an exercise."""

    EARLY = "Early"
    MID = "Mid"
    LATE = "Late"


def rank_of(level: OrdinalLevel | None) -> tuple[int, int]:
    """Sort key placing unset values after every defined level."""
    if level is None:
        return (1, 0)
    return (0, level.rank)


class KnowledgeRecord(BaseModel):
    """Base for records mapped from related knowledge-graph nodes."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_scalar(cls, value: Any) -> Any:
        # Blank strings mean "not recorded"; numbers are kept as display text
        if isinstance(value, str):
            value = value.strip()
            return value or None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Impairment(KnowledgeRecord):
    """Body function/structure impairment associated with a condition."""

    name: str
    severity: Severity | None = None
    evidence: str | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Severity | None:
        return Severity.parse(value)


class Assessment(KnowledgeRecord):
    """Assessment tool or clinical test."""

    name: str
    type: str | None = None
    priority: Priority | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def _parse_priority(cls, value: Any) -> Priority | None:
        return Priority.parse(value)


class Intervention(KnowledgeRecord):
    """Treatment intervention with its evidence grade."""

    name: str
    category: str | None = None
    evidence: str | None = None


class Exercise(KnowledgeRecord):
    """Exercise prescription."""

    name: str
    phase: Phase | None = None
    dosage: str | None = None

    @field_validator("phase", mode="before")
    @classmethod
    def _parse_phase(cls, value: Any) -> Phase | None:
        return Phase.parse(value)


class RedFlag(KnowledgeRecord):
    """Warning sign requiring action. Urgency is mandatory."""

    flag: str
    urgency: Urgency
    action: str | None = None

    @field_validator("urgency", mode="before")
    @classmethod
    def _parse_urgency(cls, value: Any) -> Urgency | None:
        return Urgency.parse(value)


class Medication(KnowledgeRecord):
    """Medication commonly encountered with a condition."""

    name: str
    indication: str | None = None
    caution: str | None = None


class OutcomeMeasure(KnowledgeRecord):
    """Standardized outcome measure."""

    name: str
    type: str | None = None
    frequency: str | None = None


CategoryRecord = Union[
    Impairment,
    Assessment,
    Intervention,
    Exercise,
    RedFlag,
    Medication,
    OutcomeMeasure,
]


class ReasoningRecord(BaseModel):
    """
    Aggregated clinical knowledge for one condition.

    Each list is already ordered by its category rules. An empty list means
    the graph holds no entities of that category for the condition.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    condition: str
    impairments: list[Impairment] = Field(default_factory=list)
    assessments: list[Assessment] = Field(default_factory=list)
    interventions: list[Intervention] = Field(default_factory=list)
    exercises: list[Exercise] = Field(default_factory=list)
    red_flags: list[RedFlag] = Field(default_factory=list, alias="redFlags")
    medications: list[Medication] = Field(default_factory=list)
    outcome_measures: list[OutcomeMeasure] = Field(
        default_factory=list, alias="outcomeMeasures"
    )

    def to_response(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
