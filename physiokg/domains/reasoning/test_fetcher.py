"""Tests for the generic category fetcher."""

from __future__ import annotations

import logging

import pytest

from physiokg.config.errors import UpstreamUnavailableError
from physiokg.testing import FakeGraphStore

from .categories import CATEGORIES, CategoryDescriptor, EdgeType
from .contracts import Fetcher
from .fetcher import CategoryFetcher
from .models import Phase, Priority, Urgency


def _descriptor(key: str) -> CategoryDescriptor:
    return next(d for d in CATEGORIES if d.key == key)


def _fetcher(store: FakeGraphStore, key: str) -> CategoryFetcher:
    return CategoryFetcher(store, _descriptor(key))


def test_fetcher_satisfies_contract(graph_store: FakeGraphStore) -> None:
    """Test CategoryFetcher implements the Fetcher protocol."""
    assert isinstance(_fetcher(graph_store, "impairments"), Fetcher)


def test_every_category_has_distinct_edge() -> None:
    """Test each category traverses its own relationship type."""
    assert len(CATEGORIES) == 7
    assert len({d.edge_type for d in CATEGORIES}) == len(CATEGORIES)
    assert len({d.key for d in CATEGORIES}) == len(CATEGORIES)


def test_query_uses_parameter_channel() -> None:
    """Test the traversal template binds the condition as a parameter."""
    query = _descriptor("red_flags").query

    assert "(c:Condition)-[:HAS_RED_FLAG]->(n:RedFlag)" in query
    assert "$condition" in query


async def test_red_flags_ordered_by_urgency_then_text() -> None:
    """Test red flags sort High, Medium, Low with text tie-breaks."""
    store = FakeGraphStore()
    store.add_condition(
        "Cervical Radiculopathy",
        HAS_RED_FLAG=[
            {"flag": "Gait disturbance", "urgency": "Low"},
            {"flag": "Progressive weakness", "urgency": "High"},
            {"flag": "Bilateral symptoms", "urgency": "High"},
            {"flag": "Weight loss", "urgency": "Medium"},
        ],
    )

    flags = await _fetcher(store, "red_flags").fetch("Cervical Radiculopathy")

    assert [f.flag for f in flags] == [
        "Bilateral symptoms",
        "Progressive weakness",
        "Weight loss",
        "Gait disturbance",
    ]
    assert [f.urgency for f in flags] == [
        Urgency.HIGH,
        Urgency.HIGH,
        Urgency.MEDIUM,
        Urgency.LOW,
    ]


async def test_assessments_ordered_by_priority_with_unset_last(
    graph_store: FakeGraphStore,
) -> None:
    """Test assessments sort High, Medium, then unset priority."""
    assessments = await _fetcher(graph_store, "assessments").fetch("Frozen Shoulder")

    assert [a.name for a in assessments] == ["Passive ROM", "SPADI", "Coracoid pain test"]
    assert assessments[2].priority is None
    assert assessments[0].priority is Priority.HIGH


async def test_exercises_ordered_by_phase_then_name(graph_store: FakeGraphStore) -> None:
    """Test exercises sort Early, Mid, Late, then by name."""
    exercises = await _fetcher(graph_store, "exercises").fetch("Frozen Shoulder")

    assert [(e.phase, e.name) for e in exercises] == [
        (Phase.EARLY, "Pendulum"),
        (Phase.EARLY, "Wand flexion"),
        (Phase.MID, "Table slides"),
        (Phase.LATE, "Sleeper stretch"),
    ]
    assert exercises[1].dosage is None


async def test_name_ordered_categories(graph_store: FakeGraphStore) -> None:
    """Test impairments and interventions sort by name."""
    impairments = await _fetcher(graph_store, "impairments").fetch("Frozen Shoulder")
    interventions = await _fetcher(graph_store, "interventions").fetch("Frozen Shoulder")

    assert [i.name for i in impairments] == [
        "Night pain",
        "Reduced shoulder external rotation",
    ]
    assert [i.name for i in interventions] == ["Education", "Joint mobilisation"]


async def test_condition_matched_case_insensitively(graph_store: FakeGraphStore) -> None:
    """Test the condition name is matched regardless of case."""
    measures = await _fetcher(graph_store, "outcome_measures").fetch("frozen SHOULDER")

    assert [m.name for m in measures] == ["SPADI"]
    assert measures[0].frequency == "Every 4 weeks"


async def test_unknown_condition_is_empty(graph_store: FakeGraphStore) -> None:
    """Test an unknown condition yields an empty list, not an error."""
    assert await _fetcher(graph_store, "medications").fetch("Plantar Fasciitis") == []


async def test_identical_parallel_edges_collapse() -> None:
    """Test identical records collapse while same-named variants are kept."""
    store = FakeGraphStore()
    store.add_condition(
        "Knee OA",
        MANAGED_WITH=[
            {"name": "Paracetamol", "indication": "Pain"},
            {"name": "Paracetamol", "indication": "Pain"},
            {"name": "Paracetamol", "indication": "Flare-ups"},
        ],
    )

    medications = await _fetcher(store, "medications").fetch("Knee OA")

    assert [(m.name, m.indication) for m in medications] == [
        ("Paracetamol", "Flare-ups"),
        ("Paracetamol", "Pain"),
    ]


async def test_malformed_nodes_skipped_with_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test malformed nodes are omitted and logged, not fatal."""
    store = FakeGraphStore()
    store.add_condition(
        "Lateral Epicondylalgia",
        HAS_RED_FLAG=[
            {"flag": "Elbow swelling", "urgency": "Medium"},
            {"flag": "Numbness", "urgency": "Soonish"},
            {"action": "Refer", "urgency": "High"},
        ],
    )

    with caplog.at_level(logging.WARNING):
        flags = await _fetcher(store, "red_flags").fetch("Lateral Epicondylalgia")

    assert [f.flag for f in flags] == ["Elbow swelling"]
    warnings = [r for r in caplog.records if "PARTIAL_DATA" in r.getMessage()]
    assert len(warnings) == 2
    assert "RedFlag" in warnings[0].getMessage()


async def test_row_without_properties_skipped() -> None:
    """Test rows lacking node properties are skipped."""

    class RowStore:
        async def execute_query(self, query, parameters=None):
            return [{"props": None}, {"props": {"name": "Grip strength"}}]

    records = await CategoryFetcher(RowStore(), _descriptor("outcome_measures")).fetch("X")

    assert [r.name for r in records] == ["Grip strength"]


async def test_order_independent_of_row_order() -> None:
    """Test output is identical regardless of the store's row order."""
    nodes = [
        {"name": "Education", "category": "Self-management"},
        {"name": "Education", "category": "Advice"},
        {"name": "Dry needling"},
    ]
    forward = FakeGraphStore()
    forward.add_condition("Neck Pain", TREATED_WITH=nodes)
    backward = FakeGraphStore()
    backward.add_condition("Neck Pain", TREATED_WITH=list(reversed(nodes)))

    first = await _fetcher(forward, "interventions").fetch("Neck Pain")
    second = await _fetcher(backward, "interventions").fetch("Neck Pain")

    assert first == second
    assert [i.category for i in first] == [None, "Advice", "Self-management"]


async def test_store_failure_propagates(graph_store: FakeGraphStore) -> None:
    """Test store failures are not swallowed."""
    graph_store.failures[EdgeType.MANAGED_WITH.value] = UpstreamUnavailableError("down")

    with pytest.raises(UpstreamUnavailableError):
        await _fetcher(graph_store, "medications").fetch("Rotator Cuff Tendinopathy")
