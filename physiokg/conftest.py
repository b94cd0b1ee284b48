"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from physiokg.testing import FakeGraphStore


@pytest.fixture
def graph_store() -> FakeGraphStore:
    """Graph seeded with a few musculoskeletal conditions."""
    store = FakeGraphStore()
    store.add_condition(
        "Frozen Shoulder",
        HAS_IMPAIRMENT=[
            {"name": "Reduced shoulder external rotation", "severity": "Severe"},
            {"name": "Night pain", "severity": "moderate", "evidence": "Kelley 2013"},
        ],
        ASSESSED_BY=[
            {"name": "SPADI", "type": "Questionnaire", "priority": "Medium"},
            {"name": "Passive ROM", "type": "Physical test", "priority": "High"},
            {"name": "Coracoid pain test", "type": "Special test"},
        ],
        TREATED_WITH=[
            {"name": "Joint mobilisation", "category": "Manual therapy", "evidence": "Grade B"},
            {"name": "Education", "category": "Self-management", "evidence": "Grade A"},
        ],
        PRESCRIBES_EXERCISE=[
            {"name": "Pendulum", "phase": "Early", "dosage": "2x10, daily"},
            {"name": "Sleeper stretch", "phase": "Late"},
            {"name": "Table slides", "phase": "Mid", "dosage": "3x10"},
            {"name": "Wand flexion", "phase": "Early"},
        ],
        HAS_RED_FLAG=[
            {"flag": "Sudden weakness", "urgency": "High", "action": "Urgent referral"},
            {"flag": "Night pain", "urgency": "High", "action": "Screen for malignancy"},
        ],
        MEASURED_BY=[
            {"name": "SPADI", "type": "PROM", "frequency": "Every 4 weeks"},
        ],
    )
    store.add_condition(
        "Rotator Cuff Tendinopathy",
        MANAGED_WITH=[
            {"name": "NSAIDs", "indication": "Short-term pain relief", "caution": "GI risk"},
        ],
    )
    store.add_condition("Low Back Pain")
    return store
