"""
Reasoning Routes - Clinical reasoning record per condition.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query

from physiokg.domains.reasoning import ReasoningAggregator, ReasoningRecord
from physiokg.interfaces.api.deps import get_reasoning_aggregator

router = APIRouter()


@router.get(
    "/{condition:path}",
    response_model=ReasoningRecord,
    response_model_exclude_none=True,
)
async def generate_reasoning(
    condition: str = Path(..., description="Condition name (case-insensitive)"),
    timeout: float | None = Query(
        None, gt=0, le=60, description="Deadline in seconds"
    ),
    aggregator: ReasoningAggregator = Depends(get_reasoning_aggregator),
):
    """
    Generate the clinical reasoning record for a condition.

    Categories with no knowledge are returned as empty lists. Unknown
    conditions are 404; graph outages 503; exceeded deadlines 504.
    """
    return await aggregator.generate(condition, timeout=timeout)
