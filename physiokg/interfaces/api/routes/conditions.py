"""
Condition Routes - Condition catalog listing and search.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from physiokg.domains.conditions import ConditionIndex
from physiokg.interfaces.api.deps import get_condition_index

router = APIRouter()


class ConditionListResponse(BaseModel):
    """All known conditions."""

    conditions: list[str]
    total: int


class ConditionSearchResponse(BaseModel):
    """Conditions matching a search fragment."""

    query: str
    conditions: list[str]
    total: int


@router.get("/conditions", response_model=ConditionListResponse)
async def list_conditions(
    index: ConditionIndex = Depends(get_condition_index),
):
    """List every condition in the knowledge graph, alphabetically."""
    conditions = await index.list_conditions()
    return ConditionListResponse(conditions=conditions, total=len(conditions))


@router.get("/search", response_model=ConditionSearchResponse)
async def search_conditions(
    q: str | None = Query(None, description="Condition name fragment"),
    index: ConditionIndex = Depends(get_condition_index),
):
    """
    Search conditions by name.

    - **q**: Case-insensitive name fragment (required, non-blank)

    Returns at most the configured number of names, alphabetically.
    """
    conditions = await index.search(q or "")
    return ConditionSearchResponse(
        query=q.strip(),
        conditions=conditions,
        total=len(conditions),
    )
