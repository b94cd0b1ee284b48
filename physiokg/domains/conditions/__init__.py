"""
Condition Domain - Condition catalog lookup.

This domain handles:
- Case-insensitive substring search over condition names
- Listing the condition catalog
"""

from .contracts import ConditionSearch
from .index import ConditionIndex, require_fragment

__all__ = [
    "ConditionSearch",
    "ConditionIndex",
    "require_fragment",
]
