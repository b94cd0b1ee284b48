"""
PhysioKG - Clinical reasoning lookup over a physiotherapy knowledge graph.

Example:
    >>> from physiokg.domains.reasoning import ReasoningAggregator
    >>> aggregator = ReasoningAggregator(store)
    >>> record = await aggregator.generate("Frozen Shoulder")
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
