# File: /viewengine/engine/__init__.py | Version: 1.0 | Path: /viewengine/engine/__init__.py
"""
Database view materialization: typed value reads, per-type filter
predicates, global search, stable multi-key sorting, group-by buckets and
parent/child flattening, composed by `materialize`.
"""
from .calculations import calculate, default_calculation, summarize
from .materialize import iter_result_rows, materialize

__all__ = [
    "materialize",
    "iter_result_rows",
    "calculate",
    "default_calculation",
    "summarize",
]
