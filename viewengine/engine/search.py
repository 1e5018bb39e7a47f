# File: /viewengine/engine/search.py | Version: 1.0 | Title: Global search across raw cell values
from __future__ import annotations

from typing import Any, Optional

from viewengine.engine.values import stringify, to_json
from viewengine.schemas.database import Row


def _searchable_text(value: Any) -> str:
    # objects and arrays are matched on their JSON text, envelopes included
    if isinstance(value, (dict, list, tuple)):
        return to_json(value)
    return stringify(value)


def matches_search(row: Row, query: Optional[str]) -> bool:
    """Case-insensitive substring match against any cell of the row."""
    if not query:
        return True
    needle = query.lower()
    for cell in row.cells:
        if cell.value is None:
            continue
        if needle in _searchable_text(cell.value).lower():
            return True
    return False
