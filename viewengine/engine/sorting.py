# File: /viewengine/engine/sorting.py | Version: 1.2 | Title: Stable multi-key sort (nulls last)
from __future__ import annotations

from datetime import datetime
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Sequence, TypeVar

from viewengine.engine.values import read, stringify, to_number
from viewengine.schemas.view import SortRule

T = TypeVar("T")
ValueOf = Callable[[Any, str], Any]


def _to_primitive(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return stringify(value)
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, datetime):
        return to_number(value)
    return value


def js_greater(a: Any, b: Any) -> bool:
    """
    The relational `a > b` of the browser: two strings compare by code
    point, anything else numerically; NaN is never greater.
    """
    pa, pb = _to_primitive(a), _to_primitive(b)
    if isinstance(pa, str) and isinstance(pb, str):
        return pa > pb
    return to_number(pa) > to_number(pb)


def compare(a: Any, b: Any, sorts: Sequence[SortRule], value_of: ValueOf = read) -> int:
    """
    -1/0/1 ordering of two rows under `sorts`, first rule primary.
    A missing value goes after any present one whatever the direction.
    """
    for rule in sorts:
        va = value_of(a, rule.property_id)
        vb = value_of(b, rule.property_id)
        if va is None and vb is None:
            continue
        if va is None:
            return 1
        if vb is None:
            return -1
        if va == vb:
            continue
        result = 1 if js_greater(va, vb) else -1
        return -result if rule.direction == "desc" else result
    return 0


def sort_rows(
    items: Iterable[T], sorts: Sequence[SortRule], value_of: ValueOf = read
) -> List[T]:
    """Stable sort; rows tied on every rule keep their incoming order."""
    result = list(items)
    if not sorts:
        return result
    result.sort(key=cmp_to_key(lambda a, b: compare(a, b, sorts, value_of)))
    return result


def parse_sort_spec(spec: str | None) -> List[SortRule]:
    """'p2:desc,p1' -> [SortRule(p2, desc), SortRule(p1, asc)]"""
    rules: List[SortRule] = []
    if not spec:
        return rules
    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue
        if ":" in token:
            f, d = token.split(":", 1)
        else:
            f, d = token, "asc"
        f = f.strip()
        if not f:
            continue
        rules.append(
            SortRule(property_id=f, direction="desc" if d.strip().lower() == "desc" else "asc")
        )
    return rules
