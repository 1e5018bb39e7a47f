# File: /viewengine/engine/hierarchy.py | Version: 1.3 | Title: Parent/child flattening with depth
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Set

from viewengine.schemas.database import Row
from viewengine.schemas.view import HierarchyRow


_COMPUTED = frozenset({"depth", "has_children", "hasChildren"})


def _annotate(row: Row, depth: int, has_children: bool) -> HierarchyRow:
    # stale annotations carried in as extra fields would shadow the fresh ones
    data = {k: v for k, v in dict(row).items() if k not in _COMPUTED}
    data.update(depth=depth, has_children=has_children)
    return HierarchyRow.model_validate(data)


def flatten(
    items: Iterable[Any], row_of: Callable[[Any], Row] = lambda item: item
) -> List[HierarchyRow]:
    """
    Pre-order flattening of the parent/child tree found in `items`.

    A row hangs under its parent only when that parent is in the same set;
    otherwise it is a root at depth 0. Siblings keep their incoming order.
    Rows unreachable from any root (a parent cycle) are promoted to roots
    where they stand, so every incoming row comes out exactly once.
    """
    rows = [row_of(item) for item in items]
    present = {r.id for r in rows}

    children: Dict[str, List[Row]] = {}
    roots: List[Row] = []
    for r in rows:
        parent_id = r.parent_row_id
        if parent_id and parent_id != r.id and parent_id in present:
            children.setdefault(parent_id, []).append(r)
        else:
            roots.append(r)

    out: List[HierarchyRow] = []
    seen: Set[int] = set()

    def walk(top: Row) -> None:
        stack = [(top, 0)]
        while stack:
            row, depth = stack.pop()
            if id(row) in seen:
                continue
            seen.add(id(row))
            kids = children.get(row.id, [])
            out.append(_annotate(row, depth, bool(kids)))
            for kid in reversed(kids):
                stack.append((kid, depth + 1))

    for root in roots:
        walk(root)
    for r in rows:
        if id(r) not in seen:
            walk(r)
    return out
