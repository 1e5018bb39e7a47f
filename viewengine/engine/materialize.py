# File: /viewengine/engine/materialize.py | Version: 1.4 | Title: View materialization (search -> filter -> sort -> group | flatten)
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from viewengine.engine.grouping import group_rows
from viewengine.engine.hierarchy import flatten
from viewengine.engine.predicates import matches, normalize
from viewengine.engine.search import matches_search
from viewengine.engine.sorting import sort_rows
from viewengine.engine.values import read
from viewengine.schemas.database import DatabaseSnapshot, Property, Row
from viewengine.schemas.view import (
    FilterRule,
    FlatViewResult,
    GroupedViewResult,
    ViewResult,
    ViewState,
)

log = logging.getLogger(__name__)


class _Node:
    """A row plus its effective property values, read once and cached."""

    __slots__ = ("row", "values")

    def __init__(self, row: Row, property_ids: Iterable[str]):
        self.row = row
        self.values: Dict[str, Any] = {pid: read(row, pid) for pid in property_ids}

    def value(self, property_id: str) -> Any:
        if property_id not in self.values:
            self.values[property_id] = read(self.row, property_id)
        return self.values[property_id]


def _node_value(node: _Node, property_id: str) -> Any:
    return node.value(property_id)


def _node_row(node: _Node) -> Row:
    return node.row


def _grouping_value(prop: Optional[Property]) -> Callable[[_Node, str], Any]:
    if prop is None:
        return _node_value
    # same envelope handling as filters, so relations bucket by linked ids
    return lambda node, property_id: normalize(prop, node.value(property_id))


def _resolve_filters(
    db: DatabaseSnapshot, filters: List[FilterRule]
) -> List[Tuple[Property, FilterRule]]:
    active = []
    for rule in filters:
        prop = db.property_by_id(rule.property_id)
        if prop is None:
            log.debug("Skipping filter on missing property %s", rule.property_id)
            continue
        active.append((prop, rule))
    return active


def materialize(
    database: Union[DatabaseSnapshot, Dict[str, Any]],
    view: Union[ViewState, Dict[str, Any], None] = None,
    today: Optional[date] = None,
) -> ViewResult:
    """
    Produce what a view renders from a database snapshot and a view state.

    Rows are searched (any raw cell), filtered (every rule), stably sorted,
    then either bucketed by `group_by_property` or flattened into a
    depth-annotated parent/child sequence. Inputs are never mutated; output
    rows may share cells with the input rows.

    `today` pins the day relative date filters compare against.
    """
    db = (
        database
        if isinstance(database, DatabaseSnapshot)
        else DatabaseSnapshot.model_validate(database)
    )
    if view is None:
        state = ViewState()
    elif isinstance(view, ViewState):
        state = view
    else:
        state = ViewState.model_validate(view)

    property_ids = [p.id for p in db.properties]
    nodes = [_Node(row, property_ids) for row in db.rows]
    total = len(nodes)

    if state.search_query:
        nodes = [n for n in nodes if matches_search(n.row, state.search_query)]

    if state.filters:
        active = _resolve_filters(db, state.filters)
        if active:
            day = today or date.today()
            nodes = [
                n
                for n in nodes
                if all(matches(p, n.value(r.property_id), r, day) for p, r in active)
            ]

    if state.sorts:
        nodes = sort_rows(nodes, state.sorts, _node_value)

    log.debug("Materialized %d of %d rows", len(nodes), total)

    if state.group_by_property:
        prop = db.property_by_id(state.group_by_property)
        groups = group_rows(
            nodes, state.group_by_property, _grouping_value(prop), _node_row
        )
        return GroupedViewResult(groups=groups)
    return FlatViewResult(rows=flatten(nodes, _node_row))


def iter_result_rows(result: ViewResult) -> Iterator[Row]:
    if isinstance(result, GroupedViewResult):
        for group in result.groups:
            yield from group.rows
    else:
        yield from result.rows
