# File: tests/test_hierarchy.py | Version: 1.0 | Title: Parent/child flattening
from viewengine.engine.hierarchy import flatten
from viewengine.schemas.database import Row
from viewengine.schemas.view import HierarchyRow


def _row(rid: str, parent=None, **extra) -> Row:
    return Row.model_validate({"id": rid, "parentRowId": parent, "cells": [], **extra})


def _shape(out):
    return [(r.id, r.depth, r.has_children) for r in out]


def test_child_follows_its_parent():
    out = flatten([_row("r1"), _row("r2"), _row("r3"), _row("r4", "r1")])
    assert _shape(out) == [
        ("r1", 0, True),
        ("r4", 1, False),
        ("r2", 0, False),
        ("r3", 0, False),
    ]


def test_missing_parent_makes_a_root():
    out = flatten([_row("r2"), _row("r4", "r1")])
    assert _shape(out) == [("r2", 0, False), ("r4", 0, False)]


def test_nested_subtrees_in_pre_order_with_sibling_order_kept():
    rows = [
        _row("a"),
        _row("b"),
        _row("a2", "a"),
        _row("a1", "a"),
        _row("a2x", "a2"),
        _row("b1", "b"),
    ]
    out = flatten(rows)
    assert _shape(out) == [
        ("a", 0, True),
        ("a2", 1, True),
        ("a2x", 2, False),
        ("a1", 1, False),
        ("b", 0, True),
        ("b1", 1, False),
    ]


def test_child_listed_before_its_parent_still_nests():
    out = flatten([_row("c", "p"), _row("p")])
    assert _shape(out) == [("p", 0, True), ("c", 1, False)]


def test_self_parent_is_a_root():
    assert _shape(flatten([_row("x", "x")])) == [("x", 0, False)]


def test_parent_cycle_keeps_every_row_once():
    out = flatten([_row("a", "b"), _row("b", "a"), _row("c")])
    ids = [r.id for r in out]
    assert sorted(ids) == ["a", "b", "c"]
    assert len(ids) == 3
    assert out[ids.index("b")].depth == out[ids.index("a")].depth + 1


def test_depth_matches_parent_depth_plus_one():
    rows = [_row("n0")] + [_row(f"n{i}", f"n{i - 1}") for i in range(1, 50)]
    out = flatten(rows)
    by_id = {r.id: r for r in out}
    for i, r in enumerate(out):
        if r.parent_row_id in by_id:
            parent = by_id[r.parent_row_id]
            assert r.depth == parent.depth + 1
            assert out.index(parent) < i
    assert out[-1].depth == 49


def test_annotated_rows_are_copies_with_upstream_fields():
    original = _row("r1", None, pageId="page-1", order=3)
    out = flatten([original])
    assert isinstance(out[0], HierarchyRow)
    assert out[0] is not original
    assert out[0].cells is not None
    dumped = out[0].model_dump(by_alias=True)
    assert dumped["pageId"] == "page-1"
    assert dumped["order"] == 3
    assert dumped["hasChildren"] is False
    assert not hasattr(original, "depth")


def test_empty_input():
    assert flatten([]) == []


def test_stale_annotations_on_input_rows_are_replaced():
    row = _row("a", None, hasChildren=True, depth=3)
    out = flatten([row])
    assert (out[0].depth, out[0].has_children) == (0, False)
    dumped = out[0].model_dump(by_alias=True)
    assert dumped["hasChildren"] is False and dumped["depth"] == 0
    assert "has_children" not in dumped
