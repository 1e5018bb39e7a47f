# File: tests/test_sorting.py | Version: 1.0 | Title: Multi-key stable sort, nulls last
import pytest

from viewengine.engine.sorting import compare, js_greater, parse_sort_spec, sort_rows
from viewengine.schemas.database import Row
from viewengine.schemas.view import SortRule


def _row(rid: str, **cells) -> Row:
    return Row(
        id=rid,
        cells=[{"property_id": pid, "value": v} for pid, v in cells.items()],
    )


def _ids(rows):
    return [r.id for r in rows]


ROWS = [_row("r1", p2=10), _row("r2", p2=20), _row("r3", p2={"value": 5})]


def test_single_key_ascending():
    out = sort_rows(ROWS, [SortRule(property_id="p2", direction="asc")])
    assert _ids(out) == ["r3", "r1", "r2"]


def test_single_key_descending():
    out = sort_rows(ROWS, [SortRule(property_id="p2", direction="desc")])
    assert _ids(out) == ["r2", "r1", "r3"]


def test_sort_returns_new_list_and_keeps_input_order():
    out = sort_rows(ROWS, [SortRule(property_id="p2")])
    assert out is not ROWS
    assert _ids(ROWS) == ["r1", "r2", "r3"]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_nulls_sort_last_in_both_directions(direction):
    rows = [_row("n1"), _row("a", p2=3), _row("n2", p2=None), _row("b", p2=1)]
    out = sort_rows(rows, [SortRule(property_id="p2", direction=direction)])
    assert _ids(out)[2:] == ["n1", "n2"]


def test_ties_keep_incoming_order():
    rows = [_row("x", g="b"), _row("y", g="a"), _row("z", g="b"), _row("w", g="a")]
    out = sort_rows(rows, [SortRule(property_id="g")])
    assert _ids(out) == ["y", "w", "x", "z"]


def test_secondary_key_breaks_ties():
    rows = [
        _row("x", g="b", n=2),
        _row("y", g="a", n=9),
        _row("z", g="b", n=1),
    ]
    out = sort_rows(
        rows,
        [SortRule(property_id="g"), SortRule(property_id="n", direction="desc")],
    )
    assert _ids(out) == ["y", "x", "z"]


def test_compare_returns_zero_when_all_rules_tie():
    a, b = _row("a", g="x"), _row("b", g="x")
    assert compare(a, b, [SortRule(property_id="g")]) == 0
    assert compare(a, b, []) == 0


def test_no_rules_is_identity():
    assert _ids(sort_rows(ROWS, [])) == ["r1", "r2", "r3"]


def test_strings_compare_by_code_point():
    rows = [_row("a", t="b"), _row("b", t="B"), _row("c", t="a")]
    out = sort_rows(rows, [SortRule(property_id="t")])
    assert _ids(out) == ["b", "c", "a"]


def test_js_greater_mixed_types():
    assert js_greater("9", "10") is True  # both strings: lexicographic
    assert js_greater(10, "9") is True  # numeric once either side is a number
    assert js_greater("abc", 1) is False  # NaN is never greater
    assert js_greater(1, "abc") is False
    assert js_greater(True, 0) is True


def test_mixed_type_sort_does_not_raise():
    rows = [_row("a", v="abc"), _row("b", v=3), _row("c", v=["x"]), _row("d", v={"k": 1})]
    out = sort_rows(rows, [SortRule(property_id="v")])
    assert sorted(_ids(out)) == ["a", "b", "c", "d"]


def test_parse_sort_spec():
    rules = parse_sort_spec(" p2:DESC, p1 ,, p3:sideways ")
    assert [(r.property_id, r.direction) for r in rules] == [
        ("p2", "desc"),
        ("p1", "asc"),
        ("p3", "asc"),
    ]
    assert parse_sort_spec(None) == []
    assert parse_sort_spec("") == []
