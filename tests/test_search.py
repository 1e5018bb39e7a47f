# File: tests/test_search.py | Version: 1.0 | Title: Global search matcher
import pytest

from viewengine.engine.search import matches_search
from viewengine.schemas.database import Row


def _row(*values) -> Row:
    return Row(
        id="r",
        cells=[{"property_id": f"p{i}", "value": v} for i, v in enumerate(values)],
    )


@pytest.mark.parametrize("query", ["", None])
def test_blank_query_matches_everything(query):
    assert matches_search(_row(), query) is True
    assert matches_search(_row("Alpha"), query) is True


def test_case_insensitive_substring():
    assert matches_search(_row("Alpha"), "LPH") is True
    assert matches_search(_row("Alpha"), "beta") is False


def test_any_cell_is_enough():
    row = _row("Alpha", 2024, {"value": "Blue"})
    assert matches_search(row, "202") is True
    assert matches_search(row, "blue") is True
    assert matches_search(row, "alpha") is True


def test_objects_are_matched_on_their_json_text():
    row = _row({"linkedRowIds": ["row-abc"]}, ["Work", "Home"])
    assert matches_search(row, "row-abc") is True
    assert matches_search(row, "linkedrowids") is True
    assert matches_search(row, '"home"') is True


def test_missing_values_do_not_match_null():
    assert matches_search(_row(None), "null") is False


def test_row_without_cells_fails_non_blank_query():
    assert matches_search(_row(), "a") is False


def test_booleans_search_as_true_false():
    assert matches_search(_row(True), "tru") is True
