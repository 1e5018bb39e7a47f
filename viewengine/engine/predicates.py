# File: /viewengine/engine/predicates.py | Version: 1.4 | Title: Per-type filter predicate evaluation
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from viewengine.engine.values import is_empty_value, stringify, to_bool, to_number
from viewengine.schemas.database import Property, PropertyType
from viewengine.schemas.view import FilterOperator, FilterRule

log = logging.getLogger(__name__)

Evaluator = Callable[[Any, FilterOperator, Any, date], bool]

_TEXT_OPS = {
    FilterOperator.is_,
    FilterOperator.is_not,
    FilterOperator.contains,
    FilterOperator.not_contains,
    FilterOperator.starts_with,
    FilterOperator.ends_with,
}
_SELECT_OPS = {
    FilterOperator.is_,
    FilterOperator.is_not,
    FilterOperator.contains,
    FilterOperator.not_contains,
}
_RELATIVE_DAY_OPS = {
    FilterOperator.is_today,
    FilterOperator.is_tomorrow,
    FilterOperator.is_yesterday,
    FilterOperator.is_one_week_ago,
    FilterOperator.is_one_month_ago,
}
_ABSOLUTE_DAY_OPS = {
    FilterOperator.is_,
    FilterOperator.before,
    FilterOperator.after,
    FilterOperator.is_on_or_before,
    FilterOperator.is_on_or_after,
}


def as_operator(raw: Any) -> Optional[FilterOperator]:
    if isinstance(raw, FilterOperator):
        return raw
    try:
        return FilterOperator(str(raw))
    except ValueError:
        return None


def to_day(value: Any) -> Optional[date]:
    """Calendar day of a date-ish value; None when it cannot be read as a date."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, date):
            return value
        elif isinstance(value, (int, float)):
            # epoch milliseconds
            dt = datetime.fromtimestamp(value / 1000.0)
        elif isinstance(value, str) and value.strip():
            dt = date_parser.parse(value)
        else:
            return None
    except (ValueError, OverflowError, OSError):
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.date()


# ---- type families ----


def _match_text(value: Any, op: FilterOperator, operand: Any, today: date) -> bool:
    if op not in _TEXT_OPS:
        return True
    val = stringify(value).lower()
    needle = stringify(operand).lower()
    if op == FilterOperator.is_:
        return val == needle
    if op == FilterOperator.is_not:
        return val != needle
    if op == FilterOperator.contains:
        return needle in val
    if op == FilterOperator.not_contains:
        return needle not in val
    if op == FilterOperator.starts_with:
        return val.startswith(needle)
    return val.endswith(needle)


def _match_number(value: Any, op: FilterOperator, operand: Any, today: date) -> bool:
    if op not in (FilterOperator.is_, FilterOperator.is_not):
        return True
    a = to_number(value)
    # a missing operand is undefined, and Number(undefined) is NaN
    b = float("nan") if operand is None else to_number(operand)
    if op == FilterOperator.is_:
        return a == b
    return a != b


def _match_checkbox(value: Any, op: FilterOperator, operand: Any, today: date) -> bool:
    if op == FilterOperator.is_checked:
        return to_bool(value)
    if op == FilterOperator.is_unchecked:
        return not to_bool(value)
    return True


def _match_select(value: Any, op: FilterOperator, operand: Any, today: date) -> bool:
    if op not in _SELECT_OPS:
        return True
    needle = stringify(operand).lower()
    if isinstance(value, (list, tuple)):
        hit = needle in {stringify(v).lower() for v in value}
        if op in (FilterOperator.is_, FilterOperator.contains):
            return hit
        return not hit
    val = stringify(value).lower()
    if op == FilterOperator.is_:
        return val == needle
    if op == FilterOperator.is_not:
        return val != needle
    if op == FilterOperator.contains:
        return needle in val
    return needle not in val


def _match_date(value: Any, op: FilterOperator, operand: Any, today: date) -> bool:
    if op not in _RELATIVE_DAY_OPS and op not in _ABSOLUTE_DAY_OPS:
        return True
    day = to_day(value)
    if day is None:
        return False

    if op == FilterOperator.is_today:
        return day == today
    if op == FilterOperator.is_tomorrow:
        return day == today + timedelta(days=1)
    if op == FilterOperator.is_yesterday:
        return day == today - timedelta(days=1)
    if op == FilterOperator.is_one_week_ago:
        return day == today - timedelta(days=7)
    if op == FilterOperator.is_one_month_ago:
        return day == today - relativedelta(months=1)

    ref = to_day(operand)
    if ref is None:
        return False
    if op == FilterOperator.is_:
        return day == ref
    if op == FilterOperator.before:
        return day < ref
    if op == FilterOperator.after:
        return day > ref
    if op == FilterOperator.is_on_or_before:
        return day <= ref
    return day >= ref


def _match_computed(value: Any, op: FilterOperator, operand: Any, today: date) -> bool:
    # Rollup/formula output is opaque; pick the family from its runtime shape.
    if isinstance(value, bool):
        return _match_checkbox(value, op, operand, today)
    if isinstance(value, (int, float)):
        return _match_number(value, op, operand, today)
    if isinstance(value, (list, tuple)):
        return _match_select(value, op, operand, today)
    if isinstance(value, str):
        return _match_text(value, op, operand, today)
    return True


EVALUATORS: Dict[PropertyType, Evaluator] = {
    PropertyType.TEXT: _match_text,
    PropertyType.TITLE: _match_text,
    PropertyType.URL: _match_text,
    PropertyType.EMAIL: _match_text,
    PropertyType.PHONE: _match_text,
    PropertyType.NUMBER: _match_number,
    PropertyType.CHECKBOX: _match_checkbox,
    PropertyType.SELECT: _match_select,
    PropertyType.STATUS: _match_select,
    PropertyType.MULTI_SELECT: _match_select,
    PropertyType.RELATION: _match_select,
    PropertyType.DATE: _match_date,
    PropertyType.CREATED_TIME: _match_date,
    PropertyType.UPDATED_TIME: _match_date,
    PropertyType.ROLLUP: _match_computed,
    PropertyType.FORMULA: _match_computed,
}


def normalize(prop: Property, value: Any) -> Any:
    # Relation cells hold {"linkedRowIds": [...]}; filter on the id list.
    if prop.type == PropertyType.RELATION and isinstance(value, dict):
        if "linkedRowIds" in value:
            return list(value["linkedRowIds"] or [])
        if "linked_row_ids" in value:
            return list(value["linked_row_ids"] or [])
    return value


def matches(
    prop: Property,
    cell_value: Any,
    rule: FilterRule,
    today: Optional[date] = None,
) -> bool:
    """
    Does `cell_value` (already unwrapped) satisfy `rule` for a property of
    type `prop.type`?

    Empty checks apply to every type and run first. Any other operator on a
    missing value is a non-match. Otherwise operators the type does not
    understand, and operators nobody understands, let the row through.
    """
    op = as_operator(rule.operator)
    value = normalize(prop, cell_value)
    if op == FilterOperator.is_empty:
        return is_empty_value(value)
    if op == FilterOperator.is_not_empty:
        return not is_empty_value(value)
    if value is None:
        return False
    if op is None:
        log.debug("Unknown filter operator %r passes", rule.operator)
        return True

    evaluator = EVALUATORS.get(prop.type)
    if evaluator is None:
        return True
    return evaluator(value, op, rule.value, today or date.today())
