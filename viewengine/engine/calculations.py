# File: /viewengine/engine/calculations.py | Version: 1.0 | Title: Column footer calculations over materialized rows
from __future__ import annotations

import math
import statistics
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from viewengine.engine.materialize import iter_result_rows
from viewengine.engine.predicates import normalize
from viewengine.engine.values import is_empty_value, read, stringify, to_number, to_json
from viewengine.schemas.database import Property, PropertyType, Row
from viewengine.schemas.view import CalculationType, ViewResult

Number = Union[int, float]

_NUMERIC = {
    CalculationType.sum,
    CalculationType.average,
    CalculationType.median,
    CalculationType.min,
    CalculationType.max,
    CalculationType.range,
}


def default_calculation(prop_type: PropertyType) -> Optional[CalculationType]:
    if prop_type == PropertyType.NUMBER:
        return CalculationType.sum
    if prop_type == PropertyType.TITLE:
        return CalculationType.count_all
    return None


def _numbers(values: Iterable[Any]) -> List[float]:
    out = []
    for v in values:
        if is_empty_value(v):
            continue
        n = to_number(v)
        if not math.isnan(n):
            out.append(n)
    return out


def _unique_key(value: Any) -> str:
    if isinstance(value, (dict, list, tuple)):
        return to_json(value)
    return stringify(value)


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return 0
    return part * 100.0 / whole


def calculate(
    rows: Iterable[Row], prop: Property, calculation: CalculationType
) -> Optional[Number]:
    values = [normalize(prop, read(r, prop.id)) for r in rows]
    total = len(values)
    filled = [v for v in values if not is_empty_value(v)]

    if calculation == CalculationType.count_all:
        return total
    if calculation in (CalculationType.count_values, CalculationType.count_not_empty):
        return len(filled)
    if calculation == CalculationType.count_unique_values:
        return len({_unique_key(v) for v in filled})
    if calculation == CalculationType.count_empty:
        return total - len(filled)
    if calculation == CalculationType.percent_empty:
        return _percent(total - len(filled), total)
    if calculation == CalculationType.percent_not_empty:
        return _percent(len(filled), total)

    if calculation not in _NUMERIC:
        return None
    nums = _numbers(filled)
    if not nums:
        return None
    if calculation == CalculationType.sum:
        return math.fsum(nums)
    if calculation == CalculationType.average:
        return statistics.fmean(nums)
    if calculation == CalculationType.median:
        return statistics.median(nums)
    if calculation == CalculationType.min:
        return min(nums)
    if calculation == CalculationType.max:
        return max(nums)
    return max(nums) - min(nums)


def summarize(
    result: ViewResult,
    properties: Iterable[Property],
    calculations: Mapping[str, CalculationType],
) -> Dict[str, Optional[Number]]:
    """
    {propertyId: value} for each requested calculation, across every row of
    a materialized view. Calculations on properties that no longer exist are
    dropped.
    """
    rows = list(iter_result_rows(result))
    by_id = {p.id: p for p in properties}
    out: Dict[str, Optional[Number]] = {}
    for property_id, calculation in calculations.items():
        prop = by_id.get(property_id)
        if prop is None:
            continue
        out[property_id] = calculate(rows, prop, calculation)
    return out
