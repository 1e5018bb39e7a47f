# File: /viewengine/engine/values.py | Version: 1.1 | Title: Typed value reader + JS-style coercions
from __future__ import annotations

import json
import math
from datetime import date, datetime
from typing import Any, Optional

from viewengine.schemas.database import Cell, Row


def find_cell(row: Row, property_id: str) -> Optional[Cell]:
    for cell in row.cells:
        if cell.property_id == property_id:
            return cell
    return None


def unwrap(value: Any) -> Any:
    # JSON shape {"value": <actual>} written by the cell editors
    if isinstance(value, dict) and "value" in value:
        return value["value"]
    return value


def read(row: Row, property_id: str) -> Any:
    """
    Effective value of `property_id` on `row`: None when the row has no cell
    for it, the inner value when the cell holds a {"value": ...} envelope,
    the raw cell value otherwise.
    """
    cell = find_cell(row, property_id)
    if cell is None:
        return None
    return unwrap(cell.value)


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


# ---- JS-compatible coercions ----


def _number_to_string(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def stringify(value: Any) -> str:
    """String() of a cell value: lists comma-joined, objects as compact JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _number_to_string(value)
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    if isinstance(value, dict):
        return to_json(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def _string_to_number(text: str) -> float:
    s = text.strip()
    if s == "":
        return 0.0
    if s in ("Infinity", "+Infinity"):
        return math.inf
    if s == "-Infinity":
        return -math.inf
    lowered = s.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        try:
            return float(int(s, 0))
        except ValueError:
            return math.nan
    # float() also takes "inf", "nan" and "1_000", which Number() rejects
    if "_" in s or lowered.lstrip("+-").startswith(("inf", "nan")):
        return math.nan
    try:
        return float(s)
    except ValueError:
        return math.nan


def to_number(value: Any) -> float:
    """Number() coercion; NaN for anything that does not read as a number."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return _string_to_number(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return 0.0
        if len(value) == 1:
            return _string_to_number(stringify(value[0]))
        return math.nan
    if isinstance(value, datetime):
        return value.timestamp() * 1000.0
    return math.nan


def to_bool(value: Any) -> bool:
    """Boolean(): only None, False, 0, NaN and "" are false."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (bool, int, float, str)):
        return bool(value)
    return True
