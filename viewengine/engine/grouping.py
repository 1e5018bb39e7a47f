# File: /viewengine/engine/grouping.py | Version: 1.2 | Title: Group-by bucketing (empty bucket last)
from __future__ import annotations

import unicodedata
from typing import Any, Callable, Dict, Iterable, List, Tuple

from viewengine.engine.values import read, stringify
from viewengine.schemas.database import Row
from viewengine.schemas.view import Group

EMPTY_GROUP_KEY = "__empty__"


def group_key(value: Any) -> str:
    if value is None:
        return EMPTY_GROUP_KEY
    # an empty list stringifies to "" and lands with the blanks
    return stringify(value) or EMPTY_GROUP_KEY


def collation_key(text: str) -> Tuple[str, str, str]:
    # Accent- and case-insensitive first, then case, then code points.
    base = "".join(
        c for c in unicodedata.normalize("NFKD", text) if not unicodedata.combining(c)
    )
    return base.casefold(), text.casefold(), text


def group_rows(
    items: Iterable[Any],
    property_id: str,
    value_of: Callable[[Any, str], Any] = read,
    row_of: Callable[[Any], Row] = lambda item: item,
) -> List[Group]:
    """
    Bucket rows by the stringified value of `property_id`. A bucket keeps the
    first value seen for its key and its rows in incoming order; buckets are
    collated by that value with the empty bucket always last.
    """
    buckets: Dict[str, Group] = {}
    for item in items:
        value = value_of(item, property_id)
        key = group_key(value)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = Group(group_key=key, group_value=value)
            buckets[key] = bucket
        bucket.rows.append(row_of(item))

    return sorted(
        buckets.values(),
        key=lambda g: (
            g.group_key == EMPTY_GROUP_KEY,
            collation_key(stringify(g.group_value)),
        ),
    )
