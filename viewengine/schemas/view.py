# File: /viewengine/schemas/view.py | Version: 1.3 | Title: View state, rules & materialized result schemas
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from viewengine.schemas._base import BaseSchema
from viewengine.schemas.database import DatabaseSnapshot, Row


class FilterOperator(str, Enum):
    # any type
    is_empty = "is_empty"
    is_not_empty = "is_not_empty"
    # text / select / number
    is_ = "is"
    is_not = "is_not"
    contains = "contains"
    not_contains = "not_contains"
    starts_with = "starts_with"
    ends_with = "ends_with"
    # checkbox
    is_checked = "is_checked"
    is_unchecked = "is_unchecked"
    # dates, relative to today
    is_today = "is_today"
    is_tomorrow = "is_tomorrow"
    is_yesterday = "is_yesterday"
    is_one_week_ago = "is_one_week_ago"
    is_one_month_ago = "is_one_month_ago"
    # dates, against an operand
    before = "before"
    after = "after"
    is_on_or_before = "is_on_or_before"
    is_on_or_after = "is_on_or_after"


SortDirection = Literal["asc", "desc"]


class FilterRule(BaseSchema):
    property_id: str
    # Unknown operator strings are accepted and pass every row.
    operator: Union[FilterOperator, str]
    value: Optional[Any] = None


class SortRule(BaseSchema):
    property_id: str
    direction: SortDirection = "asc"


class ViewState(BaseSchema):
    filters: List[FilterRule] = Field(default_factory=list)
    sorts: List[SortRule] = Field(default_factory=list)
    search_query: Optional[str] = None
    group_by_property: Optional[str] = None


class CalculationType(str, Enum):
    count_all = "count_all"
    count_values = "count_values"
    count_unique_values = "count_unique_values"
    count_empty = "count_empty"
    count_not_empty = "count_not_empty"
    percent_empty = "percent_empty"
    percent_not_empty = "percent_not_empty"
    sum = "sum"
    average = "average"
    median = "median"
    min = "min"
    max = "max"
    range = "range"


# ---- Materialized output ----


class HierarchyRow(Row):
    depth: int = 0
    has_children: bool = False


class Group(BaseSchema):
    group_key: str
    group_value: Any = None
    rows: List[Row] = Field(default_factory=list)


class GroupedViewResult(BaseSchema):
    is_grouped: Literal[True] = True
    groups: List[Group] = Field(default_factory=list)


class FlatViewResult(BaseSchema):
    is_grouped: Literal[False] = False
    rows: List[HierarchyRow] = Field(default_factory=list)


ViewResult = Union[GroupedViewResult, FlatViewResult]


# ---- API payloads ----


class MaterializeRequest(BaseSchema):
    database: DatabaseSnapshot
    view: ViewState = Field(default_factory=ViewState)


class CalculateRequest(MaterializeRequest):
    # propertyId -> calculation; properties left out use their type default
    calculations: Dict[str, CalculationType] = Field(default_factory=dict)


class CalculateOut(BaseSchema):
    count: int
    values: Dict[str, Optional[Union[int, float]]] = Field(default_factory=dict)
