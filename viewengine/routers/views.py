# File: /viewengine/routers/views.py | Version: 2.0 | Title: Views Router (materialize + footer calculations)
from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, HTTPException, Query

from viewengine.core.config import settings
from viewengine.engine.calculations import default_calculation, summarize
from viewengine.engine.materialize import iter_result_rows, materialize
from viewengine.engine.sorting import parse_sort_spec
from viewengine.schemas.database import DatabaseSnapshot
from viewengine.schemas.view import (
    CalculateOut,
    CalculateRequest,
    CalculationType,
    MaterializeRequest,
    ViewResult,
    ViewState,
)

router = APIRouter(prefix="/views", tags=["Views"])


# ----------------------------
# Helpers
# ----------------------------
def _guard_size(db: DatabaseSnapshot) -> None:
    if len(db.rows) > settings.MAX_SNAPSHOT_ROWS:
        raise HTTPException(
            status_code=413,
            detail=f"Snapshot has {len(db.rows)} rows; limit is {settings.MAX_SNAPSHOT_ROWS}",
        )


def _effective_view(view: ViewState, sort: Optional[str]) -> ViewState:
    if not sort:
        return view
    return view.model_copy(update={"sorts": parse_sort_spec(sort)})


def _calculations_for(payload: CalculateRequest) -> Dict[str, CalculationType]:
    calcs: Dict[str, CalculationType] = {}
    for prop in payload.database.properties:
        default = default_calculation(prop.type)
        if default is not None:
            calcs[prop.id] = default
    calcs.update(payload.calculations)
    return calcs


_SORT_OVERRIDE = Query(
    default=None, description="Override view.sorts, e.g. p2:desc,p1:asc"
)


# ----------------------------
# Endpoints
# ----------------------------
@router.post(
    "/materialize",
    response_model=ViewResult,
    summary="Filter, search, sort and group (or flatten) a database snapshot",
)
def materialize_view(payload: MaterializeRequest, sort: Optional[str] = _SORT_OVERRIDE):
    _guard_size(payload.database)
    return materialize(payload.database, _effective_view(payload.view, sort))


@router.post(
    "/calculate",
    response_model=CalculateOut,
    summary="Column calculations over the rows a view produces",
)
def calculate_view(payload: CalculateRequest):
    _guard_size(payload.database)
    result = materialize(payload.database, payload.view)
    values = summarize(result, payload.database.properties, _calculations_for(payload))
    count = sum(1 for _ in iter_result_rows(result))
    return CalculateOut(count=count, values=values)
