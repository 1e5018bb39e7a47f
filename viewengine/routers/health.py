# File: /viewengine/routers/health.py | Version: 1.1 | Title: Health endpoint
from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/healthz")
def healthz() -> dict:
    """
    Liveness probe: returns 200 if the app can serve requests.
    The engine keeps no state and talks to no store, so there is no
    separate readiness check.
    """
    return {"status": "ok"}
