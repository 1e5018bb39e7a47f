# File: /viewengine/main.py | Version: 1.0 | Title: FastAPI App (views + health routers, optional std errors)
from __future__ import annotations

import importlib
import importlib.util
import logging

from fastapi import FastAPI

from viewengine.core.config import settings
from viewengine.core.logging import configure_logging
from viewengine.middleware.rate_limit import MemoryRateLimiter
from viewengine.observability.sentry import init_sentry_if_configured

log = logging.getLogger(__name__)

# Initialize logging & observability
configure_logging()
init_sentry_if_configured()

# App
app = FastAPI(title=settings.APP_NAME)
app.add_middleware(MemoryRateLimiter)  # no-op unless RATE_LIMIT_ENABLED=true


def include_if_exists(module_path: str, attr_name: str = "router") -> bool:
    spec = importlib.util.find_spec(module_path)
    if not spec:
        log.warning("Router module %s not found; skipping", module_path)
        return False
    mod = importlib.import_module(module_path)
    router = getattr(mod, attr_name, None)
    if router is not None:
        app.include_router(router)
        return True
    return False


include_if_exists("viewengine.routers.health")
include_if_exists("viewengine.routers.views")  # /views/materialize, /views/calculate

# Optional standardized error responses
if getattr(settings, "ENABLE_STD_ERRORS", False):
    from viewengine.core.error_handlers import register_exception_handlers

    register_exception_handlers(app)
