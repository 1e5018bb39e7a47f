# File: /viewengine/routers/__init__.py | Version: 1.2 | Path: /viewengine/routers/__init__.py
"""
Router package exports.

Keeping these explicit helps static analyzers and avoids surprises
when importing submodules like: `from viewengine.routers import views as views_router`.
"""
from . import health, views

__all__ = ["health", "views"]
