# File: /viewengine/schemas/__init__.py | Version: 1.0 | Path: /viewengine/schemas/__init__.py
from . import database, view

__all__ = ["database", "view"]
