# File: /viewengine/__init__.py | Version: 1.0 | Path: /viewengine/__init__.py
"""Database view materialization engine and its thin HTTP surface."""
from viewengine.engine import materialize

__all__ = ["materialize"]
__version__ = "1.0.0"
