# ruff: noqa: E402
# File: /tests/conftest.py
import pathlib
import sys

# Make repo root importable as "viewengine"
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient

from viewengine.main import app


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def scenario_db() -> dict:
    """
    Upstream-shaped (camelCase) snapshot:
      p1 Name (TITLE), p2 Points (NUMBER), p3 Color (SELECT)
      r1 Alpha/10/Blue, r2 Bravo/20/Red, r3 Charlie/5/Blue
    """
    return {
        "id": "db1",
        "properties": [
            {"id": "p1", "name": "Name", "type": "TITLE"},
            {"id": "p2", "name": "Points", "type": "NUMBER"},
            {"id": "p3", "name": "Color", "type": "SELECT"},
        ],
        "rows": [
            {
                "id": "r1",
                "parentRowId": None,
                "cells": [
                    {"propertyId": "p1", "value": "Alpha"},
                    {"propertyId": "p2", "value": 10},
                    {"propertyId": "p3", "value": {"value": "Blue"}},
                ],
            },
            {
                "id": "r2",
                "parentRowId": None,
                "cells": [
                    {"propertyId": "p1", "value": "Bravo"},
                    {"propertyId": "p2", "value": 20},
                    {"propertyId": "p3", "value": {"value": "Red"}},
                ],
            },
            {
                "id": "r3",
                "parentRowId": None,
                "cells": [
                    {"propertyId": "p1", "value": "Charlie"},
                    {"propertyId": "p2", "value": {"value": 5}},
                    {"propertyId": "p3", "value": "Blue"},
                ],
            },
        ],
    }


@pytest.fixture()
def child_row() -> dict:
    """r4: a child of r1 with only a name."""
    return {
        "id": "r4",
        "parentRowId": "r1",
        "cells": [{"propertyId": "p1", "value": "Delta"}],
    }
