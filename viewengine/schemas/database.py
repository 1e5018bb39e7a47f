# File: /viewengine/schemas/database.py | Version: 1.0 | Title: Database snapshot schemas (properties, rows, cells)
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import ConfigDict, Field

from viewengine.schemas._base import BaseSchema


class PropertyType(str, Enum):
    TEXT = "TEXT"
    TITLE = "TITLE"
    URL = "URL"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    NUMBER = "NUMBER"
    CHECKBOX = "CHECKBOX"
    SELECT = "SELECT"
    MULTI_SELECT = "MULTI_SELECT"
    DATE = "DATE"
    CREATED_TIME = "CREATED_TIME"
    UPDATED_TIME = "UPDATED_TIME"
    RELATION = "RELATION"
    ROLLUP = "ROLLUP"
    FORMULA = "FORMULA"
    STATUS = "STATUS"


class Property(BaseSchema):
    id: str
    name: str = ""  # display only, never used for matching
    type: PropertyType
    options: Optional[Any] = None

    model_config = ConfigDict(extra="allow")


class Cell(BaseSchema):
    """
    value is untyped: either the raw scalar/array, or an envelope
    {"value": <raw>} as written by the cell editors.
    """

    property_id: str
    value: Any = None

    model_config = ConfigDict(extra="allow")


class Row(BaseSchema):
    id: str
    parent_row_id: Optional[str] = None
    cells: List[Cell] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class DatabaseSnapshot(BaseSchema):
    id: Optional[str] = None
    properties: List[Property] = Field(default_factory=list)
    rows: List[Row] = Field(default_factory=list)

    def property_by_id(self, property_id: str) -> Optional[Property]:
        for prop in self.properties:
            if prop.id == property_id:
                return prop
        return None
