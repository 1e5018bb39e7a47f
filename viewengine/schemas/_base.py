# File: /viewengine/schemas/_base.py | Version: 1.2 | Title: Pydantic Base Schema (camelCase wire names)
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    # Upstream snapshots speak camelCase (parentRowId, propertyId, ...);
    # Python code uses the snake_case field names.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
