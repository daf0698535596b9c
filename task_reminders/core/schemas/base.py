"""Base schema classes for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CustomBase(BaseModel):
    """Base model with common configuration for all schemas.

    Example:
        class CategoryRead(CustomBase):
            id: UUID
            name: str
    """

    model_config = ConfigDict(
        # Allow creation from ORM models (SQLAlchemy)
        from_attributes=True,
        use_enum_values=True,
        populate_by_name=True,
        # Silently drop unexpected fields
        extra="ignore",
        str_strip_whitespace=True,
    )


class CamelModel(CustomBase):
    """Schema serialized with camelCase keys.

    Used for payloads consumed by schedulers and the browser client, e.g.
    ``tasks_found`` is emitted as ``tasksFound``. Snake-case names are still
    accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
        alias_generator=to_camel,
        serialize_by_alias=True,
    )
