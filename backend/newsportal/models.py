from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class CustomModel(BaseModel):
    """
    Base model shared by every request/response schema in the project.

    Fields are declared in snake_case and exposed to clients in camelCase
    (``is_published`` <-> ``isPublished``); both spellings are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Lets schemas be built straight from SQLAlchemy objects.
        from_attributes=True,
        extra="forbid",
    )

    @field_serializer('*', mode="wrap", check_fields=False)
    def serialize_datetime(self, value, handler):
        """Render datetimes as ISO-8601 in UTC; naive values are taken to be UTC already."""
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc).isoformat()
        return handler(value)


class MessageResponse(CustomModel):
    success: bool = True
    message: str
