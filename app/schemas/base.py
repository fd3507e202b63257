from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import ClassVar, FrozenSet

from app.core.timeutils import to_naive_utc

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"  # "HH:MM", 24h


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    # update payloads: fields whose column accepts NULL
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    def changes(self) -> dict:
        """Fields the client sent. An explicit null is dropped unless the column can hold it."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field in self.nullable_fields
        }


def naive_utc(value: datetime | None) -> datetime | None:
    return to_naive_utc(value)
