"""Declarative base for entities stored in the JSON document."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Base(BaseModel):
    """Stored entity: camelCase on the wire and on disk, snake_case in Python.

    Unknown fields are kept so that a load/save cycle never drops data
    written by other tools.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
