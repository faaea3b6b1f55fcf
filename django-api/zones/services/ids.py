"""Identifier parsing shared by the services."""

from typing import TypeVar

from zones.domain.errors import InvalidIdError
from zones.domain.value_objects import AttendeeId, EventId, ZoneId

IdT = TypeVar("IdT", EventId, ZoneId, AttendeeId)


def parse_id(id_type: type[IdT], value, kind: str) -> IdT:
    """Parse a raw identifier, raising InvalidIdError on malformed input."""
    if isinstance(value, id_type):
        return value
    try:
        return id_type.from_string(str(value))
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidIdError(kind) from exc
