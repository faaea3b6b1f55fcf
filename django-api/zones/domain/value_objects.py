"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Self
from uuid import UUID

_HHMM = re.compile(r"([01]\d|2[0-3]):[0-5]\d")


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class ZoneId:
    """Unique identifier for an EventZone."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class AttendeeId:
    """Unique identifier for an Attendee."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Zero-padded HH:MM wall-clock time, no date and no timezone.

    Ordering is lexical on the string form, which matches clock order
    because both parts are zero-padded.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _HHMM.fullmatch(self.value):
            raise ValueError("Time of day must be HH:MM between 00:00 and 23:59")

    @classmethod
    def from_datetime(cls, value: datetime) -> Self:
        return cls(value=value.strftime("%H:%M"))

    def __str__(self) -> str:
        return self.value


class Role(str, Enum):
    """Caller roles known to the zone core."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"


@dataclass(frozen=True)
class Caller:
    """The identity an operation runs on behalf of."""

    user_id: int
    role: str
