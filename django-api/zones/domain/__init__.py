from zones.domain.models import (
    Attendee,
    AttendeeZoneAccess,
    CheckInResult,
    Event,
    EventZone,
    MovementHistoryEntry,
    StaffZoneAssignment,
    UsageRecord,
    ZoneAccessRule,
    ZoneCheckin,
    ZoneDay,
    ZoneStats,
)
from zones.domain.value_objects import (
    AttendeeId,
    Caller,
    EventId,
    Role,
    TimeOfDay,
    ZoneId,
)

__all__ = [
    "Attendee",
    "AttendeeZoneAccess",
    "CheckInResult",
    "Event",
    "EventZone",
    "MovementHistoryEntry",
    "StaffZoneAssignment",
    "UsageRecord",
    "ZoneAccessRule",
    "ZoneCheckin",
    "ZoneDay",
    "ZoneStats",
    "AttendeeId",
    "Caller",
    "EventId",
    "Role",
    "TimeOfDay",
    "ZoneId",
]
