"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in zones/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from zones.domain.value_objects import AttendeeId, EventId, TimeOfDay, ZoneId


@dataclass(frozen=True)
class Event:
    """The slice of an Event the zone core reads."""

    id: EventId
    tenant_id: str
    name: str
    start_date: date | None
    end_date: date | None


@dataclass(frozen=True)
class Attendee:
    """The slice of an Attendee the zone core reads and gates."""

    id: AttendeeId
    event_id: EventId
    code: str
    first_name: str
    last_name: str
    blocked: bool = False
    block_reason: str | None = None
    registered_at: datetime | None = None
    registration_zone_id: ZoneId | None = None
    packet_delivered: bool = False
    custom_fields: dict[str, Any] = field(default_factory=dict)

    @property
    def is_registered(self) -> bool:
        return self.registered_at is not None

    @property
    def category(self) -> str | None:
        value = self.custom_fields.get("category")
        if isinstance(value, str) and value:
            return value
        return None


@dataclass(frozen=True)
class EventZone:
    """Domain representation of a checkpoint within an event."""

    id: ZoneId
    event_id: EventId
    name: str
    zone_type: str
    order_index: int
    open_time: TimeOfDay | None
    close_time: TimeOfDay | None
    is_registration_zone: bool
    requires_registration: bool
    is_active: bool
    settings: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ZoneAccessRule:
    """Blanket policy for every attendee sharing a category."""

    zone_id: ZoneId
    category: str
    allowed: bool
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class AttendeeZoneAccess:
    """Per-attendee exception that supersedes category policy."""

    attendee_id: AttendeeId
    zone_id: ZoneId
    allowed: bool
    notes: str | None = None
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ZoneCheckin:
    """One admitted passage of an attendee through a zone on an event day."""

    id: int
    attendee_id: AttendeeId
    zone_id: ZoneId
    checked_in_at: datetime
    event_day: date
    checked_in_by: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StaffZoneAssignment:
    """Grant allowing a non-elevated user to operate a zone."""

    user_id: int
    zone_id: ZoneId
    assigned_at: datetime
    assigned_by: int | None = None
    id: int | None = None


@dataclass(frozen=True)
class UsageRecord:
    """A single usage entry handed to the usage sink."""

    tenant_id: str
    resource_type: str
    resource_id: str
    action: str
    quantity: int = 1


@dataclass(frozen=True)
class ZoneStats:
    """A zone together with its ledger and staffing counters."""

    zone: EventZone
    total_checkins: int
    today_checkins: int
    assigned_staff: int
    access_rules_count: int


@dataclass(frozen=True)
class CheckInResult:
    """Outcome of a successful check-in, new or repeated."""

    created: bool
    attendee: Attendee
    zone: EventZone
    checkin: ZoneCheckin
    message: str

    @property
    def checked_in_at(self) -> datetime:
        return self.checkin.checked_in_at

    @property
    def packet_delivered(self) -> bool:
        return self.attendee.packet_delivered


@dataclass(frozen=True)
class MovementHistoryEntry:
    """A ledger row enriched with the zone it was recorded against."""

    checkin: ZoneCheckin
    zone_name: str
    zone_type: str


@dataclass(frozen=True)
class ZoneDay:
    """One calendar day of the event a zone belongs to."""

    date: date
    day_number: int
    is_today: bool
    is_past: bool
    is_future: bool
