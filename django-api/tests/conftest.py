"""Pytest configuration and shared fixtures."""

import uuid
from dataclasses import replace
from datetime import date, datetime, timezone

import pytest
from rest_framework.test import APIClient

from zones.domain import (
    Attendee,
    AttendeeId,
    AttendeeZoneAccess,
    Event,
    EventId,
    EventZone,
    StaffZoneAssignment,
    TimeOfDay,
    UsageRecord,
    ZoneAccessRule,
    ZoneCheckin,
    ZoneId,
    ZoneStats,
)
from zones.domain.errors import StoreError
from zones.services import CheckInService, ZoneService
from zones.stores import AttendeeStore, EventStore, UsageSink, ZoneStore

EVENT_ID = EventId(uuid.UUID("11111111-1111-1111-1111-111111111111"))
TENANT_ID = "22222222-2222-2222-2222-222222222222"
TODAY = date(2026, 5, 12)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


class InMemoryZoneStore(ZoneStore):
    def __init__(self) -> None:
        self.zones: dict[ZoneId, EventZone] = {}
        self.rules: dict[ZoneId, list[ZoneAccessRule]] = {}
        self.overrides: dict[tuple[AttendeeId, ZoneId], AttendeeZoneAccess] = {}
        self.checkins: list[ZoneCheckin] = []
        self.assignments: list[StaffZoneAssignment] = []
        self.users: set[int] = {1, 2, 7, 42}
        self.fail = False
        self._ids = 0

    def _next_id(self) -> int:
        self._ids += 1
        return self._ids

    def _check(self, operation: str) -> None:
        if self.fail:
            raise StoreError(operation)

    def add_zone(self, zone: EventZone) -> EventZone:
        self.zones[zone.id] = zone
        return zone

    def get_zone(self, zone_id):
        self._check("get_zone")
        return self.zones.get(zone_id)

    def list_event_zones(self, event_id):
        return sorted(
            (z for z in self.zones.values() if z.event_id == event_id),
            key=lambda z: z.order_index,
        )

    def zones_with_stats(self, event_id, today):
        return [
            ZoneStats(
                zone=zone,
                total_checkins=sum(1 for c in self.checkins if c.zone_id == zone.id),
                today_checkins=sum(
                    1
                    for c in self.checkins
                    if c.zone_id == zone.id and c.event_day == today
                ),
                assigned_staff=sum(1 for a in self.assignments if a.zone_id == zone.id),
                access_rules_count=len(self.rules.get(zone.id, [])),
            )
            for zone in self.list_event_zones(event_id)
        ]

    def list_access_rules(self, zone_id):
        return sorted(self.rules.get(zone_id, []), key=lambda r: r.category)

    def replace_access_rules(self, zone_id, rules):
        self.rules[zone_id] = [
            ZoneAccessRule(zone_id=zone_id, category=c, allowed=a, id=self._next_id())
            for c, a in rules
        ]
        return self.list_access_rules(zone_id)

    def get_override(self, attendee_id, zone_id):
        return self.overrides.get((attendee_id, zone_id))

    def list_overrides(self, attendee_id):
        return [o for (aid, _), o in self.overrides.items() if aid == attendee_id]

    def upsert_override(self, attendee_id, zone_id, allowed, notes):
        existing = self.overrides.get((attendee_id, zone_id))
        override = AttendeeZoneAccess(
            attendee_id=attendee_id,
            zone_id=zone_id,
            allowed=allowed,
            notes=notes,
            id=existing.id if existing else self._next_id(),
        )
        self.overrides[(attendee_id, zone_id)] = override
        return override

    def delete_override(self, override_id):
        for key, override in list(self.overrides.items()):
            if override.id == override_id:
                del self.overrides[key]
                return True
        return False

    def record_checkin(
        self, attendee_id, zone_id, event_day, checked_in_by, metadata=None
    ):
        self._check("record_checkin")
        for checkin in self.checkins:
            if (checkin.attendee_id, checkin.zone_id, checkin.event_day) == (
                attendee_id,
                zone_id,
                event_day,
            ):
                return False, checkin
        checkin = ZoneCheckin(
            id=self._next_id(),
            attendee_id=attendee_id,
            zone_id=zone_id,
            checked_in_at=datetime.now(timezone.utc),
            event_day=event_day,
            checked_in_by=checked_in_by,
            metadata=metadata or {},
        )
        self.checkins.append(checkin)
        return True, checkin

    def list_zone_checkins(self, zone_id, event_day):
        return sorted(
            (
                c
                for c in self.checkins
                if c.zone_id == zone_id and c.event_day == event_day
            ),
            key=lambda c: (c.checked_in_at, c.id),
            reverse=True,
        )

    def list_attendee_checkins(self, attendee_id):
        return sorted(
            (c for c in self.checkins if c.attendee_id == attendee_id),
            key=lambda c: (c.checked_in_at, c.id),
            reverse=True,
        )

    def user_exists(self, user_id):
        return user_id in self.users

    def assign_staff(self, user_id, zone_id, assigned_by):
        for assignment in self.assignments:
            if assignment.user_id == user_id and assignment.zone_id == zone_id:
                return assignment
        assignment = StaffZoneAssignment(
            user_id=user_id,
            zone_id=zone_id,
            assigned_at=datetime.now(timezone.utc),
            assigned_by=assigned_by,
            id=self._next_id(),
        )
        self.assignments.append(assignment)
        return assignment

    def remove_staff(self, user_id, zone_id):
        self.assignments = [
            a
            for a in self.assignments
            if not (a.user_id == user_id and a.zone_id == zone_id)
        ]

    def list_zone_staff(self, zone_id):
        return [a for a in self.assignments if a.zone_id == zone_id]

    def list_user_assignments(self, user_id):
        return [a for a in self.assignments if a.user_id == user_id]


class InMemoryAttendeeStore(AttendeeStore):
    def __init__(self) -> None:
        self.attendees: dict[AttendeeId, Attendee] = {}

    def add(self, attendee: Attendee) -> Attendee:
        self.attendees[attendee.id] = attendee
        return attendee

    def get_by_code(self, event_id, code):
        for attendee in self.attendees.values():
            if attendee.event_id == event_id and attendee.code == code:
                return attendee
        return None

    def get_by_id(self, attendee_id):
        return self.attendees.get(attendee_id)

    def mark_registered(self, attendee_id, zone_id, at):
        attendee = self.attendees[attendee_id]
        if attendee.registered_at is None:
            attendee = replace(
                attendee,
                registered_at=at,
                registration_zone_id=zone_id,
                packet_delivered=True,
            )
            self.attendees[attendee_id] = attendee
        return attendee


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self.events: dict[EventId, Event] = {}

    def get_event(self, event_id):
        return self.events.get(event_id)


class RecordingUsageSink(UsageSink):
    def __init__(self) -> None:
        self.records: list[UsageRecord] = []
        self.fail = False

    def log_usage(self, record):
        if self.fail:
            raise StoreError("log_usage")
        self.records.append(record)


class FixedClock:
    """Callable clock whose time tests can move."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def at(self, hhmm: str) -> None:
        hour, minute = (int(part) for part in hhmm.split(":"))
        self.now = self.now.replace(hour=hour, minute=minute)


@pytest.fixture
def zone_store() -> InMemoryZoneStore:
    return InMemoryZoneStore()


@pytest.fixture
def attendee_store() -> InMemoryAttendeeStore:
    return InMemoryAttendeeStore()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    store = InMemoryEventStore()
    store.events[EVENT_ID] = Event(
        id=EVENT_ID,
        tenant_id=TENANT_ID,
        name="DevConf",
        start_date=date(2026, 5, 11),
        end_date=date(2026, 5, 13),
    )
    return store


@pytest.fixture
def usage_sink() -> RecordingUsageSink:
    return RecordingUsageSink()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 5, 12, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def checkin_service(
    zone_store, attendee_store, event_store, usage_sink, clock
) -> CheckInService:
    return CheckInService(
        zone_store, attendee_store, event_store, usage_sink, clock=clock
    )


@pytest.fixture
def zone_service(zone_store, attendee_store, event_store) -> ZoneService:
    return ZoneService(zone_store, attendee_store, event_store, today=lambda: TODAY)


@pytest.fixture
def make_zone(zone_store):
    def _make(name: str = "Main Hall", **fields) -> EventZone:
        values = {
            "id": ZoneId(uuid.uuid4()),
            "event_id": EVENT_ID,
            "name": name,
            "zone_type": "general",
            "order_index": len(zone_store.zones),
            "open_time": None,
            "close_time": None,
            "is_registration_zone": False,
            "requires_registration": False,
            "is_active": True,
        }
        values.update(fields)
        for bound in ("open_time", "close_time"):
            if isinstance(values[bound], str):
                values[bound] = TimeOfDay(values[bound])
        return zone_store.add_zone(EventZone(**values))

    return _make


@pytest.fixture
def make_attendee(attendee_store):
    def _make(code: str = "ABC123", **fields) -> Attendee:
        values = {
            "id": AttendeeId(uuid.uuid4()),
            "event_id": EVENT_ID,
            "code": code,
            "first_name": "Ada",
            "last_name": "Lovelace",
        }
        values.update(fields)
        return attendee_store.add(Attendee(**values))

    return _make
