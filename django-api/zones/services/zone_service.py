"""Zone service - zone read paths, staff scoping and access administration."""

import logging
from collections.abc import Callable, Iterable
from datetime import date

from zones.domain import (
    AttendeeId,
    AttendeeZoneAccess,
    Caller,
    EventId,
    EventZone,
    StaffZoneAssignment,
    ZoneAccessRule,
    ZoneDay,
    ZoneId,
    ZoneStats,
)
from zones.domain.errors import (
    AttendeeNotFoundError,
    EventNotFoundError,
    InvalidRequestError,
    OverrideNotFoundError,
    UserNotFoundError,
    ZoneNotFoundError,
)
from zones.domain.schedule import event_days
from zones.services.ids import parse_id
from zones.stores.interfaces import AttendeeStore, EventStore, ZoneStore

logger = logging.getLogger(__name__)

DEFAULT_ELEVATED_ROLES = frozenset({"admin", "manager"})


class ZoneService:
    """Service for zone listings, staff assignments and access rules."""

    def __init__(
        self,
        zones: ZoneStore,
        attendees: AttendeeStore,
        events: EventStore,
        today: Callable[[], date] = date.today,
        elevated_roles: Iterable[str] = DEFAULT_ELEVATED_ROLES,
    ) -> None:
        self._zones = zones
        self._attendees = attendees
        self._events = events
        self._today = today
        self._elevated_roles = frozenset(elevated_roles)

    def is_elevated(self, caller: Caller) -> bool:
        return caller.role in self._elevated_roles

    def get_zone(self, zone_id: str) -> EventZone:
        """Return a zone by ID.

        Raises:
            InvalidIdError: If the zone_id is not a valid UUID.
            ZoneNotFoundError: If the zone does not exist.
        """
        zone = self._zones.get_zone(parse_id(ZoneId, zone_id, "zone"))
        if zone is None:
            raise ZoneNotFoundError(str(zone_id))
        return zone

    def list_zones(self, event_id: str) -> list[EventZone]:
        """Return every zone of an event in processing order."""
        return self._zones.list_event_zones(parse_id(EventId, event_id, "event"))

    def zones_with_stats(self, event_id: str) -> list[ZoneStats]:
        """Return every zone of an event with check-in and staffing counters."""
        eid = parse_id(EventId, event_id, "event")
        return self._zones.zones_with_stats(eid, self._today())

    def available_zones(self, event_id: str, caller: Caller) -> list[EventZone]:
        """Return the zones of an event the caller may operate.

        Elevated roles see every zone. Everyone else sees exactly the zones
        they are assigned to; unassigned zones are left out.
        """
        zones = self.list_zones(event_id)
        if self.is_elevated(caller):
            return zones

        assignments = self._zones.list_user_assignments(caller.user_id)
        assigned = {a.zone_id for a in assignments}
        return [zone for zone in zones if zone.id in assigned]

    def zone_days(self, zone_id: str) -> list[ZoneDay]:
        """Return the calendar days of the event owning a zone.

        Raises:
            InvalidIdError: If the zone_id is not a valid UUID.
            ZoneNotFoundError: If the zone does not exist.
            EventNotFoundError: If the owning event does not exist.
        """
        zone = self.get_zone(zone_id)
        event = self._events.get_event(zone.event_id)
        if event is None:
            raise EventNotFoundError(str(zone.event_id.value))
        return event_days(event, self._today())

    def list_access_rules(self, zone_id: str) -> list[ZoneAccessRule]:
        zone = self.get_zone(zone_id)
        return self._zones.list_access_rules(zone.id)

    def replace_access_rules(
        self, zone_id: str, rules: Iterable[tuple[str, bool]]
    ) -> list[ZoneAccessRule]:
        """Replace the full set of category rules of a zone.

        Raises:
            InvalidRequestError: If a category is empty or repeated.
        """
        zone = self.get_zone(zone_id)
        rules = [(category.strip(), allowed) for category, allowed in rules]
        categories = [category for category, _ in rules]
        if any(not category for category in categories):
            raise InvalidRequestError("Category is required")
        if len(set(categories)) != len(categories):
            raise InvalidRequestError("Duplicate category")

        result = self._zones.replace_access_rules(zone.id, rules)
        logger.info(
            "Replaced access rules for zone %s (%d rules)", zone.id.value, len(result)
        )
        return result

    def list_overrides(self, attendee_id: str) -> list[AttendeeZoneAccess]:
        aid = parse_id(AttendeeId, attendee_id, "attendee")
        if self._attendees.get_by_id(aid) is None:
            raise AttendeeNotFoundError(str(attendee_id))
        return self._zones.list_overrides(aid)

    def set_override(
        self,
        attendee_id: str,
        zone_id: str,
        allowed: bool,
        notes: str | None = None,
    ) -> AttendeeZoneAccess:
        """Create or update an individual override for (attendee, zone).

        Raises:
            AttendeeNotFoundError: If the attendee does not exist.
            ZoneNotFoundError: If the zone does not exist.
            InvalidRequestError: If zone and attendee belong to different events.
        """
        aid = parse_id(AttendeeId, attendee_id, "attendee")
        attendee = self._attendees.get_by_id(aid)
        if attendee is None:
            raise AttendeeNotFoundError(str(attendee_id))
        zone = self.get_zone(zone_id)
        if zone.event_id != attendee.event_id:
            raise InvalidRequestError("Zone belongs to a different event")

        override = self._zones.upsert_override(aid, zone.id, allowed, notes)
        logger.info(
            "Set access override for attendee %s at zone %s: allowed=%s",
            aid.value,
            zone.id.value,
            allowed,
        )
        return override

    def delete_override(self, override_id: int) -> None:
        if not self._zones.delete_override(override_id):
            raise OverrideNotFoundError(override_id)

    def assign_staff(
        self, zone_id: str, user_id: int, caller: Caller
    ) -> StaffZoneAssignment:
        """Grant a user access to operate a zone. Repeating it is a no-op.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            UserNotFoundError: If no user account has user_id.
        """
        zone = self.get_zone(zone_id)
        if not self._zones.user_exists(user_id):
            raise UserNotFoundError(user_id)
        assignment = self._zones.assign_staff(user_id, zone.id, caller.user_id)
        logger.info("Assigned user %s to zone %s", user_id, zone.id.value)
        return assignment

    def remove_staff(self, zone_id: str, user_id: int) -> None:
        zone = self.get_zone(zone_id)
        self._zones.remove_staff(user_id, zone.id)
        logger.info("Removed user %s from zone %s", user_id, zone.id.value)

    def zone_staff(self, zone_id: str) -> list[StaffZoneAssignment]:
        zone = self.get_zone(zone_id)
        return self._zones.list_zone_staff(zone.id)

    def user_assignments(self, user_id: int) -> list[StaffZoneAssignment]:
        return self._zones.list_user_assignments(user_id)
