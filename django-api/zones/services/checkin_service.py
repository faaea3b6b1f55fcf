"""Check-in service - the zone passage flow and the ledger read paths.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any, NoReturn

from zones.domain import (
    AttendeeId,
    Caller,
    CheckInResult,
    EventZone,
    MovementHistoryEntry,
    UsageRecord,
    ZoneCheckin,
    ZoneId,
)
from zones.domain.access import (
    AccessContext,
    Decision,
    needs_registration,
    registration_gate,
    resolve,
)
from zones.domain.errors import (
    AttendeeNotFoundError,
    CheckInDeniedError,
    InvalidRequestError,
    StoreError,
    ZoneNotFoundError,
)
from zones.domain.schedule import zone_gate_failure
from zones.services.ids import parse_id
from zones.stores.interfaces import AttendeeStore, EventStore, UsageSink, ZoneStore

logger = logging.getLogger(__name__)

CHECKIN_SUCCESSFUL = "Check-in successful"
ALREADY_CHECKED_IN = "Already checked in"


def local_now() -> datetime:
    """Server-local wall clock, timezone aware."""
    return datetime.now().astimezone()


class CheckInService:
    """Service for zone check-ins."""

    def __init__(
        self,
        zones: ZoneStore,
        attendees: AttendeeStore,
        events: EventStore,
        usage: UsageSink,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._zones = zones
        self._attendees = attendees
        self._events = events
        self._usage = usage
        self._clock = clock

    def check_in(
        self,
        attendee_code: str,
        zone_id: str,
        caller: Caller,
        event_day: date | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> CheckInResult:
        """Admit an attendee through a zone and record the passage.

        Gates run in order: zone activity and opening window, registration
        prerequisite, access resolution. Only an admitted attendee is
        registered (registration zones) and written to the ledger. A repeat
        on the same event day returns the existing record.

        Raises:
            InvalidIdError: If zone_id is not a valid UUID.
            InvalidRequestError: If attendee_code is empty.
            ZoneNotFoundError: If the zone does not exist.
            AttendeeNotFoundError: If no attendee holds the code in the zone's event.
            CheckInDeniedError: If any gate refuses passage.
            StoreError: If the store fails.
        """
        zid = parse_id(ZoneId, zone_id, "zone")
        if not attendee_code:
            raise InvalidRequestError("Attendee code is required")

        zone = self._zones.get_zone(zid)
        if zone is None:
            raise ZoneNotFoundError(str(zone_id))

        attendee = self._attendees.get_by_code(zone.event_id, attendee_code)
        if attendee is None:
            raise AttendeeNotFoundError(attendee_code)

        now = self._clock()
        reason = zone_gate_failure(zone, now)
        if reason:
            self._deny(attendee_code, zone, reason)

        gate = registration_gate(attendee, zone)
        if gate.decision is Decision.DENY:
            self._deny(attendee_code, zone, gate.reason)

        verdict = resolve(
            AccessContext(
                attendee=attendee,
                zone=zone,
                override=self._zones.get_override(attendee.id, zone.id),
                rules=tuple(self._zones.list_access_rules(zone.id)),
            )
        )
        if not verdict.allowed:
            self._deny(attendee_code, zone, verdict.reason)

        if needs_registration(attendee, zone):
            attendee = self._attendees.mark_registered(attendee.id, zone.id, now)

        day = event_day or now.date()
        created, checkin = self._zones.record_checkin(
            attendee.id, zone.id, day, caller.user_id, metadata
        )
        if not created:
            logger.info(
                "Attendee %s already checked in to zone %s on %s",
                attendee_code,
                zone.id.value,
                day,
            )
            return CheckInResult(
                created=False,
                attendee=attendee,
                zone=zone,
                checkin=checkin,
                message=ALREADY_CHECKED_IN,
            )

        logger.info(
            "Attendee %s checked in to zone %s on %s (%s)",
            attendee_code,
            zone.id.value,
            day,
            verdict.reason,
        )
        self._log_usage(zone, checkin)
        return CheckInResult(
            created=True,
            attendee=attendee,
            zone=zone,
            checkin=checkin,
            message=CHECKIN_SUCCESSFUL,
        )

    def list_checkins(self, zone_id: str, day: date | None = None) -> list[ZoneCheckin]:
        """Return a zone's check-ins for a day (today by default), newest first.

        Raises:
            InvalidIdError: If zone_id is not a valid UUID.
            ZoneNotFoundError: If the zone does not exist.
        """
        zid = parse_id(ZoneId, zone_id, "zone")
        if self._zones.get_zone(zid) is None:
            raise ZoneNotFoundError(str(zone_id))
        return self._zones.list_zone_checkins(zid, day or self._clock().date())

    def attendee_history(self, attendee_id: str) -> list[MovementHistoryEntry]:
        """Return an attendee's movement through zones, newest first.

        Raises:
            InvalidIdError: If attendee_id is not a valid UUID.
            AttendeeNotFoundError: If the attendee does not exist.
        """
        aid = parse_id(AttendeeId, attendee_id, "attendee")
        if self._attendees.get_by_id(aid) is None:
            raise AttendeeNotFoundError(str(attendee_id))

        zones: dict[ZoneId, EventZone | None] = {}
        history = []
        for checkin in self._zones.list_attendee_checkins(aid):
            if checkin.zone_id not in zones:
                zones[checkin.zone_id] = self._zones.get_zone(checkin.zone_id)
            zone = zones[checkin.zone_id]
            history.append(
                MovementHistoryEntry(
                    checkin=checkin,
                    zone_name=zone.name if zone else "",
                    zone_type=zone.zone_type if zone else "",
                )
            )
        return history

    def _deny(self, attendee_code: str, zone: EventZone, reason: str) -> NoReturn:
        logger.info(
            "Check-in denied for attendee %s at zone %s: %s",
            attendee_code,
            zone.id.value,
            reason,
        )
        raise CheckInDeniedError(reason)

    def _log_usage(self, zone: EventZone, checkin: ZoneCheckin) -> None:
        # Best effort: the passage is already recorded.
        try:
            event = self._events.get_event(zone.event_id)
            if event is None:
                logger.warning(
                    "Event %s not found for usage logging", zone.event_id.value
                )
                return
            self._usage.log_usage(
                UsageRecord(
                    tenant_id=event.tenant_id,
                    resource_type="zone_checkin",
                    resource_id=str(checkin.id),
                    action="created",
                )
            )
        except StoreError as exc:
            logger.warning("Failed to log usage for check-in %s: %s", checkin.id, exc)
