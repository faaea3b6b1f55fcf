"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Implementations wrap
backend failures in StoreError.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any

from zones.domain import (
    Attendee,
    AttendeeId,
    AttendeeZoneAccess,
    Event,
    EventId,
    EventZone,
    StaffZoneAssignment,
    UsageRecord,
    ZoneAccessRule,
    ZoneCheckin,
    ZoneId,
    ZoneStats,
)


class ZoneStore(ABC):
    """Interface for zones, their rules, assignments and the check-in ledger."""

    @abstractmethod
    def get_zone(self, zone_id: ZoneId) -> EventZone | None:
        """Return a zone by ID, or None if not found."""
        ...

    @abstractmethod
    def list_event_zones(self, event_id: EventId) -> list[EventZone]:
        """Return all zones of an event ordered by order_index ascending."""
        ...

    @abstractmethod
    def zones_with_stats(self, event_id: EventId, today: date) -> list[ZoneStats]:
        """Return all zones of an event with their counters."""
        ...

    @abstractmethod
    def list_access_rules(self, zone_id: ZoneId) -> list[ZoneAccessRule]:
        """Return the category rules of a zone ordered by category."""
        ...

    @abstractmethod
    def replace_access_rules(
        self, zone_id: ZoneId, rules: list[tuple[str, bool]]
    ) -> list[ZoneAccessRule]:
        """Atomically replace every category rule of a zone."""
        ...

    @abstractmethod
    def get_override(
        self, attendee_id: AttendeeId, zone_id: ZoneId
    ) -> AttendeeZoneAccess | None:
        """Return the individual override for (attendee, zone), if any."""
        ...

    @abstractmethod
    def list_overrides(self, attendee_id: AttendeeId) -> list[AttendeeZoneAccess]:
        """Return every individual override of an attendee."""
        ...

    @abstractmethod
    def upsert_override(
        self,
        attendee_id: AttendeeId,
        zone_id: ZoneId,
        allowed: bool,
        notes: str | None,
    ) -> AttendeeZoneAccess:
        """Create or update the override for (attendee, zone)."""
        ...

    @abstractmethod
    def delete_override(self, override_id: int) -> bool:
        """Delete an override. Return False if it did not exist."""
        ...

    @abstractmethod
    def record_checkin(
        self,
        attendee_id: AttendeeId,
        zone_id: ZoneId,
        event_day: date,
        checked_in_by: int | None,
        metadata: dict[str, Any] | None = None,
    ) -> tuple[bool, ZoneCheckin]:
        """Insert a check-in or return the existing one for the same day.

        Returns (created, checkin). Must be a single atomic operation: two
        concurrent identical calls yield exactly one row, and the loser
        receives created=False with the winner's row.
        """
        ...

    @abstractmethod
    def list_zone_checkins(self, zone_id: ZoneId, event_day: date) -> list[ZoneCheckin]:
        """Return check-ins of a zone on a day, newest first."""
        ...

    @abstractmethod
    def list_attendee_checkins(self, attendee_id: AttendeeId) -> list[ZoneCheckin]:
        """Return every check-in of an attendee, newest first."""
        ...

    @abstractmethod
    def user_exists(self, user_id: int) -> bool:
        """Check that a user account exists before it is granted a zone."""
        ...

    @abstractmethod
    def assign_staff(
        self, user_id: int, zone_id: ZoneId, assigned_by: int | None
    ) -> StaffZoneAssignment:
        """Assign a user to a zone. Assigning twice keeps the first row."""
        ...

    @abstractmethod
    def remove_staff(self, user_id: int, zone_id: ZoneId) -> None:
        """Remove a user's assignment to a zone, if present."""
        ...

    @abstractmethod
    def list_zone_staff(self, zone_id: ZoneId) -> list[StaffZoneAssignment]:
        """Return every assignment for a zone."""
        ...

    @abstractmethod
    def list_user_assignments(self, user_id: int) -> list[StaffZoneAssignment]:
        """Return every assignment held by a user."""
        ...


class AttendeeStore(ABC):
    """Interface onto the externally owned attendee records."""

    @abstractmethod
    def get_by_code(self, event_id: EventId, code: str) -> Attendee | None:
        """Return the attendee holding code within an event, or None."""
        ...

    @abstractmethod
    def get_by_id(self, attendee_id: AttendeeId) -> Attendee | None:
        """Return an attendee by ID, or None."""
        ...

    @abstractmethod
    def mark_registered(
        self, attendee_id: AttendeeId, zone_id: ZoneId, at: datetime
    ) -> Attendee:
        """Register an attendee if not registered yet, then return it.

        Conditional update: registered_at, registration_zone_id and
        packet_delivered are only written while registered_at is unset.
        """
        ...


class EventStore(ABC):
    """Interface onto the externally owned event records."""

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...


class UsageSink(ABC):
    """Interface for the usage log collaborator."""

    @abstractmethod
    def log_usage(self, record: UsageRecord) -> None:
        """Persist a usage record."""
        ...
