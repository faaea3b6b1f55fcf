"""Django ORM implementations of the store interfaces."""

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from zones import models
from zones.conf import zones_setting
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
from zones.stores.interfaces import AttendeeStore, EventStore, UsageSink, ZoneStore

logger = logging.getLogger(__name__)


def event_zones_cache_key(event_id) -> str:
    return f"zones:event:{event_id}"


@contextmanager
def _store_errors(operation: str):
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Store operation %s failed", operation)
        raise StoreError(operation) from exc


def _time_of_day(row: models.EventZone, field_name: str) -> TimeOfDay | None:
    value = getattr(row, field_name)
    if not value:
        return None
    try:
        return TimeOfDay(value)
    except ValueError as exc:
        # Rows written around model validation can hold any string.
        logger.error("Zone %s has malformed %s %r", row.id, field_name, value)
        raise StoreError("load_zone") from exc


def _to_zone(row: models.EventZone) -> EventZone:
    return EventZone(
        id=ZoneId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        zone_type=row.zone_type,
        order_index=row.order_index,
        open_time=_time_of_day(row, "open_time"),
        close_time=_time_of_day(row, "close_time"),
        is_registration_zone=row.is_registration_zone,
        requires_registration=row.requires_registration,
        is_active=row.is_active,
        settings=row.settings or {},
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_rule(row: models.ZoneAccessRule) -> ZoneAccessRule:
    return ZoneAccessRule(
        id=row.id,
        zone_id=ZoneId(row.zone_id),
        category=row.category,
        allowed=row.allowed,
        created_at=row.created_at,
    )


def _to_override(row: models.AttendeeZoneAccess) -> AttendeeZoneAccess:
    return AttendeeZoneAccess(
        id=row.id,
        attendee_id=AttendeeId(row.attendee_id),
        zone_id=ZoneId(row.zone_id),
        allowed=row.allowed,
        notes=row.notes,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_checkin(row: models.ZoneCheckin) -> ZoneCheckin:
    return ZoneCheckin(
        id=row.id,
        attendee_id=AttendeeId(row.attendee_id),
        zone_id=ZoneId(row.zone_id),
        checked_in_at=row.checked_in_at,
        event_day=row.event_day,
        checked_in_by=row.checked_in_by_id,
        metadata=row.metadata or {},
    )


def _to_assignment(row: models.StaffZoneAssignment) -> StaffZoneAssignment:
    return StaffZoneAssignment(
        id=row.id,
        user_id=row.user_id,
        zone_id=ZoneId(row.zone_id),
        assigned_at=row.assigned_at,
        assigned_by=row.assigned_by_id,
    )


def _to_attendee(row: models.Attendee) -> Attendee:
    return Attendee(
        id=AttendeeId(row.id),
        event_id=EventId(row.event_id),
        code=row.code,
        first_name=row.first_name,
        last_name=row.last_name,
        blocked=row.blocked,
        block_reason=row.block_reason,
        registered_at=row.registered_at,
        registration_zone_id=(
            ZoneId(row.registration_zone_id) if row.registration_zone_id else None
        ),
        packet_delivered=row.packet_delivered,
        custom_fields=row.custom_fields or {},
    )


class DjangoZoneStore(ZoneStore):
    """PostgreSQL-backed zone store using Django ORM."""

    def get_zone(self, zone_id: ZoneId) -> EventZone | None:
        with _store_errors("get_zone"):
            row = models.EventZone.objects.filter(pk=zone_id.value).first()
        return _to_zone(row) if row else None

    def list_event_zones(self, event_id: EventId) -> list[EventZone]:
        key = event_zones_cache_key(event_id.value)
        zones = cache.get(key)
        if zones is not None:
            return zones

        with _store_errors("list_event_zones"):
            zones = [
                _to_zone(row)
                for row in models.EventZone.objects.filter(
                    event_id=event_id.value
                ).order_by("order_index")
            ]
        cache.set(key, zones, zones_setting("ZONE_LIST_CACHE_TIMEOUT"))
        return zones

    def zones_with_stats(self, event_id: EventId, today: date) -> list[ZoneStats]:
        with _store_errors("zones_with_stats"):
            rows = (
                models.EventZone.objects.filter(event_id=event_id.value)
                .annotate(
                    total_checkins=Count("checkins", distinct=True),
                    today_checkins=Count(
                        "checkins", filter=Q(checkins__event_day=today), distinct=True
                    ),
                    assigned_staff=Count("staff_assignments", distinct=True),
                    access_rules_count=Count("access_rules", distinct=True),
                )
                .order_by("order_index")
            )
            return [
                ZoneStats(
                    zone=_to_zone(row),
                    total_checkins=row.total_checkins,
                    today_checkins=row.today_checkins,
                    assigned_staff=row.assigned_staff,
                    access_rules_count=row.access_rules_count,
                )
                for row in rows
            ]

    def list_access_rules(self, zone_id: ZoneId) -> list[ZoneAccessRule]:
        with _store_errors("list_access_rules"):
            return [
                _to_rule(row)
                for row in models.ZoneAccessRule.objects.filter(
                    zone_id=zone_id.value
                ).order_by("category")
            ]

    def replace_access_rules(
        self, zone_id: ZoneId, rules: list[tuple[str, bool]]
    ) -> list[ZoneAccessRule]:
        with _store_errors("replace_access_rules"), transaction.atomic():
            models.ZoneAccessRule.objects.filter(zone_id=zone_id.value).delete()
            models.ZoneAccessRule.objects.bulk_create(
                models.ZoneAccessRule(
                    zone_id=zone_id.value, category=category, allowed=allowed
                )
                for category, allowed in rules
            )
        return self.list_access_rules(zone_id)

    def get_override(
        self, attendee_id: AttendeeId, zone_id: ZoneId
    ) -> AttendeeZoneAccess | None:
        with _store_errors("get_override"):
            row = models.AttendeeZoneAccess.objects.filter(
                attendee_id=attendee_id.value, zone_id=zone_id.value
            ).first()
        return _to_override(row) if row else None

    def list_overrides(self, attendee_id: AttendeeId) -> list[AttendeeZoneAccess]:
        with _store_errors("list_overrides"):
            return [
                _to_override(row)
                for row in models.AttendeeZoneAccess.objects.filter(
                    attendee_id=attendee_id.value
                )
            ]

    def upsert_override(
        self,
        attendee_id: AttendeeId,
        zone_id: ZoneId,
        allowed: bool,
        notes: str | None,
    ) -> AttendeeZoneAccess:
        with _store_errors("upsert_override"):
            row, _ = models.AttendeeZoneAccess.objects.update_or_create(
                attendee_id=attendee_id.value,
                zone_id=zone_id.value,
                defaults={"allowed": allowed, "notes": notes},
            )
        return _to_override(row)

    def delete_override(self, override_id: int) -> bool:
        with _store_errors("delete_override"):
            deleted, _ = models.AttendeeZoneAccess.objects.filter(
                pk=override_id
            ).delete()
        return deleted > 0

    def record_checkin(
        self,
        attendee_id: AttendeeId,
        zone_id: ZoneId,
        event_day: date,
        checked_in_by: int | None,
        metadata: dict[str, Any] | None = None,
    ) -> tuple[bool, ZoneCheckin]:
        lookup = {
            "attendee_id": attendee_id.value,
            "zone_id": zone_id.value,
            "event_day": event_day,
        }
        with _store_errors("record_checkin"):
            try:
                with transaction.atomic():
                    row = models.ZoneCheckin.objects.create(
                        **lookup,
                        checked_in_at=timezone.now(),
                        checked_in_by_id=checked_in_by,
                        metadata=metadata or {},
                    )
                return True, _to_checkin(row)
            except IntegrityError:
                # The unique (attendee, zone, event_day) constraint fired:
                # another request recorded this passage first.
                row = models.ZoneCheckin.objects.filter(**lookup).first()
                if row is None:
                    raise
                return False, _to_checkin(row)

    def list_zone_checkins(self, zone_id: ZoneId, event_day: date) -> list[ZoneCheckin]:
        with _store_errors("list_zone_checkins"):
            return [
                _to_checkin(row)
                for row in models.ZoneCheckin.objects.filter(
                    zone_id=zone_id.value, event_day=event_day
                ).order_by("-checked_in_at")
            ]

    def list_attendee_checkins(self, attendee_id: AttendeeId) -> list[ZoneCheckin]:
        with _store_errors("list_attendee_checkins"):
            return [
                _to_checkin(row)
                for row in models.ZoneCheckin.objects.filter(
                    attendee_id=attendee_id.value
                ).order_by("-checked_in_at")
            ]

    def user_exists(self, user_id: int) -> bool:
        with _store_errors("user_exists"):
            return get_user_model().objects.filter(pk=user_id).exists()

    def assign_staff(
        self, user_id: int, zone_id: ZoneId, assigned_by: int | None
    ) -> StaffZoneAssignment:
        with _store_errors("assign_staff"):
            row, _ = models.StaffZoneAssignment.objects.get_or_create(
                user_id=user_id,
                zone_id=zone_id.value,
                defaults={"assigned_by_id": assigned_by},
            )
        return _to_assignment(row)

    def remove_staff(self, user_id: int, zone_id: ZoneId) -> None:
        with _store_errors("remove_staff"):
            models.StaffZoneAssignment.objects.filter(
                user_id=user_id, zone_id=zone_id.value
            ).delete()

    def list_zone_staff(self, zone_id: ZoneId) -> list[StaffZoneAssignment]:
        with _store_errors("list_zone_staff"):
            return [
                _to_assignment(row)
                for row in models.StaffZoneAssignment.objects.filter(
                    zone_id=zone_id.value
                )
            ]

    def list_user_assignments(self, user_id: int) -> list[StaffZoneAssignment]:
        with _store_errors("list_user_assignments"):
            return [
                _to_assignment(row)
                for row in models.StaffZoneAssignment.objects.filter(user_id=user_id)
            ]


class DjangoAttendeeStore(AttendeeStore):
    """Attendee lookups and the registration write, using Django ORM."""

    def get_by_code(self, event_id: EventId, code: str) -> Attendee | None:
        with _store_errors("get_attendee_by_code"):
            row = models.Attendee.objects.filter(
                event_id=event_id.value, code=code
            ).first()
        return _to_attendee(row) if row else None

    def get_by_id(self, attendee_id: AttendeeId) -> Attendee | None:
        with _store_errors("get_attendee"):
            row = models.Attendee.objects.filter(pk=attendee_id.value).first()
        return _to_attendee(row) if row else None

    def mark_registered(
        self, attendee_id: AttendeeId, zone_id: ZoneId, at: datetime
    ) -> Attendee:
        with _store_errors("mark_registered"):
            updated = models.Attendee.objects.filter(
                pk=attendee_id.value, registered_at__isnull=True
            ).update(
                registered_at=at,
                registration_zone_id=zone_id.value,
                packet_delivered=True,
                updated_at=at,
            )
            row = models.Attendee.objects.get(pk=attendee_id.value)
        if updated:
            logger.info(
                "Attendee %s registered at zone %s", attendee_id.value, zone_id.value
            )
        return _to_attendee(row)


class DjangoEventStore(EventStore):
    """Event lookups using Django ORM."""

    def get_event(self, event_id: EventId) -> Event | None:
        with _store_errors("get_event"):
            row = models.Event.objects.filter(pk=event_id.value).first()
        if row is None:
            return None
        return Event(
            id=EventId(row.id),
            tenant_id=str(row.tenant_id),
            name=row.name,
            start_date=row.start_date,
            end_date=row.end_date,
        )


class DjangoUsageSink(UsageSink):
    """Writes usage records to the usage_log table."""

    def log_usage(self, record: UsageRecord) -> None:
        with _store_errors("log_usage"), transaction.atomic():
            models.UsageLog.objects.create(
                tenant_id=record.tenant_id,
                resource_type=record.resource_type,
                resource_id=record.resource_id,
                action=record.action,
                quantity=record.quantity,
            )
