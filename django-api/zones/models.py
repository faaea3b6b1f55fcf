"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
Event and Attendee are owned by other subsystems; only the fields the zone
core reads or gates are declared here.
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from zones.domain.value_objects import TimeOfDay


def validate_time_of_day(value: str) -> None:
    try:
        TimeOfDay(value)
    except ValueError as exc:
        raise ValidationError("Use HH:MM between 00:00 and 23:59.") from exc


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant_id = models.UUIDField()
    name = models.CharField(max_length=255)
    start_date = models.DateField(blank=True, null=True)
    end_date = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class Attendee(models.Model):
    """Persistence model for attendees."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="attendees")
    code = models.CharField(max_length=64)
    first_name = models.CharField(max_length=255, blank=True)
    last_name = models.CharField(max_length=255, blank=True)
    email = models.EmailField(blank=True)
    blocked = models.BooleanField(default=False)
    block_reason = models.TextField(blank=True, null=True)
    registered_at = models.DateTimeField(blank=True, null=True)
    registration_zone = models.ForeignKey(
        "EventZone",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="registered_attendees",
    )
    packet_delivered = models.BooleanField(default=False)
    custom_fields = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["event", "code"], name="uniq_attendee_event_code"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.code})"


class EventZone(models.Model):
    """Persistence model for event zones."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="zones")
    name = models.CharField(max_length=255)
    zone_type = models.CharField(max_length=50, default="general")
    order_index = models.IntegerField(default=0)
    open_time = models.CharField(
        max_length=5, blank=True, null=True, validators=[validate_time_of_day]
    )
    close_time = models.CharField(
        max_length=5, blank=True, null=True, validators=[validate_time_of_day]
    )
    is_registration_zone = models.BooleanField(default=False)
    requires_registration = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    settings = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order_index"]
        indexes = [
            models.Index(fields=["event", "order_index"], name="zone_event_order_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class ZoneAccessRule(models.Model):
    """Persistence model for category access rules."""

    zone = models.ForeignKey(
        EventZone, on_delete=models.CASCADE, related_name="access_rules"
    )
    category = models.CharField(max_length=100)
    allowed = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["category"]
        constraints = [
            models.UniqueConstraint(
                fields=["zone", "category"], name="uniq_zone_category"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.zone.name} - {self.category}"


class AttendeeZoneAccess(models.Model):
    """Persistence model for individual access overrides."""

    attendee = models.ForeignKey(
        Attendee, on_delete=models.CASCADE, related_name="zone_overrides"
    )
    zone = models.ForeignKey(
        EventZone, on_delete=models.CASCADE, related_name="overrides"
    )
    allowed = models.BooleanField()
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["attendee", "zone"], name="uniq_attendee_zone_access"
            ),
        ]


class ZoneCheckin(models.Model):
    """Persistence model for the check-in ledger."""

    attendee = models.ForeignKey(
        Attendee, on_delete=models.CASCADE, related_name="zone_checkins"
    )
    zone = models.ForeignKey(
        EventZone, on_delete=models.CASCADE, related_name="checkins"
    )
    checked_in_at = models.DateTimeField()
    checked_in_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="zone_checkins",
    )
    event_day = models.DateField()
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-checked_in_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["attendee", "zone", "event_day"], name="uniq_checkin_per_day"
            ),
        ]
        indexes = [
            models.Index(fields=["zone", "event_day"], name="checkin_zone_day_idx"),
        ]


class StaffZoneAssignment(models.Model):
    """Persistence model for staff-to-zone grants."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="zone_assignments",
    )
    zone = models.ForeignKey(
        EventZone, on_delete=models.CASCADE, related_name="staff_assignments"
    )
    assigned_at = models.DateTimeField(auto_now_add=True)
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="zone_assignments_made",
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "zone"], name="uniq_staff_zone"),
        ]


class UsageLog(models.Model):
    """Persistence model for usage records."""

    tenant_id = models.UUIDField()
    resource_type = models.CharField(max_length=50)
    resource_id = models.CharField(max_length=64, blank=True)
    action = models.CharField(max_length=50)
    quantity = models.IntegerField(default=1)
    metadata = models.JSONField(default=dict, blank=True)
    logged_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(
                fields=["tenant_id", "resource_type"], name="usage_tenant_type_idx"
            ),
        ]
