"""Serializers for transforming domain models to API responses, and for
validating request bodies."""

from rest_framework import serializers


class EventZoneSerializer(serializers.Serializer):
    """Serializer for EventZone domain model."""

    id = serializers.UUIDField(source="id.value", read_only=True)
    event_id = serializers.UUIDField(source="event_id.value", read_only=True)
    name = serializers.CharField(read_only=True)
    zone_type = serializers.CharField(read_only=True)
    order_index = serializers.IntegerField(read_only=True)
    open_time = serializers.CharField(read_only=True, allow_null=True)
    close_time = serializers.CharField(read_only=True, allow_null=True)
    is_registration_zone = serializers.BooleanField(read_only=True)
    requires_registration = serializers.BooleanField(read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    settings = serializers.DictField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class ZoneStatsSerializer(serializers.Serializer):
    """Serializer for ZoneStats domain model."""

    zone = EventZoneSerializer(read_only=True)
    total_checkins = serializers.IntegerField(read_only=True)
    today_checkins = serializers.IntegerField(read_only=True)
    assigned_staff = serializers.IntegerField(read_only=True)
    access_rules_count = serializers.IntegerField(read_only=True)


class AttendeeSerializer(serializers.Serializer):
    """Serializer for the Attendee fields the zone core exposes."""

    id = serializers.UUIDField(source="id.value", read_only=True)
    event_id = serializers.UUIDField(source="event_id.value", read_only=True)
    code = serializers.CharField(read_only=True)
    first_name = serializers.CharField(read_only=True)
    last_name = serializers.CharField(read_only=True)
    blocked = serializers.BooleanField(read_only=True)
    block_reason = serializers.CharField(read_only=True, allow_null=True)
    registered_at = serializers.DateTimeField(read_only=True, allow_null=True)
    registration_zone_id = serializers.SerializerMethodField()
    packet_delivered = serializers.BooleanField(read_only=True)
    custom_fields = serializers.DictField(read_only=True)

    def get_registration_zone_id(self, attendee) -> str | None:
        if attendee.registration_zone_id is None:
            return None
        return str(attendee.registration_zone_id.value)


class ZoneCheckinSerializer(serializers.Serializer):
    """Serializer for ZoneCheckin domain model."""

    id = serializers.IntegerField(read_only=True)
    attendee_id = serializers.UUIDField(source="attendee_id.value", read_only=True)
    zone_id = serializers.UUIDField(source="zone_id.value", read_only=True)
    checked_in_at = serializers.DateTimeField(read_only=True)
    checked_in_by = serializers.IntegerField(read_only=True, allow_null=True)
    event_day = serializers.DateField(read_only=True)
    metadata = serializers.DictField(read_only=True)


class MovementHistoryEntrySerializer(serializers.Serializer):
    """Serializer for MovementHistoryEntry domain model."""

    checkin = ZoneCheckinSerializer(read_only=True)
    zone_name = serializers.CharField(read_only=True)
    zone_type = serializers.CharField(read_only=True)


class ZoneDaySerializer(serializers.Serializer):
    """Serializer for ZoneDay domain model."""

    date = serializers.DateField(read_only=True)
    day_number = serializers.IntegerField(read_only=True)
    is_today = serializers.BooleanField(read_only=True)
    is_past = serializers.BooleanField(read_only=True)
    is_future = serializers.BooleanField(read_only=True)


class ZoneAccessRuleSerializer(serializers.Serializer):
    """Serializer for ZoneAccessRule: reads domain rules, validates input rules."""

    id = serializers.IntegerField(read_only=True)
    zone_id = serializers.UUIDField(source="zone_id.value", read_only=True)
    category = serializers.CharField(max_length=100)
    allowed = serializers.BooleanField()
    created_at = serializers.DateTimeField(read_only=True)


class AttendeeZoneAccessSerializer(serializers.Serializer):
    """Serializer for AttendeeZoneAccess domain model."""

    id = serializers.IntegerField(read_only=True)
    attendee_id = serializers.UUIDField(source="attendee_id.value", read_only=True)
    zone_id = serializers.UUIDField(source="zone_id.value", read_only=True)
    allowed = serializers.BooleanField(read_only=True)
    notes = serializers.CharField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class AttendeeZoneAccessInputSerializer(serializers.Serializer):
    zone_id = serializers.CharField()
    allowed = serializers.BooleanField()
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class StaffZoneAssignmentSerializer(serializers.Serializer):
    """Serializer for StaffZoneAssignment domain model."""

    id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    zone_id = serializers.UUIDField(source="zone_id.value", read_only=True)
    assigned_at = serializers.DateTimeField(read_only=True)
    assigned_by = serializers.IntegerField(read_only=True, allow_null=True)


class StaffAssignInputSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)


class ZoneCheckInRequestSerializer(serializers.Serializer):
    attendee_code = serializers.CharField(max_length=64)
    zone_id = serializers.CharField()
    event_day = serializers.DateField(required=False, allow_null=True)
    metadata = serializers.DictField(required=False)


class ZoneCheckInResponseSerializer(serializers.Serializer):
    """Serializer for a successful CheckInResult."""

    success = serializers.SerializerMethodField()
    attendee = AttendeeSerializer(read_only=True)
    zone = EventZoneSerializer(read_only=True)
    checked_in_at = serializers.DateTimeField(read_only=True)
    packet_delivered = serializers.BooleanField(read_only=True)
    message = serializers.CharField(read_only=True)

    def get_success(self, result) -> bool:
        return True
