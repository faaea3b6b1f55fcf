from django.contrib import admin

from zones.models import (
    Attendee,
    AttendeeZoneAccess,
    Event,
    EventZone,
    StaffZoneAssignment,
    ZoneAccessRule,
    ZoneCheckin,
)


class ZoneAccessRuleInline(admin.TabularInline):
    model = ZoneAccessRule
    extra = 1


class StaffZoneAssignmentInline(admin.TabularInline):
    model = StaffZoneAssignment
    fk_name = "zone"
    extra = 1


class EventZoneInline(admin.TabularInline):
    model = EventZone
    extra = 1
    fields = ["name", "zone_type", "order_index", "is_active"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "start_date", "end_date"]
    search_fields = ["name"]
    inlines = [EventZoneInline]


@admin.register(EventZone)
class EventZoneAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "event",
        "zone_type",
        "order_index",
        "open_time",
        "close_time",
        "is_registration_zone",
        "requires_registration",
        "is_active",
    ]
    list_filter = ["event", "is_active", "is_registration_zone"]
    inlines = [ZoneAccessRuleInline, StaffZoneAssignmentInline]


@admin.register(Attendee)
class AttendeeAdmin(admin.ModelAdmin):
    list_display = [
        "code",
        "first_name",
        "last_name",
        "event",
        "blocked",
        "registered_at",
    ]
    list_filter = ["event", "blocked", "packet_delivered"]
    search_fields = ["code", "first_name", "last_name", "email"]
    readonly_fields = ["registered_at", "registration_zone"]


@admin.register(AttendeeZoneAccess)
class AttendeeZoneAccessAdmin(admin.ModelAdmin):
    list_display = ["attendee", "zone", "allowed"]
    list_filter = ["zone__event", "allowed"]


@admin.register(ZoneCheckin)
class ZoneCheckinAdmin(admin.ModelAdmin):
    list_display = ["attendee", "zone", "event_day", "checked_in_at", "checked_in_by"]
    list_filter = ["zone__event", "zone", "event_day"]

    def has_change_permission(self, request, obj=None) -> bool:
        return False
