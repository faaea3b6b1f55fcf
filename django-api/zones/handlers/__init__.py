from zones.handlers.views import (
    AttendeeZoneAccessDetailView,
    AttendeeZoneAccessView,
    AttendeeZoneHistoryView,
    AvailableZonesView,
    EventZoneListView,
    UserZoneAssignmentsView,
    ZoneAccessRuleView,
    ZoneCheckInView,
    ZoneCheckinListView,
    ZoneDaysView,
    ZoneDetailView,
    ZoneStaffDetailView,
    ZoneStaffView,
)

__all__ = [
    "AttendeeZoneAccessDetailView",
    "AttendeeZoneAccessView",
    "AttendeeZoneHistoryView",
    "AvailableZonesView",
    "EventZoneListView",
    "UserZoneAssignmentsView",
    "ZoneAccessRuleView",
    "ZoneCheckInView",
    "ZoneCheckinListView",
    "ZoneDaysView",
    "ZoneDetailView",
    "ZoneStaffDetailView",
    "ZoneStaffView",
]
