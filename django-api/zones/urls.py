from django.urls import path

from zones.handlers import (
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

urlpatterns = [
    path("zones/checkin", ZoneCheckInView.as_view(), name="zone-checkin"),
    path("zones/<str:zone_id>", ZoneDetailView.as_view(), name="zone-detail"),
    path("zones/<str:zone_id>/days", ZoneDaysView.as_view(), name="zone-days"),
    path(
        "zones/<str:zone_id>/checkins",
        ZoneCheckinListView.as_view(),
        name="zone-checkins",
    ),
    path(
        "zones/<str:zone_id>/access-rules",
        ZoneAccessRuleView.as_view(),
        name="zone-access-rules",
    ),
    path("zones/<str:zone_id>/staff", ZoneStaffView.as_view(), name="zone-staff"),
    path(
        "zones/<str:zone_id>/staff/<int:user_id>",
        ZoneStaffDetailView.as_view(),
        name="zone-staff-detail",
    ),
    path(
        "events/<str:event_id>/zones", EventZoneListView.as_view(), name="event-zones"
    ),
    path(
        "events/<str:event_id>/zones/available",
        AvailableZonesView.as_view(),
        name="available-zones",
    ),
    path(
        "attendees/<str:attendee_id>/zone-history",
        AttendeeZoneHistoryView.as_view(),
        name="attendee-zone-history",
    ),
    path(
        "attendees/<str:attendee_id>/zone-access",
        AttendeeZoneAccessView.as_view(),
        name="attendee-zone-access",
    ),
    path(
        "zone-access/<int:override_id>",
        AttendeeZoneAccessDetailView.as_view(),
        name="zone-access-detail",
    ),
    path(
        "users/<int:user_id>/zones",
        UserZoneAssignmentsView.as_view(),
        name="user-zones",
    ),
]
