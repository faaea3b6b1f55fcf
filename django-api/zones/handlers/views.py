"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from datetime import date

from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from zones.conf import zones_setting
from zones.domain import Caller, Role
from zones.domain.errors import (
    DomainError,
    ErrorCode,
    InvalidDateError,
    InvalidRequestError,
)
from zones.handlers.serializers import (
    AttendeeZoneAccessInputSerializer,
    AttendeeZoneAccessSerializer,
    EventZoneSerializer,
    MovementHistoryEntrySerializer,
    StaffAssignInputSerializer,
    StaffZoneAssignmentSerializer,
    ZoneAccessRuleSerializer,
    ZoneCheckInRequestSerializer,
    ZoneCheckInResponseSerializer,
    ZoneCheckinSerializer,
    ZoneDaySerializer,
    ZoneStatsSerializer,
)
from zones.services.checkin_service import CheckInService
from zones.services.zone_service import ZoneService
from zones.stores.django_store import (
    DjangoAttendeeStore,
    DjangoEventStore,
    DjangoUsageSink,
    DjangoZoneStore,
)

STATUS_BY_CODE = {
    ErrorCode.ZONE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ATTENDEE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.OVERRIDE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CHECKIN_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def checkin_service() -> CheckInService:
    return CheckInService(
        DjangoZoneStore(),
        DjangoAttendeeStore(),
        DjangoEventStore(),
        DjangoUsageSink(),
        clock=timezone.localtime,
    )


def zone_service() -> ZoneService:
    return ZoneService(
        DjangoZoneStore(),
        DjangoAttendeeStore(),
        DjangoEventStore(),
        today=timezone.localdate,
        elevated_roles=zones_setting("ELEVATED_ROLES"),
    )


def caller_from_request(request: Request) -> Caller:
    """Build the explicit caller identity from the authenticated user.

    Superusers are admins; otherwise the first known role among the user's
    group names wins, falling back to staff.
    """
    user = request.user
    if user.is_superuser:
        return Caller(user_id=user.pk, role=Role.ADMIN.value)
    groups = set(user.groups.values_list("name", flat=True))
    role = next((r.value for r in Role if r.value in groups), Role.STAFF.value)
    return Caller(user_id=user.pk, role=role)


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": error.message, "code": error.code.value},
        status=STATUS_BY_CODE[error.code],
    )


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError() from exc


def validated(serializer_class, data, **kwargs):
    serializer = serializer_class(data=data, **kwargs)
    if not serializer.is_valid():
        raise InvalidRequestError()
    return serializer.validated_data


class ZoneCheckInView(APIView):
    """Handler for POST /api/zones/checkin"""

    def post(self, request: Request) -> Response:
        try:
            data = validated(ZoneCheckInRequestSerializer, request.data)
            result = checkin_service().check_in(
                attendee_code=data["attendee_code"],
                zone_id=data["zone_id"],
                caller=caller_from_request(request),
                event_day=data.get("event_day"),
                metadata=data.get("metadata"),
            )
        except DomainError as err:
            return Response(
                {"success": False, "error": err.message},
                status=STATUS_BY_CODE[err.code],
            )
        return Response(ZoneCheckInResponseSerializer(result).data)


class EventZoneListView(APIView):
    """Handler for GET /api/events/{event_id}/zones"""

    def get(self, request: Request, event_id: str) -> Response:
        service = zone_service()
        try:
            if request.query_params.get("with_stats") == "true":
                stats = service.zones_with_stats(event_id)
                return Response(ZoneStatsSerializer(stats, many=True).data)
            zones = service.list_zones(event_id)
            return Response(EventZoneSerializer(zones, many=True).data)
        except DomainError as err:
            return error_response(err)


class AvailableZonesView(APIView):
    """Handler for GET /api/events/{event_id}/zones/available"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            zones = zone_service().available_zones(
                event_id, caller_from_request(request)
            )
        except DomainError as err:
            return error_response(err)
        return Response(EventZoneSerializer(zones, many=True).data)


class ZoneDetailView(APIView):
    """Handler for GET /api/zones/{zone_id}"""

    def get(self, request: Request, zone_id: str) -> Response:
        try:
            zone = zone_service().get_zone(zone_id)
        except DomainError as err:
            return error_response(err)
        return Response(EventZoneSerializer(zone).data)


class ZoneDaysView(APIView):
    """Handler for GET /api/zones/{zone_id}/days"""

    def get(self, request: Request, zone_id: str) -> Response:
        try:
            days = zone_service().zone_days(zone_id)
        except DomainError as err:
            return error_response(err)
        return Response(ZoneDaySerializer(days, many=True).data)


class ZoneCheckinListView(APIView):
    """Handler for GET /api/zones/{zone_id}/checkins?date=YYYY-MM-DD"""

    def get(self, request: Request, zone_id: str) -> Response:
        try:
            day = parse_date(request.query_params.get("date"))
            checkins = checkin_service().list_checkins(zone_id, day)
        except DomainError as err:
            return error_response(err)
        return Response(ZoneCheckinSerializer(checkins, many=True).data)


class AttendeeZoneHistoryView(APIView):
    """Handler for GET /api/attendees/{attendee_id}/zone-history"""

    def get(self, request: Request, attendee_id: str) -> Response:
        try:
            history = checkin_service().attendee_history(attendee_id)
        except DomainError as err:
            return error_response(err)
        return Response(MovementHistoryEntrySerializer(history, many=True).data)


class ZoneAccessRuleView(APIView):
    """Handler for GET/PUT /api/zones/{zone_id}/access-rules"""

    def get(self, request: Request, zone_id: str) -> Response:
        try:
            rules = zone_service().list_access_rules(zone_id)
        except DomainError as err:
            return error_response(err)
        return Response(ZoneAccessRuleSerializer(rules, many=True).data)

    def put(self, request: Request, zone_id: str) -> Response:
        try:
            data = validated(ZoneAccessRuleSerializer, request.data, many=True)
            rules = zone_service().replace_access_rules(
                zone_id, [(item["category"], item["allowed"]) for item in data]
            )
        except DomainError as err:
            return error_response(err)
        return Response(ZoneAccessRuleSerializer(rules, many=True).data)


class AttendeeZoneAccessView(APIView):
    """Handler for GET/POST /api/attendees/{attendee_id}/zone-access"""

    def get(self, request: Request, attendee_id: str) -> Response:
        try:
            overrides = zone_service().list_overrides(attendee_id)
        except DomainError as err:
            return error_response(err)
        return Response(AttendeeZoneAccessSerializer(overrides, many=True).data)

    def post(self, request: Request, attendee_id: str) -> Response:
        try:
            data = validated(AttendeeZoneAccessInputSerializer, request.data)
            override = zone_service().set_override(
                attendee_id, data["zone_id"], data["allowed"], data.get("notes")
            )
        except DomainError as err:
            return error_response(err)
        return Response(
            AttendeeZoneAccessSerializer(override).data, status=status.HTTP_201_CREATED
        )


class AttendeeZoneAccessDetailView(APIView):
    """Handler for DELETE /api/zone-access/{override_id}"""

    def delete(self, request: Request, override_id: int) -> Response:
        try:
            zone_service().delete_override(override_id)
        except DomainError as err:
            return error_response(err)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ZoneStaffView(APIView):
    """Handler for GET/POST /api/zones/{zone_id}/staff"""

    def get(self, request: Request, zone_id: str) -> Response:
        try:
            assignments = zone_service().zone_staff(zone_id)
        except DomainError as err:
            return error_response(err)
        return Response(StaffZoneAssignmentSerializer(assignments, many=True).data)

    def post(self, request: Request, zone_id: str) -> Response:
        try:
            data = validated(StaffAssignInputSerializer, request.data)
            assignment = zone_service().assign_staff(
                zone_id, data["user_id"], caller_from_request(request)
            )
        except DomainError as err:
            return error_response(err)
        return Response(
            StaffZoneAssignmentSerializer(assignment).data,
            status=status.HTTP_201_CREATED,
        )


class ZoneStaffDetailView(APIView):
    """Handler for DELETE /api/zones/{zone_id}/staff/{user_id}"""

    def delete(self, request: Request, zone_id: str, user_id: int) -> Response:
        try:
            zone_service().remove_staff(zone_id, user_id)
        except DomainError as err:
            return error_response(err)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserZoneAssignmentsView(APIView):
    """Handler for GET /api/users/{user_id}/zones"""

    def get(self, request: Request, user_id: int) -> Response:
        try:
            assignments = zone_service().user_assignments(user_id)
        except DomainError as err:
            return error_response(err)
        return Response(StaffZoneAssignmentSerializer(assignments, many=True).data)
