from zones.services.checkin_service import CheckInService
from zones.services.zone_service import ZoneService

__all__ = ["CheckInService", "ZoneService"]
