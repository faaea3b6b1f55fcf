"""Time rules for zones: opening windows and event days."""

from datetime import date, datetime, timedelta

from zones.domain.models import Event, EventZone, ZoneDay
from zones.domain.value_objects import TimeOfDay

ZONE_INACTIVE = "Zone is not active"
ZONE_CLOSED = "Zone is closed at this time"


def is_within_window(
    open_time: TimeOfDay | None, close_time: TimeOfDay | None, now: TimeOfDay
) -> bool:
    """Check a wall-clock time against an inclusive [open, close] window.

    Comparison is lexical. A window whose close is before its open never
    matches, so windows crossing midnight are never open.
    """
    if open_time is not None and now < open_time:
        return False
    if close_time is not None and now > close_time:
        return False
    return True


def zone_gate_failure(zone: EventZone, now: datetime) -> str | None:
    """Return the reason the zone refuses check-ins right now, or None."""
    if not zone.is_active:
        return ZONE_INACTIVE
    current = TimeOfDay.from_datetime(now)
    if not is_within_window(zone.open_time, zone.close_time, current):
        return ZONE_CLOSED
    return None


def event_days(event: Event, today: date) -> list[ZoneDay]:
    """One entry per calendar day from the event start to end, inclusive."""
    if event.start_date is None or event.end_date is None:
        return []

    days = []
    current = event.start_date
    day_number = 1
    while current <= event.end_date:
        days.append(
            ZoneDay(
                date=current,
                day_number=day_number,
                is_today=current == today,
                is_past=current < today,
                is_future=current > today,
            )
        )
        current += timedelta(days=1)
        day_number += 1
    return days
