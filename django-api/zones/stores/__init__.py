from zones.stores.interfaces import AttendeeStore, EventStore, UsageSink, ZoneStore

__all__ = ["AttendeeStore", "EventStore", "UsageSink", "ZoneStore"]
