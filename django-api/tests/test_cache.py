"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache

from zones import models
from zones.domain import EventId
from zones.stores.django_store import DjangoZoneStore, event_zones_cache_key


@pytest.fixture
def event():
    return models.Event.objects.create(
        tenant_id="22222222-2222-2222-2222-222222222222", name="DevConf"
    )


@pytest.fixture
def other_event():
    return models.Event.objects.create(
        tenant_id="33333333-3333-3333-3333-333333333333", name="Other"
    )


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_zone_save_invalidates_event_zone_list(self, event):
        """Saving a zone invalidates the zones:event:{id} cache key."""
        zone = models.EventZone.objects.create(event=event, name="Main Hall")
        store = DjangoZoneStore()
        store.list_event_zones(EventId(event.id))
        assert cache.get(event_zones_cache_key(event.id)) is not None

        zone.name = "Hall A"
        zone.save()

        assert cache.get(event_zones_cache_key(event.id)) is None
        names = [z.name for z in store.list_event_zones(EventId(event.id))]
        assert names == ["Hall A"]

    def test_zone_delete_invalidates_event_zone_list(self, event):
        """Deleting a zone invalidates the zones:event:{id} cache key."""
        zone = models.EventZone.objects.create(event=event, name="Main Hall")
        store = DjangoZoneStore()
        store.list_event_zones(EventId(event.id))

        zone.delete()

        assert store.list_event_zones(EventId(event.id)) == []

    def test_other_event_cache_untouched(self, event, other_event):
        """Zone changes only invalidate their own event's list."""
        models.EventZone.objects.create(event=other_event, name="Booth")
        store = DjangoZoneStore()
        store.list_event_zones(EventId(other_event.id))

        models.EventZone.objects.create(event=event, name="Main Hall")

        assert cache.get(event_zones_cache_key(other_event.id)) is not None

    def test_zone_moved_to_other_event_invalidates_both_lists(
        self, event, other_event
    ):
        """Moving a zone invalidates the lists of its old and new events."""
        zone = models.EventZone.objects.create(event=event, name="Main Hall")
        store = DjangoZoneStore()
        store.list_event_zones(EventId(event.id))
        store.list_event_zones(EventId(other_event.id))

        zone.event = other_event
        zone.save()

        assert cache.get(event_zones_cache_key(event.id)) is None
        assert cache.get(event_zones_cache_key(other_event.id)) is None
        assert store.list_event_zones(EventId(event.id)) == []
        moved = store.list_event_zones(EventId(other_event.id))
        assert [z.name for z in moved] == ["Main Hall"]
