"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from zones.models import EventZone
from zones.stores.django_store import event_zones_cache_key


@receiver(pre_save, sender=EventZone)
def invalidate_previous_event_zones_cache(sender, instance, **kwargs):
    """Invalidate the stored event's zone list when a zone moves to another event."""
    previous = (
        EventZone.objects.filter(pk=instance.pk)
        .values_list("event_id", flat=True)
        .first()
    )
    if previous is not None and previous != instance.event_id:
        cache.delete(event_zones_cache_key(previous))


@receiver([post_save, post_delete], sender=EventZone)
def invalidate_event_zones_cache(sender, instance, **kwargs):
    """Invalidate the event's zone list when one of its zones changes."""
    cache.delete(event_zones_cache_key(instance.event_id))
