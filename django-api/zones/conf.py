"""App settings with defaults, read from settings.ZONES."""

from django.conf import settings

DEFAULTS = {
    "ELEVATED_ROLES": ("admin", "manager"),
    "ZONE_LIST_CACHE_TIMEOUT": 300,
}


def zones_setting(name: str):
    return getattr(settings, "ZONES", {}).get(name, DEFAULTS[name])
