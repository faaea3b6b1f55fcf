from django.apps import AppConfig


class ZonesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "zones"

    def ready(self) -> None:
        from zones import signals  # noqa: F401
