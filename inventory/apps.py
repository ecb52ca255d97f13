from django.apps import AppConfig
from django.conf import settings
from django.utils.module_loading import import_string


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "inventory"
    verbose_name = "Inventario"

    alert_tracker = None

    def ready(self):
        # Una sola instancia del tracker por proceso
        tracker_path = settings.INVENTORY["ALERT_TRACKER"]
        self.alert_tracker = import_string(tracker_path)()

        import inventory.tasks  # noqa: F401
