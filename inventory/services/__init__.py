from .inventory_service import InventoryService, build_inventory_service
from .notification_service import InventoryNotifier
from .sheets_exporter import GoogleSheetsExporter

__all__ = [
    "GoogleSheetsExporter",
    "InventoryNotifier",
    "InventoryService",
    "build_inventory_service",
]
