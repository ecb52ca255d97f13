import os

from .core import DEBUG

# --------------------------------------------------------------------------------------
# Inventario
# --------------------------------------------------------------------------------------
INVENTORY = {
    # Stock igual o menor a este valor se considera bajo
    "LOW_STOCK_THRESHOLD": int(os.getenv("STOCK_ALERT_THRESHOLD", "10")),
    "ADMIN_EMAIL": os.getenv("ADMIN_EMAIL", "admin@company.com"),
    "APP_NAME": os.getenv("APP_NAME", "Inventory Management System"),
    "APP_URL": os.getenv("APP_URL", "http://localhost:3000"),
    # InMemoryAlertTracker es por proceso; CacheAlertTracker comparte el estado
    # entre web y workers de Celery a través de Redis.
    "ALERT_TRACKER": os.getenv(
        "INVENTORY_ALERT_TRACKER",
        "inventory.alerts.InMemoryAlertTracker" if DEBUG else "inventory.alerts.CacheAlertTracker",
    ),
    # "reconcile": re-evalúa las alertas activas a medianoche; "clear": las borra todas
    "ALERT_RESET_MODE": os.getenv("INVENTORY_ALERT_RESET_MODE", "reconcile"),
    # Google Sheets (opcional). El token OAuth se obtiene fuera de la aplicación.
    "SHEETS_SPREADSHEET_ID": os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID", ""),
    "SHEETS_ACCESS_TOKEN": os.getenv("GOOGLE_SHEETS_ACCESS_TOKEN", ""),
    "SHEETS_BASE_URL": os.getenv("GOOGLE_SHEETS_BASE_URL", "https://sheets.googleapis.com/v4"),
    "SHEETS_TIMEOUT": int(os.getenv("GOOGLE_SHEETS_TIMEOUT", "10")),
}

if INVENTORY["ALERT_RESET_MODE"] not in ("reconcile", "clear"):
    raise RuntimeError(
        "INVENTORY_ALERT_RESET_MODE debe ser 'reconcile' o 'clear'. "
        f"Valor actual: {INVENTORY['ALERT_RESET_MODE']}"
    )
