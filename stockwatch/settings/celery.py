import os

from celery.schedules import crontab

from .base import BASE_DIR, DEBUG, TIME_ZONE

# --------------------------------------------------------------------------------------
# Celery
# --------------------------------------------------------------------------------------
CELERY_BROKER_URL = os.getenv(
    "CELERY_BROKER_URL", os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0"))
CELERY_RESULT_BACKEND = os.getenv(
    "CELERY_RESULT_BACKEND", CELERY_BROKER_URL)

if not DEBUG:
    if not CELERY_BROKER_URL.startswith("rediss://"):
        raise RuntimeError(
            "CELERY_BROKER_URL debe usar rediss:// (TLS) en producción. "
            f"URL actual: {CELERY_BROKER_URL.split('@')[-1] if '@' in CELERY_BROKER_URL else CELERY_BROKER_URL}"
        )

CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE

CELERY_BEAT_SCHEDULE_FILENAME = os.getenv(
    "CELERY_BEAT_SCHEDULE_FILENAME",
    "/var/run/stockwatch/celerybeat-schedule" if not DEBUG else str(BASE_DIR / "celerybeat-schedule"),
)

CELERY_TASK_ACKS_LATE = True
CELERY_TASK_TIME_LIMIT = int(os.getenv("CELERY_TASK_TIME_LIMIT", "120"))  # 2 minutos
CELERY_TASK_SOFT_TIME_LIMIT = int(os.getenv("CELERY_TASK_SOFT_TIME_LIMIT", "100"))  # 100 segundos
CELERY_BROKER_CONNECTION_RETRY_ON_STARTUP = True
CELERY_WORKER_MAX_TASKS_PER_CHILD = int(os.getenv("CELERY_WORKER_MAX_TASKS_PER_CHILD", "500"))

# Rutas de tareas a colas dedicadas
CELERY_TASK_ROUTES = {
    "notifications.tasks.*": {"queue": "notifications"},
    "inventory.tasks.export_inventory_to_sheet": {"queue": "exports"},
}

CELERY_BEAT_SCHEDULE = {
    "check-low-stock-every-10-minutes": {
        "task": "inventory.tasks.check_low_stock",
        "schedule": crontab(minute="*/10"),
    },
    "daily-low-stock-check": {
        "task": "inventory.tasks.daily_low_stock_check",
        "schedule": crontab(hour=9, minute=0),  # 9:00 AM
    },
    "reset-alert-state-daily": {
        "task": "inventory.tasks.reset_alert_state",
        "schedule": crontab(hour=0, minute=0),  # Medianoche
    },
    "cleanup-notification-logs": {
        "task": "notifications.tasks.cleanup_old_notification_logs",
        "schedule": crontab(hour=2, minute=0),
    },
}
