from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Notificaciones"

    def ready(self):
        # Registra las tareas de Celery
        import notifications.tasks  # noqa: F401
