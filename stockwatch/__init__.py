# Garantiza que la app de Celery se cargue cuando Django arranca,
# para que @shared_task use esta instancia.
from .celery import app as celery_app

__all__ = ("celery_app",)
