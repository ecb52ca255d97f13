from django.core.cache import cache
from django.db import connections
from django.http import JsonResponse
import logging

logger = logging.getLogger(__name__)

_CACHE_PROBE_KEY = "health:probe"


def health_check_view(request):
    """
    Health check que verifica las dependencias críticas.

    Verifica:
    - Base de datos
    - Caché (Redis en producción); de ella depende el tracker de alertas compartido
    - Workers de Celery (solo con ?check_celery=1, puede ser lento)

    Retorna 200 si todo está OK, 503 si alguna dependencia crítica falla.
    """
    checks = {
        "db": False,
        "cache": False,
        "celery": "not_checked",
    }
    errors = []

    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        checks["db"] = True
    except Exception as exc:
        errors.append(f"DB error: {exc}")
        logger.error("Health check DB failed: %s", exc)

    try:
        cache.set(_CACHE_PROBE_KEY, "ok", timeout=5)
        checks["cache"] = cache.get(_CACHE_PROBE_KEY) == "ok"
        if not checks["cache"]:
            errors.append("Cache error: probe key not readable")
    except Exception as exc:
        errors.append(f"Cache error: {exc}")
        logger.error("Health check Cache failed: %s", exc)

    if request.GET.get("check_celery") == "1":
        try:
            from celery.app.control import Inspect
            from stockwatch.celery import app as celery_app

            inspector = Inspect(app=celery_app, timeout=2.0)
            active_workers = inspector.ping()
            checks["celery"] = bool(active_workers)
            if not active_workers:
                errors.append("No Celery workers responding")
        except Exception as exc:
            checks["celery"] = False
            errors.append(f"Celery error: {exc}")
            logger.error("Health check Celery failed: %s", exc)

    if checks["db"] and checks["cache"]:
        return JsonResponse(
            {"status": "ok", "app": "stockwatch", "checks": checks},
            status=200,
        )
    return JsonResponse(
        {"status": "error", "app": "stockwatch", "checks": checks, "errors": errors},
        status=503,
    )
