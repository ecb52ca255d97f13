import logging

from celery import shared_task
from django.conf import settings

from core.caching import acquire_lock, release_lock

from .services import build_inventory_service

logger = logging.getLogger(__name__)

SWEEP_LOCK_KEY = "inventory:low-stock-sweep"


def _run_sweep(label):
    # Evita dos barridos simultáneos si beat se solapa con una ejecución manual
    if not acquire_lock(SWEEP_LOCK_KEY, timeout=300):
        logger.info("Barrido %s omitido: ya hay uno en curso", label)
        return "Barrido en curso"
    try:
        count = build_inventory_service().check_all_for_low_stock()
    finally:
        release_lock(SWEEP_LOCK_KEY)
    logger.info("Barrido %s completado: %d productos con stock bajo", label, count)
    return f"Productos con stock bajo: {count}"


@shared_task
def check_low_stock():
    """Barrido periódico (cada 10 minutos)."""
    return _run_sweep("periódico")


@shared_task
def daily_low_stock_check():
    """Barrido diario de las 09:00."""
    return _run_sweep("diario")


@shared_task
def reset_alert_state():
    """
    Reinicio de medianoche del estado de alertas.

    En modo "reconcile" solo se descartan alertas de productos que ya no
    están bajos o que no existen; en modo "clear" se borran todas y los
    productos aún bajos se vuelven a notificar en el siguiente barrido.
    """
    service = build_inventory_service()
    mode = settings.INVENTORY["ALERT_RESET_MODE"]
    if mode == "clear":
        service.clear_alert_history()
        return "Alertas limpiadas"

    removed = service.reconcile_alerts()
    return f"Alertas reconciliadas: {removed} removidas"


@shared_task(bind=True, autoretry_for=(Exception,), retry_backoff=True, retry_kwargs={"max_retries": 3})
def export_inventory_to_sheet(self):
    link = build_inventory_service().export_all()
    if link is None:
        return "Exportación omitida"
    return link
