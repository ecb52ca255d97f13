"""
Claves de caché centralizadas y utilidades básicas de locking.
"""
import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass

from django.core.cache import cache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheKeys:
    """
    Contenedor inmutable de las claves de caché del sistema.

    Uso:
        from core.caching import CacheKeys
        cache.get(CacheKeys.INVENTORY_ALERT_INDEX)
    """
    # Alertas de stock bajo: un registro por producto + índice de ids
    INVENTORY_ALERT_PREFIX = "inventory:alerts:product:v1:"
    INVENTORY_ALERT_INDEX = "inventory:alerts:index:v1"


def acquire_lock(key: str, timeout: int = 5) -> bool:
    """
    Intenta adquirir un lock distribuido usando cache.add (SETNX).
    Devuelve True si se adquiere, False en caso contrario.
    """
    try:
        return cache.add(f"lock:{key}", True, timeout=timeout)
    except Exception:
        return False


def release_lock(key: str) -> None:
    cache.delete(f"lock:{key}")


@contextmanager
def cache_lock(key: str, timeout: int = 3, acquire_timeout: float = 2.0):
    """
    Spinlock distribuido sobre la caché con ownership por UUID.

    Falla con BlockingIOError si no obtiene el lock en ``acquire_timeout``
    segundos. Solo libera el lock si sigue siendo el dueño.
    """
    lock_key = f"lock:{key}"
    lock_value = str(uuid.uuid4())
    timeout_at = time.monotonic() + acquire_timeout
    acquired = False

    try:
        while time.monotonic() < timeout_at:
            if cache.add(lock_key, lock_value, timeout=timeout):
                acquired = True
                break
            time.sleep(0.05)

        if not acquired:
            raise BlockingIOError(f"No se pudo adquirir el lock para {key}")

        yield
    finally:
        if acquired:
            if cache.get(lock_key) == lock_value:
                cache.delete(lock_key)
            else:
                logger.warning("Lock %s expiró antes de liberarse", key)
