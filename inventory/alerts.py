"""
Registro de productos con una alerta de stock bajo activa.

Un id está en el tracker mientras su producto siga en un episodio de stock
bajo ya notificado. ``add`` es un test-and-set: solo quien lo inserta
primero recibe True y envía la notificación.
"""
import logging
import threading

from django.apps import apps
from django.core.cache import cache

from core.caching import CacheKeys, cache_lock

logger = logging.getLogger(__name__)


class BaseAlertTracker:
    def add(self, product_id) -> bool:
        raise NotImplementedError

    def remove(self, product_id) -> None:
        raise NotImplementedError

    def contains(self, product_id) -> bool:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def snapshot_all(self) -> set:
        raise NotImplementedError


class InMemoryAlertTracker(BaseAlertTracker):
    """Set protegido por un lock. El estado vive solo en este proceso."""

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = set()

    def add(self, product_id) -> bool:
        key = str(product_id)
        with self._lock:
            if key in self._ids:
                return False
            self._ids.add(key)
            return True

    def remove(self, product_id) -> None:
        with self._lock:
            self._ids.discard(str(product_id))

    def contains(self, product_id) -> bool:
        with self._lock:
            return str(product_id) in self._ids

    def clear(self) -> None:
        with self._lock:
            self._ids.clear()

    def snapshot_all(self) -> set:
        with self._lock:
            return set(self._ids)


class CacheAlertTracker(BaseAlertTracker):
    """
    Tracker compartido entre procesos sobre la caché de Django (Redis en
    producción).

    La membresía es una clave por producto escrita con ``cache.add``, que es
    atómico. El índice de ids solo sirve para ``snapshot_all``/``clear`` y se
    modifica bajo ``cache_lock``.
    """

    INDEX_LOCK = "inventory-alert-index"

    def __init__(self, timeout=None):
        # None = sin expiración
        self.timeout = timeout

    def _key(self, product_id):
        return f"{CacheKeys.INVENTORY_ALERT_PREFIX}{product_id}"

    def _update_index(self, func):
        with cache_lock(self.INDEX_LOCK):
            index = set(cache.get(CacheKeys.INVENTORY_ALERT_INDEX) or [])
            func(index)
            cache.set(CacheKeys.INVENTORY_ALERT_INDEX, sorted(index), timeout=self.timeout)

    def add(self, product_id) -> bool:
        key = str(product_id)
        if not cache.add(self._key(key), True, timeout=self.timeout):
            return False
        try:
            self._update_index(lambda index: index.add(key))
        except BlockingIOError:
            # Toda membresía vive en el índice; el próximo barrido reintenta
            cache.delete(self._key(key))
            logger.warning("Índice de alertas ocupado, se descarta la alerta de %s", key)
            return False
        return True

    def remove(self, product_id) -> None:
        key = str(product_id)
        cache.delete(self._key(key))
        try:
            self._update_index(lambda index: index.discard(key))
        except BlockingIOError:
            logger.warning("No se pudo quitar %s del índice de alertas", key)

    def contains(self, product_id) -> bool:
        return cache.get(self._key(str(product_id))) is not None

    def clear(self) -> None:
        try:
            with cache_lock(self.INDEX_LOCK):
                index = cache.get(CacheKeys.INVENTORY_ALERT_INDEX) or []
                cache.delete_many([self._key(product_id) for product_id in index])
                cache.delete(CacheKeys.INVENTORY_ALERT_INDEX)
        except BlockingIOError:
            # El índice queda intacto; snapshot_all ignora ids sin membresía
            index = cache.get(CacheKeys.INVENTORY_ALERT_INDEX) or []
            cache.delete_many([self._key(product_id) for product_id in index])
            logger.warning("Índice de alertas ocupado, se limpiaron %s alertas sin tocar el índice", len(index))

    def snapshot_all(self) -> set:
        index = cache.get(CacheKeys.INVENTORY_ALERT_INDEX) or []
        # Filtra ids cuyo registro individual ya no existe
        return {product_id for product_id in index if self.contains(product_id)}


def get_alert_tracker():
    """Tracker compartido del proceso, creado en InventoryConfig.ready()."""
    return apps.get_app_config("inventory").alert_tracker
