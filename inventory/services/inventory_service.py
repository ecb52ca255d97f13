"""
Servicio de inventario: única vía de escritura sobre el stock.

Cada mutación corre dentro de ``transaction.atomic``. La re-evaluación del
nivel de stock, las notificaciones y la exportación se programan con
``transaction.on_commit``: una mutación revertida nunca cambia el estado de
alertas ni envía correos.
"""
import logging
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from ..alerts import get_alert_tracker
from ..exceptions import (
    DuplicateNameError,
    InsufficientStockError,
    InvalidQuantityError,
    NotFoundError,
)
from ..models import MAX_STOCK_QUANTITY, Product, compute_total_price
from .notification_service import InventoryNotifier
from .sheets_exporter import GoogleSheetsExporter

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("product_name", "model", "price_per_quantity", "unit_stock_quantity", "status")


class InventoryService:
    def __init__(self, alert_tracker, notifier, exporter=None, threshold=10):
        self.alert_tracker = alert_tracker
        self.notifier = notifier
        self.exporter = exporter
        self.threshold = threshold

    # ------------------------------------------------------------------
    # Utilidades internas
    # ------------------------------------------------------------------
    def _after_commit(self, label, func, *args):
        """Ejecuta ``func`` tras el commit; sus errores se registran y no se propagan."""
        def _callback():
            try:
                func(*args)
            except Exception:
                logger.exception("Falló la tarea post-commit %s", label)

        transaction.on_commit(_callback)

    def _evaluate_by_id(self, product_id):
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            logger.info("Producto %s eliminado antes de evaluar su stock", product_id)
            return False
        return self.evaluate_stock_level(product)

    def _export_one(self, product):
        if self.exporter is None or not self.exporter.is_configured:
            return None
        return self.exporter.export_one(product)

    @staticmethod
    def _validate_quantity(quantity):
        if quantity is None or isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError(quantity)

    @staticmethod
    def _full_clean(product):
        try:
            # La unicidad del nombre se resuelve aparte con DuplicateNameError
            product.full_clean(validate_unique=False)
        except DjangoValidationError as exc:
            raise ValidationError(exc.message_dict)

    @staticmethod
    def _lock_product(product_id):
        try:
            return Product.objects.select_for_update().get(pk=product_id)
        except (Product.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(product_id)

    # ------------------------------------------------------------------
    # Evaluación de nivel de stock
    # ------------------------------------------------------------------
    def evaluate_stock_level(self, product):
        """
        Actualiza el tracker según el stock actual del producto.

        Devuelve True solo si se envió una notificación de stock bajo, lo
        que ocurre una vez por episodio.
        """
        stock = product.unit_stock_quantity
        if stock is None:
            logger.warning("Producto %s sin stock registrado; no se evalúa", product.pk)
            return False

        if stock <= self.threshold:
            # add es test-and-set: dos evaluaciones concurrentes no notifican dos veces
            if self.alert_tracker.add(product.pk):
                logger.info(
                    "Stock bajo detectado: %s (stock=%s, umbral=%s)",
                    product.product_name, stock, self.threshold,
                )
                self.notifier.notify_low_stock(product)
                return True
            return False

        if self.alert_tracker.contains(product.pk):
            self.alert_tracker.remove(product.pk)
            logger.info("Episodio de stock bajo cerrado: %s (stock=%s)", product.product_name, stock)
        return False

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------
    def get_product(self, product_id):
        try:
            return Product.objects.get(pk=product_id)
        except (Product.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError(product_id)

    def list_products(self):
        return Product.objects.all()

    def get_low_stock_products(self):
        return Product.objects.low_stock(self.threshold).order_by("unit_stock_quantity", "product_name")

    def get_alerted_product_ids(self):
        return self.alert_tracker.snapshot_all()

    # ------------------------------------------------------------------
    # Mutaciones
    # ------------------------------------------------------------------
    @transaction.atomic
    def create_product(self, data):
        product_name = data.get("product_name")
        if Product.objects.filter(product_name=product_name).exists():
            raise DuplicateNameError(product_name)

        product = Product(**{field: data[field] for field in UPDATABLE_FIELDS if data.get(field) is not None})
        self._full_clean(product)
        try:
            with transaction.atomic():
                product.save()
        except IntegrityError:
            # Carrera con otra creación del mismo nombre
            raise DuplicateNameError(product_name)

        logger.info("Producto creado: %s (stock=%s)", product.product_name, product.unit_stock_quantity)

        self._after_commit("evaluate", self._evaluate_by_id, product.pk)
        self._after_commit("notify_new_product", self.notifier.notify_new_product, product)
        self._after_commit("export_one", self._export_one, product)
        return product

    @transaction.atomic
    def update_product(self, product_id, data):
        product = self._lock_product(product_id)

        new_name = data.get("product_name")
        if new_name is not None and new_name != product.product_name:
            if Product.objects.filter(product_name=new_name).exclude(pk=product.pk).exists():
                raise DuplicateNameError(new_name)

        for field in UPDATABLE_FIELDS:
            value = data.get(field)
            if value is not None:
                setattr(product, field, value)

        self._full_clean(product)
        try:
            with transaction.atomic():
                product.save()
        except IntegrityError:
            raise DuplicateNameError(new_name)

        logger.info("Producto actualizado: %s", product.product_name)

        self._after_commit("evaluate", self._evaluate_by_id, product.pk)
        self._after_commit("export_one", self._export_one, product)
        return product

    def _apply_order_line(self, product_name, model, quantity):
        """Descuenta stock de una línea de pedido. Debe correr dentro de una transacción."""
        product = (
            Product.objects.select_for_update()
            .by_name_and_model(product_name, model)
            .first()
        )
        if product is None:
            raise NotFoundError(product_name=product_name, model=model)

        if product.unit_stock_quantity < quantity:
            raise InsufficientStockError(product.product_name, product.unit_stock_quantity, quantity)

        # Decremento condicional: nunca deja stock negativo aunque otro pedido gane la carrera
        updated = Product.objects.filter(
            pk=product.pk,
            unit_stock_quantity__gte=quantity,
        ).update(
            unit_stock_quantity=F("unit_stock_quantity") - quantity,
            updated_at=timezone.now(),
        )
        if updated == 0:
            product.refresh_from_db(fields=["unit_stock_quantity"])
            raise InsufficientStockError(product.product_name, product.unit_stock_quantity, quantity)

        product.refresh_from_db()
        product.save(update_fields=["total_price", "updated_at"])

        self._after_commit("evaluate", self._evaluate_by_id, product.pk)
        return product

    def process_order(self, product_name, model, quantity):
        self._validate_quantity(quantity)

        with transaction.atomic():
            product = self._apply_order_line(product_name, model, quantity)

        logger.info(
            "Pedido procesado: %s x%s (stock restante=%s)",
            product.product_name, quantity, product.unit_stock_quantity,
        )
        return product

    def checkout(self, customer, lines):
        """
        Procesa varias líneas de pedido en una sola transacción.

        Si cualquier línea falla no se descuenta nada. Las filas se bloquean
        en orden (nombre, modelo) para no generar deadlocks entre pedidos.
        """
        if not lines:
            raise ValidationError({"items": ["El pedido debe tener al menos un producto."]})
        for line in lines:
            self._validate_quantity(line.get("quantity"))

        ordered_lines = sorted(lines, key=lambda line: (line["product_name"], line["model"]))
        items = []

        with transaction.atomic():
            for line in ordered_lines:
                product = self._apply_order_line(line["product_name"], line["model"], line["quantity"])
                unit_price = product.price_per_quantity
                items.append({
                    "product_id": str(product.pk),
                    "product_name": product.product_name,
                    "model": product.model,
                    "quantity": line["quantity"],
                    "unit_price": unit_price,
                    "total": compute_total_price(unit_price, line["quantity"]),
                    "remaining_stock": product.unit_stock_quantity,
                })

            summary = {
                "order_id": f"ORD-{uuid.uuid4().hex[:12].upper()}",
                "order_date": timezone.localtime().strftime("%Y-%m-%d %H:%M:%S"),
                "items": items,
                "total_amount": sum((item["total"] for item in items), compute_total_price(0, 0)),
                "total_items": sum(item["quantity"] for item in items),
            }
            self._after_commit("notify_order_confirmed", self.notifier.notify_order_confirmed, customer, summary)

        logger.info(
            "Checkout %s completado: %d líneas, total=%s",
            summary["order_id"], len(items), summary["total_amount"],
        )
        return summary

    @transaction.atomic
    def replenish_stock(self, product_id, quantity):
        self._validate_quantity(quantity)
        product = self._lock_product(product_id)

        if product.unit_stock_quantity + quantity > MAX_STOCK_QUANTITY:
            raise InvalidQuantityError(
                quantity,
                detail=(
                    f"El stock resultante superaría el máximo permitido ({MAX_STOCK_QUANTITY}). "
                    f"Stock actual: {product.unit_stock_quantity}"
                ),
            )

        Product.objects.filter(pk=product.pk).update(
            unit_stock_quantity=F("unit_stock_quantity") + quantity,
            updated_at=timezone.now(),
        )
        product.refresh_from_db()
        product.save(update_fields=["total_price", "updated_at"])

        logger.info(
            "Stock reabastecido: %s +%s (stock=%s)",
            product.product_name, quantity, product.unit_stock_quantity,
        )

        # Notifica primero el reabastecimiento y luego evalúa: puede cerrar el episodio
        self._after_commit("notify_replenished", self.notifier.notify_replenished, product, quantity)
        self._after_commit("evaluate", self._evaluate_by_id, product.pk)
        return product

    @transaction.atomic
    def delete_product(self, product_id):
        try:
            product = Product.objects.select_for_update().get(pk=product_id)
        except (Product.DoesNotExist, DjangoValidationError, ValueError):
            return False

        pk = product.pk
        product.delete()
        logger.info("Producto %s eliminado", pk)
        self._after_commit("untrack", self.alert_tracker.remove, pk)
        return True

    # ------------------------------------------------------------------
    # Barridos y estado de alertas
    # ------------------------------------------------------------------
    def check_all_for_low_stock(self):
        """Evalúa todos los productos con stock bajo. Idempotente."""
        low_stock = list(Product.objects.low_stock(self.threshold))
        notified = sum(1 for product in low_stock if self.evaluate_stock_level(product))
        logger.info(
            "Barrido de stock: %d productos bajos, %d notificaciones nuevas",
            len(low_stock), notified,
        )
        return len(low_stock)

    def clear_alert_history(self):
        self.alert_tracker.clear()
        logger.info("Historial de alertas limpiado")

    def reconcile_alerts(self):
        """
        Quita del tracker los productos que ya no existen o ya no están bajos.

        Los que siguen bajos conservan su alerta, así que no se vuelven a
        notificar. Devuelve cuántos ids se quitaron.
        """
        tracked = self.alert_tracker.snapshot_all()
        if not tracked:
            return 0

        still_low = {
            str(pk)
            for pk in Product.objects.low_stock(self.threshold)
            .filter(pk__in=list(tracked))
            .values_list("pk", flat=True)
        }
        stale = {str(product_id) for product_id in tracked} - still_low
        for product_id in stale:
            self.alert_tracker.remove(product_id)

        logger.info("Alertas reconciliadas: %d activas, %d removidas", len(still_low), len(stale))
        return len(stale)

    def export_all(self):
        if self.exporter is None or not self.exporter.is_configured:
            logger.info("Exportación a Google Sheets no configurada")
            return None
        return self.exporter.export_all(list(Product.objects.all()))


def build_inventory_service(**overrides):
    """Servicio con las dependencias por defecto tomadas de settings."""
    config = settings.INVENTORY
    threshold = overrides.pop("threshold", config["LOW_STOCK_THRESHOLD"])
    kwargs = {
        "alert_tracker": get_alert_tracker(),
        "notifier": InventoryNotifier(threshold=threshold),
        "exporter": GoogleSheetsExporter(),
        "threshold": threshold,
    }
    kwargs.update(overrides)
    return InventoryService(**kwargs)
