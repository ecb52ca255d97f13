"""
Notificaciones por email del inventario.
"""
import logging

from django.conf import settings
from django.utils import timezone

from notifications.services import EmailNotificationService

logger = logging.getLogger(__name__)

TEMPLATE_PREFIX = "inventory/emails"


class InventoryNotifier:
    """
    Envía los emails del inventario a través de la app de notificaciones.

    Ningún método propaga errores: un fallo de notificación nunca debe
    revertir ni interrumpir una operación de stock.
    """

    def __init__(self, admin_email=None, threshold=None):
        config = settings.INVENTORY
        self.admin_email = admin_email or config["ADMIN_EMAIL"]
        self.threshold = threshold if threshold is not None else config["LOW_STOCK_THRESHOLD"]
        self.app_name = config["APP_NAME"]
        self.app_url = config["APP_URL"].rstrip("/")

    def _base_context(self):
        return {
            "app_name": self.app_name,
            "app_url": self.app_url,
            "threshold": self.threshold,
            "timestamp": timezone.localtime().strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _product_context(self, product):
        context = self._base_context()
        context.update({
            "product": product,
            "product_name": product.product_name,
            "model": product.model,
            "stock": product.unit_stock_quantity,
            "price": "%.2f" % product.price_per_quantity,
            "total": "%.2f" % product.total_price,
            "status": product.get_status_display(),
        })
        return context

    def _send(self, event_code, recipient, template, context, user=None):
        try:
            EmailNotificationService.send_templated_email(
                event_code=event_code,
                recipient=recipient,
                template_prefix=f"{TEMPLATE_PREFIX}/{template}",
                context=context,
                user=user,
            )
            return True
        except Exception:
            logger.exception("No se pudo enviar el email %s a %s", event_code, recipient)
            return False

    def notify_low_stock(self, product):
        sent = self._send("low-stock", self.admin_email, "low_stock", self._product_context(product))
        if sent:
            logger.info(
                "Alerta de stock bajo enviada: %s (stock=%s)",
                product.product_name, product.unit_stock_quantity,
            )
        return sent

    def notify_new_product(self, product):
        return self._send("new-product", self.admin_email, "new_product", self._product_context(product))

    def notify_replenished(self, product, quantity_added):
        context = self._product_context(product)
        context["quantity_added"] = quantity_added
        return self._send("stock-replenished", self.admin_email, "replenished", context)

    def notify_order_confirmed(self, customer, order_summary):
        recipient = getattr(customer, "email", None)
        if not recipient:
            logger.warning("Pedido %s sin email de cliente; no se envía confirmación", order_summary.get("order_id"))
            return False

        context = self._base_context()
        context.update({
            "customer_name": getattr(customer, "name", "") or recipient,
            "order": order_summary,
        })
        return self._send("order-confirmed", recipient, "order_confirmed", context, user=customer)
