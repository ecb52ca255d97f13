import logging

from django.http import HttpResponse
from django.utils import timezone
from django.utils.functional import cached_property
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.api.permissions import IsAdmin, IsStaff, RoleAllowed
from core.exceptions import ServiceUnavailableError

from .exceptions import NotFoundError
from .filters import ProductFilter
from .models import Product
from .serializers import (
    CheckoutSerializer,
    OrderLineSerializer,
    OrderSummarySerializer,
    ProductSerializer,
    ReplenishSerializer,
)
from .services import build_inventory_service
from .services.exports import (
    XLSX_CONTENT_TYPE,
    build_products_csv,
    build_products_workbook,
    export_filename,
)

logger = logging.getLogger(__name__)


class InventoryServiceMixin:
    @cached_property
    def service(self):
        return build_inventory_service()


class ProductViewSet(InventoryServiceMixin, viewsets.ModelViewSet):
    """
    Catálogo de productos.

    - LIST/RETRIEVE: público
    - CREATE/UPDATE, reportes, barrido manual y reabastecimiento: STAFF o ADMIN
    - DELETE, limpieza de alertas y exportación a Google Sheets: solo ADMIN
    """
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = ProductFilter
    ordering_fields = ["product_name", "unit_stock_quantity", "price_per_quantity", "total_price", "updated_at"]
    ordering = ["product_name"]
    throttle_scope = None

    PUBLIC_ACTIONS = {"list", "retrieve"}
    ADMIN_ACTIONS = {"destroy", "clear_alerts", "export_sheet"}

    def get_permissions(self):
        if self.action in self.PUBLIC_ACTIONS:
            return [AllowAny()]
        if self.action in self.ADMIN_ACTIONS:
            return [IsAdmin()]
        return [IsStaff()]

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["threshold"] = self.service.threshold
        return context

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = self.service.create_product(serializer.validated_data)
        return Response(self.get_serializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        product = self.service.update_product(instance.pk, serializer.validated_data)
        return Response(self.get_serializer(product).data)

    def destroy(self, request, *args, **kwargs):
        if not self.service.delete_product(kwargs[self.lookup_field]):
            raise NotFoundError(kwargs[self.lookup_field])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request):
        products = self.service.get_low_stock_products()
        return Response({
            "threshold": self.service.threshold,
            "count": len(products),
            "results": self.get_serializer(products, many=True).data,
        })

    @action(detail=False, methods=["get"], url_path="stock-status")
    def stock_status(self, request):
        products = list(self.service.get_low_stock_products())
        alerted = sorted(self.service.get_alerted_product_ids())
        return Response({
            "threshold": self.service.threshold,
            "low_stock_count": len(products),
            "alerted_products_count": len(alerted),
            "low_stock_products": self.get_serializer(products, many=True).data,
            "alerted_product_ids": alerted,
            "timestamp": timezone.now(),
        })

    @action(detail=False, methods=["post"], url_path="check-stock")
    def check_stock(self, request):
        count = self.service.check_all_for_low_stock()
        return Response({
            "message": "Revisión de stock completada.",
            "low_stock_count": count,
            "timestamp": timezone.now(),
        })

    @action(detail=True, methods=["post"])
    def replenish(self, request, pk=None):
        serializer = ReplenishSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        quantity = serializer.validated_data["quantity"]
        product = self.service.replenish_stock(pk, quantity)
        return Response({
            "message": "Stock reabastecido correctamente.",
            "quantity_added": quantity,
            "product": self.get_serializer(product).data,
        })

    @action(detail=False, methods=["post"], url_path="clear-alerts")
    def clear_alerts(self, request):
        self.service.clear_alert_history()
        return Response({"message": "Historial de alertas limpiado."})

    @action(detail=False, methods=["get"], url_path="export-csv", throttle_scope="inventory_export")
    def export_csv(self, request):
        content = build_products_csv(self.service.list_products())
        response = HttpResponse(content, content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{export_filename("csv")}"'
        return response

    @action(detail=False, methods=["get"], url_path="export-xlsx", throttle_scope="inventory_export")
    def export_xlsx(self, request):
        content = build_products_workbook(self.service.list_products())
        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        response["Content-Disposition"] = f'attachment; filename="{export_filename("xlsx")}"'
        return response

    @action(detail=False, methods=["post"], url_path="export-sheet", throttle_scope="inventory_export")
    def export_sheet(self, request):
        exporter = self.service.exporter
        if exporter is None or not exporter.is_configured:
            raise ServiceUnavailableError("La exportación a Google Sheets no está configurada.")

        from .tasks import export_inventory_to_sheet

        export_inventory_to_sheet.delay()
        logger.info("Exportación a Google Sheets encolada por %s", request.user.pk)
        return Response(
            {
                "message": "Exportación encolada.",
                "csv_link": exporter.csv_download_link(),
            },
            status=status.HTTP_202_ACCEPTED,
        )


class OrderViewSet(InventoryServiceMixin, viewsets.GenericViewSet):
    """Pedidos contra el stock disponible. No se persisten."""
    permission_classes = [RoleAllowed]
    required_roles = {"USER", "STAFF", "ADMIN"}
    serializer_class = OrderLineSerializer
    throttle_scope = "orders"

    def get_serializer_class(self):
        if self.action == "checkout":
            return CheckoutSerializer
        return super().get_serializer_class()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        product = self.service.process_order(data["product_name"], data["model"], data["quantity"])
        return Response({
            "success": True,
            "message": "Pedido procesado correctamente.",
            "product": ProductSerializer(product, context={"threshold": self.service.threshold}).data,
            "ordered_quantity": data["quantity"],
            "remaining_stock": product.unit_stock_quantity,
            "total_order_value": str(product.price_per_quantity * data["quantity"]),
            "timestamp": timezone.now(),
        })

    @action(detail=False, methods=["post"])
    def checkout(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        summary = self.service.checkout(request.user, serializer.validated_data["items"])
        return Response(OrderSummarySerializer(summary).data, status=status.HTTP_201_CREATED)
