from django.core.validators import RegexValidator
from rest_framework import serializers

from .models import (
    MAX_PRICE,
    MAX_STOCK_QUANTITY,
    MIN_PRICE,
    PRODUCT_MODEL_REGEX,
    PRODUCT_NAME_REGEX,
    Product,
)


class ProductSerializer(serializers.ModelSerializer):
    # Declarado a mano: la unicidad la resuelve el servicio con un 409
    product_name = serializers.CharField(
        min_length=2,
        max_length=100,
        validators=[RegexValidator(PRODUCT_NAME_REGEX, message="El nombre contiene caracteres no permitidos.")],
    )
    model = serializers.CharField(
        max_length=50,
        validators=[RegexValidator(PRODUCT_MODEL_REGEX, message="El modelo contiene caracteres no permitidos.")],
    )
    price_per_quantity = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=MIN_PRICE,
        max_value=MAX_PRICE,
    )
    unit_stock_quantity = serializers.IntegerField(min_value=0, max_value=MAX_STOCK_QUANTITY)
    is_low_stock = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "product_name",
            "model",
            "price_per_quantity",
            "unit_stock_quantity",
            "total_price",
            "status",
            "is_low_stock",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "total_price", "created_at", "updated_at"]

    def get_is_low_stock(self, obj):
        threshold = self.context.get("threshold")
        if threshold is None or obj.unit_stock_quantity is None:
            return False
        return obj.unit_stock_quantity <= threshold


class OrderLineSerializer(serializers.Serializer):
    product_name = serializers.CharField(max_length=100)
    model = serializers.CharField(max_length=50)
    # Sin min_value: el servicio responde con INV-QUANTITY
    quantity = serializers.IntegerField()


class CheckoutSerializer(serializers.Serializer):
    items = OrderLineSerializer(many=True, allow_empty=False)


class ReplenishSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


class OrderItemSummarySerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()
    model = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    remaining_stock = serializers.IntegerField()


class OrderSummarySerializer(serializers.Serializer):
    order_id = serializers.CharField()
    order_date = serializers.CharField()
    items = OrderItemSummarySerializer(many=True)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_items = serializers.IntegerField()
