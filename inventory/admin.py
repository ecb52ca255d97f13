from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "product_name",
        "model",
        "unit_stock_quantity",
        "price_per_quantity",
        "total_price",
        "status",
        "updated_at",
    )
    list_filter = ("status",)
    search_fields = ("product_name", "model")
    readonly_fields = ("total_price", "created_at", "updated_at")
    ordering = ("product_name",)
