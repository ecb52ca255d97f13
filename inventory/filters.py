from django_filters import rest_framework as django_filters

from .models import Product


class ProductFilter(django_filters.FilterSet):
    """Filtros del catálogo: estado, rango de stock y búsqueda por texto."""
    status = django_filters.ChoiceFilter(choices=Product.Status.choices)
    min_stock = django_filters.NumberFilter(field_name="unit_stock_quantity", lookup_expr="gte")
    max_stock = django_filters.NumberFilter(field_name="unit_stock_quantity", lookup_expr="lte")
    min_price = django_filters.NumberFilter(field_name="price_per_quantity", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price_per_quantity", lookup_expr="lte")
    model = django_filters.CharFilter(field_name="model", lookup_expr="iexact")
    search = django_filters.CharFilter(field_name="product_name", lookup_expr="icontains")

    class Meta:
        model = Product
        fields = ["status", "model"]
