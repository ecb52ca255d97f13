from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from inventory.models import Product, compute_total_price


def test_compute_total_price_rounds_to_cents():
    assert compute_total_price(Decimal("0.335"), 3) == Decimal("1.00")
    assert compute_total_price(None, 3) == Decimal("0.00")


@pytest.mark.django_db
class TestProduct:
    def test_total_price_recomputed_on_save(self, make_product):
        product = make_product()
        product.unit_stock_quantity = 3
        product.save(update_fields=["unit_stock_quantity"])

        product.refresh_from_db()
        assert product.total_price == Decimal("7.50")

    def test_low_stock_queryset_is_inclusive(self, make_product):
        make_product(product_name="At", stock=10)
        make_product(product_name="Above", stock=11)

        names = list(Product.objects.low_stock(10).values_list("product_name", flat=True))

        assert names == ["At"]

    @pytest.mark.parametrize("field,value", [
        ("product_name", "W"),
        ("product_name", "Widget#1"),
        ("model", ""),
        ("model", "A/B"),
        ("price_per_quantity", Decimal("0.00")),
        ("price_per_quantity", Decimal("1000000.01")),
        ("unit_stock_quantity", 100_001),
    ])
    def test_field_validation(self, field, value):
        product = Product(product_name="Widget", model="AB", price_per_quantity=Decimal("1.00"), unit_stock_quantity=1)
        setattr(product, field, value)

        with pytest.raises(ValidationError) as exc_info:
            product.full_clean()

        assert field in exc_info.value.message_dict

    def test_allowed_name_characters(self):
        product = Product(
            product_name="Cable (USB-C) & Adapter+, v2.0",
            model="X-100, rev.2",
            price_per_quantity=Decimal("9.99"),
            unit_stock_quantity=0,
        )

        product.full_clean()

    def test_str(self, make_product):
        assert str(make_product()) == "Widget (A)"
