"""
Tests del servicio de inventario: pedidos, reabastecimiento y episodios de
stock bajo.

Se usa una base transaccional para que los callbacks de on_commit corran
como en producción.
"""
import threading
import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import connection, transaction
from rest_framework.exceptions import ValidationError

from inventory.exceptions import (
    DuplicateNameError,
    InsufficientStockError,
    InvalidQuantityError,
    NotFoundError,
)
from inventory.models import Product, ProductQuerySet

pytestmark = pytest.mark.django_db(transaction=True)


def _widget_data(**overrides):
    data = {
        "product_name": "Widget",
        "model": "A",
        "price_per_quantity": Decimal("2.50"),
        "unit_stock_quantity": 20,
    }
    data.update(overrides)
    return data


class TestCreateAndUpdate:
    def test_create_product_computes_total_and_notifies(self, service, notifier, tracker):
        product = service.create_product(_widget_data())

        assert product.total_price == Decimal("50.00")
        notifier.notify_new_product.assert_called_once_with(product)
        notifier.notify_low_stock.assert_not_called()
        assert tracker.snapshot_all() == set()

    def test_create_product_with_low_stock_alerts_right_away(self, service, notifier, tracker):
        product = service.create_product(_widget_data(unit_stock_quantity=3))

        assert notifier.notify_low_stock.call_count == 1
        assert tracker.contains(product.pk)

    def test_create_duplicate_name_raises(self, service, make_product):
        make_product()

        with pytest.raises(DuplicateNameError) as exc_info:
            service.create_product(_widget_data(model="B"))

        assert exc_info.value.status_code == 409
        assert exc_info.value.product_name == "Widget"
        assert Product.objects.count() == 1

    def test_create_invalid_name_is_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create_product(_widget_data(product_name="Widget<script>"))

        assert Product.objects.count() == 0

    def test_update_applies_only_given_fields(self, service, make_product):
        product = make_product()

        updated = service.update_product(product.pk, {
            "price_per_quantity": Decimal("3.00"),
            "model": None,
        })

        assert updated.model == "A"
        assert updated.unit_stock_quantity == 20
        assert updated.total_price == Decimal("60.00")

    def test_update_to_name_of_other_product_raises(self, service, make_product):
        make_product(product_name="Gadget")
        product = make_product()

        with pytest.raises(DuplicateNameError):
            service.update_product(product.pk, {"product_name": "Gadget"})

    def test_update_keeping_own_name_is_allowed(self, service, make_product):
        product = make_product()

        updated = service.update_product(product.pk, {"product_name": "Widget", "unit_stock_quantity": 30})

        assert updated.unit_stock_quantity == 30

    def test_update_missing_product_raises(self, service):
        with pytest.raises(NotFoundError):
            service.update_product(uuid.uuid4(), {"unit_stock_quantity": 5})


class TestProcessOrder:
    def test_widget_scenario(self, service, notifier, tracker):
        product = service.create_product(_widget_data())
        assert product.total_price == Decimal("50.00")

        product = service.process_order("Widget", "A", 5)
        assert product.unit_stock_quantity == 15
        assert product.total_price == Decimal("37.50")
        notifier.notify_low_stock.assert_not_called()

        with pytest.raises(InsufficientStockError) as exc_info:
            service.process_order("Widget", "A", 20)
        assert exc_info.value.available == 15
        assert exc_info.value.requested == 20

        product = service.process_order("Widget", "A", 8)
        assert product.unit_stock_quantity == 7
        assert notifier.notify_low_stock.call_count == 1
        assert tracker.contains(product.pk)

        product = service.replenish_stock(product.pk, 5)
        assert product.unit_stock_quantity == 12
        assert product.total_price == Decimal("30.00")
        notifier.notify_replenished.assert_called_once()
        assert notifier.notify_replenished.call_args[0][1] == 5
        assert not tracker.contains(product.pk)

    def test_unknown_product_raises_not_found(self, service, make_product):
        make_product()

        with pytest.raises(NotFoundError):
            service.process_order("Widget", "Z", 1)

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_is_rejected(self, service, make_product, quantity):
        make_product()

        with pytest.raises(InvalidQuantityError):
            service.process_order("Widget", "A", quantity)

        assert Product.objects.get().unit_stock_quantity == 20

    def test_order_can_take_the_whole_stock(self, service, make_product):
        make_product(stock=4)

        product = service.process_order("Widget", "A", 4)

        assert product.unit_stock_quantity == 0
        assert product.total_price == Decimal("0.00")

    def test_rolled_back_order_leaves_no_alert(self, service, notifier, tracker, make_product):
        product = make_product(stock=12)

        with pytest.raises(RuntimeError):
            with transaction.atomic():
                service.process_order("Widget", "A", 5)
                raise RuntimeError("rollback")

        product.refresh_from_db()
        assert product.unit_stock_quantity == 12
        notifier.notify_low_stock.assert_not_called()
        assert tracker.snapshot_all() == set()

    def test_order_losing_the_race_is_rejected(self, service, notifier, make_product):
        product = make_product(stock=10)
        original_first = ProductQuerySet.first

        def _first_then_competing_order(queryset):
            locked = original_first(queryset)
            # Otro pedido descuenta stock entre la lectura y el update condicional
            Product.objects.filter(pk=locked.pk).update(unit_stock_quantity=2)
            return locked

        with patch.object(ProductQuerySet, "first", _first_then_competing_order):
            with pytest.raises(InsufficientStockError) as exc_info:
                service.process_order("Widget", "A", 4)

        assert exc_info.value.available == 2
        assert exc_info.value.requested == 4
        product.refresh_from_db()
        assert product.unit_stock_quantity == 2
        notifier.notify_low_stock.assert_not_called()

    @pytest.mark.skipif(connection.vendor == "sqlite", reason="SQLite no soporta select_for_update concurrente")
    def test_concurrent_orders_never_oversell(self, service, make_product):
        make_product(stock=10)
        results = []
        lock = threading.Lock()

        def _order():
            try:
                service.process_order("Widget", "A", 4)
                outcome = "ok"
            except InsufficientStockError:
                outcome = "insufficient"
            finally:
                connection.close()
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=_order) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count("ok") == 2
        assert results.count("insufficient") == 2
        assert Product.objects.get().unit_stock_quantity == 2


class TestCheckout:
    def test_checkout_processes_all_lines(self, service, notifier, make_product, customer_user):
        make_product()
        make_product(product_name="Gadget", model="B", price="10.00", stock=15)

        summary = service.checkout(customer_user, [
            {"product_name": "Widget", "model": "A", "quantity": 2},
            {"product_name": "Gadget", "model": "B", "quantity": 3},
        ])

        assert summary["order_id"].startswith("ORD-")
        assert summary["total_items"] == 5
        assert summary["total_amount"] == Decimal("35.00")
        by_name = {item["product_name"]: item for item in summary["items"]}
        assert by_name["Widget"]["remaining_stock"] == 18
        assert by_name["Gadget"]["total"] == Decimal("30.00")
        notifier.notify_order_confirmed.assert_called_once_with(customer_user, summary)

    def test_checkout_is_all_or_nothing(self, service, notifier, make_product, customer_user):
        make_product()
        make_product(product_name="Gadget", model="B", stock=1)

        with pytest.raises(InsufficientStockError):
            service.checkout(customer_user, [
                {"product_name": "Widget", "model": "A", "quantity": 2},
                {"product_name": "Gadget", "model": "B", "quantity": 3},
            ])

        assert Product.objects.get(product_name="Widget").unit_stock_quantity == 20
        notifier.notify_order_confirmed.assert_not_called()

    def test_empty_checkout_is_rejected(self, service, customer_user):
        with pytest.raises(ValidationError):
            service.checkout(customer_user, [])


class TestReplenish:
    def test_missing_product_raises(self, service):
        with pytest.raises(NotFoundError):
            service.replenish_stock(uuid.uuid4(), 5)

    def test_non_positive_quantity_raises(self, service, make_product):
        product = make_product()

        with pytest.raises(InvalidQuantityError):
            service.replenish_stock(product.pk, 0)

    def test_cannot_exceed_maximum_stock(self, service, notifier, make_product):
        product = make_product(stock=99_995)

        with pytest.raises(InvalidQuantityError):
            service.replenish_stock(product.pk, 10)

        product.refresh_from_db()
        assert product.unit_stock_quantity == 99_995
        notifier.notify_replenished.assert_not_called()

    def test_replenish_still_low_keeps_alert(self, service, notifier, tracker, make_product):
        product = make_product(stock=2)
        tracker.add(product.pk)

        service.replenish_stock(product.pk, 3)

        notifier.notify_replenished.assert_called_once()
        notifier.notify_low_stock.assert_not_called()
        assert tracker.contains(product.pk)


class TestLowStockEpisodes:
    def test_episode_notifies_once_per_dip(self, service, notifier):
        product = service.create_product(_widget_data(unit_stock_quantity=15))

        for stock in (8, 8, 12, 5):
            service.update_product(product.pk, {"unit_stock_quantity": stock})

        assert notifier.notify_low_stock.call_count == 2
        notified_stocks = [call[0][0].unit_stock_quantity for call in notifier.notify_low_stock.call_args_list]
        assert notified_stocks == [8, 5]

    def test_threshold_is_inclusive(self, service, notifier, make_product):
        product = make_product(stock=10)

        assert service.evaluate_stock_level(product) is True
        notifier.notify_low_stock.assert_called_once_with(product)

    def test_missing_stock_is_ignored(self, service, notifier, tracker):
        product = Product(product_name="Widget", model="A", price_per_quantity=Decimal("1.00"))
        product.unit_stock_quantity = None

        assert service.evaluate_stock_level(product) is False
        notifier.notify_low_stock.assert_not_called()
        assert tracker.snapshot_all() == set()

    def test_repeated_sweeps_notify_each_low_product_once(self, service, notifier, make_product):
        make_product(product_name="Low One", stock=3)
        make_product(product_name="Low Two", stock=10)
        make_product(product_name="Plenty", stock=50)

        assert service.check_all_for_low_stock() == 2
        assert service.check_all_for_low_stock() == 2

        assert notifier.notify_low_stock.call_count == 2

    def test_delete_removes_product_and_alert(self, service, notifier, tracker, make_product):
        product = make_product(stock=3)
        service.check_all_for_low_stock()
        assert tracker.contains(product.pk)

        assert service.delete_product(product.pk) is True

        assert not Product.objects.filter(pk=product.pk).exists()
        assert not tracker.contains(product.pk)
        assert service.check_all_for_low_stock() == 0
        assert notifier.notify_low_stock.call_count == 1

    def test_delete_missing_product_returns_false(self, service):
        assert service.delete_product(uuid.uuid4()) is False
        assert service.delete_product("not-a-uuid") is False

    def test_low_stock_products_are_sorted_by_stock(self, service, make_product):
        make_product(product_name="B", stock=7)
        make_product(product_name="A1", stock=2)
        make_product(product_name="C", stock=40)

        names = [p.product_name for p in service.get_low_stock_products()]

        assert names == ["A1", "B"]


class TestAlertState:
    def test_reconcile_drops_only_stale_alerts(self, service, tracker, make_product):
        still_low = make_product(product_name="Still Low", stock=2)
        recovered = make_product(product_name="Recovered", stock=40)
        tracker.add(still_low.pk)
        tracker.add(recovered.pk)
        tracker.add(uuid.uuid4())

        removed = service.reconcile_alerts()

        assert removed == 2
        assert service.get_alerted_product_ids() == {str(still_low.pk)}

    def test_reconcile_keeps_low_products_silent(self, service, notifier, make_product):
        make_product(stock=2)
        service.check_all_for_low_stock()

        service.reconcile_alerts()
        service.check_all_for_low_stock()

        assert notifier.notify_low_stock.call_count == 1

    def test_clear_alert_history_renotifies_on_next_sweep(self, service, notifier, make_product):
        make_product(stock=2)
        service.check_all_for_low_stock()

        service.clear_alert_history()
        service.check_all_for_low_stock()

        assert notifier.notify_low_stock.call_count == 2

    def test_snapshot_is_a_copy(self, service, tracker, make_product):
        product = make_product(stock=1)
        tracker.add(product.pk)

        snapshot = service.get_alerted_product_ids()
        snapshot.clear()

        assert tracker.contains(product.pk)


class TestNotificationFailures:
    def test_notifier_failure_does_not_break_order(self, service, notifier, make_product):
        make_product(stock=12)
        notifier.notify_low_stock.side_effect = RuntimeError("smtp caído")

        product = service.process_order("Widget", "A", 5)

        assert product.unit_stock_quantity == 7
        assert Product.objects.get().unit_stock_quantity == 7
