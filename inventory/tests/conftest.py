from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from model_bakery import baker

from inventory.alerts import InMemoryAlertTracker, get_alert_tracker
from inventory.models import Product
from inventory.services import InventoryNotifier, InventoryService


@pytest.fixture(autouse=True)
def _reset_app_alert_tracker():
    # El tracker de la app vive mientras dure el proceso de tests
    get_alert_tracker().clear()
    yield
    get_alert_tracker().clear()


@pytest.fixture
def tracker():
    return InMemoryAlertTracker()


@pytest.fixture
def notifier():
    return MagicMock(spec=InventoryNotifier)


@pytest.fixture
def service(tracker, notifier):
    return InventoryService(alert_tracker=tracker, notifier=notifier, exporter=None, threshold=10)


@pytest.fixture
def make_product():
    def _make(product_name="Widget", model="A", price="2.50", stock=20, **kwargs):
        return baker.make(
            Product,
            product_name=product_name,
            model=model,
            price_per_quantity=Decimal(price),
            unit_stock_quantity=stock,
            **kwargs,
        )
    return _make
