import pytest
from django.core.cache import cache
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(django_user_model):
    """Usuario con rol ADMIN."""
    return django_user_model.objects.create_user(
        email="admin@example.com",
        password="Str0ngPass!2024",
        name="Admin User",
        role="ADMIN",
    )


@pytest.fixture
def staff_user(django_user_model):
    """Usuario con rol STAFF."""
    return django_user_model.objects.create_user(
        email="staff@example.com",
        password="Str0ngPass!2024",
        name="Staff User",
        role="STAFF",
        designation="Bodeguero",
        department="Logística",
        phone_number="+573001112233",
    )


@pytest.fixture
def customer_user(django_user_model):
    """Usuario con rol USER."""
    return django_user_model.objects.create_user(
        email="customer@example.com",
        password="Str0ngPass!2024",
        name="Customer User",
        role="USER",
    )


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture
def customer_client(customer_user):
    client = APIClient()
    client.force_authenticate(user=customer_user)
    return client
