import pytest
from rest_framework.test import APIRequestFactory


@pytest.fixture
def api_rf():
    """Factory para crear requests DRF en tests."""
    return APIRequestFactory()
