"""
Shared fixtures: a configured app whose service clients are replaced by mocks.
"""

from unittest.mock import MagicMock

import pytest

from storeadmin import create_app
from storeadmin.core.services import ProductServiceClient, OrderServiceClient


@pytest.fixture
def app():
    """Flask app with the store admin installed and test service URLs"""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "PRODUCT_SERVICE_URL": "http://products.test",
        "ORDER_SERVICE_URL": "http://orders.test",
        "SERVICE_TIMEOUT": 5,
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def product_service(app):
    """Mocked product service client; lists are empty unless a test says otherwise"""
    mock = MagicMock(spec=ProductServiceClient)
    mock.list_products.return_value = []
    app.extensions["storeadmin"].products = mock
    return mock


@pytest.fixture
def order_service(app):
    """Mocked order service client; lists are empty unless a test says otherwise"""
    mock = MagicMock(spec=OrderServiceClient)
    mock.list_orders.return_value = []
    app.extensions["storeadmin"].orders = mock
    return mock
