"""
Critical Integration Tests for the Store Admin
==============================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

from datetime import datetime

import pytest
from flask import Flask

from storeadmin import StoreAdmin, create_app, format_currency, format_order_datetime, short_id
from storeadmin.core.services import ServiceError


# ---------------------------------------------------------------------------
# 1. Extension initialisation -- StoreAdmin(app) does not raise
# ---------------------------------------------------------------------------

def test_extension_initialisation():
    """StoreAdmin(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"

    store_admin = StoreAdmin(app)

    assert "storeadmin" in app.extensions
    assert app.extensions["storeadmin"] is store_admin
    assert store_admin.state is not None


# ---------------------------------------------------------------------------
# 2. Config resolution -- app config wins over Config defaults
# ---------------------------------------------------------------------------

def test_config_service_urls(app):
    """Service clients are built from the app's configured base URLs."""
    ext = app.extensions["storeadmin"]
    assert ext.products.base_url == "http://products.test"
    assert ext.orders.base_url == "http://orders.test"
    assert ext.products.timeout == 5


def test_config_defaults_applied():
    """Keys the app does not set fall back to Config."""
    app = create_app({"TESTING": True})
    assert app.config["STATE_MAX_SESSIONS"] == 500
    assert app.config["BRAND_NAME"] == "Algonquin Pet Store"
    assert app.config["PRODUCT_SERVICE_URL"]
    assert app.config["ORDER_SERVICE_URL"]


def test_service_url_trailing_slash_stripped():
    app = create_app({"TESTING": True, "PRODUCT_SERVICE_URL": "http://products.test/"})
    assert app.extensions["storeadmin"].products.base_url == "http://products.test"


# ---------------------------------------------------------------------------
# 3. Blueprint registration
# ---------------------------------------------------------------------------

EXPECTED_MODULES = ["dashboard", "ops"]


def test_all_blueprints_registered(app):
    registered = app.extensions["storeadmin"].get_registered_modules()
    assert registered == EXPECTED_MODULES

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    for rule in ["/", "/health", "/products", "/products/form",
                 "/products/<product_id>/delete", "/orders/<order_id>/status"]:
        assert rule in rules, f"Route {rule} not registered. Routes: {sorted(rules)}"


# ---------------------------------------------------------------------------
# 4. Template context and filters
# ---------------------------------------------------------------------------

def test_template_context_injection(app):
    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())

        assert ctx["brand_name"] == "Algonquin Pet Store"
        assert ctx["order_actions"]["pending"] == "Start Processing"
        assert ctx["order_transitions"]["processing"] == "completed"


EXPECTED_TEMPLATE_FILTERS = ["currency", "short_id", "order_datetime"]


def test_template_filters_registered(app):
    for name in EXPECTED_TEMPLATE_FILTERS:
        assert name in app.jinja_env.filters, f"Template filter '{name}' is not registered."


def test_currency_filter():
    assert format_currency(9.99) == "$9.99"
    assert format_currency(10) == "$10.00"
    assert format_currency(0.5) == "$0.50"
    assert format_currency(None) == ""


def test_short_id_filter():
    assert short_id("64f1c2d3e4a5b6c7d8e9") == "64f1c2d3..."


def test_order_datetime_filter():
    # No offset: interpreted as local time, so the wall clock is kept
    assert format_order_datetime("2024-03-05T14:07:09") == "3/5/2024, 2:07:09 PM"
    assert format_order_datetime("2024-12-25T00:30:00") == "12/25/2024, 12:30:00 AM"
    assert format_order_datetime("not a date") == "Invalid Date"
    assert format_order_datetime(None) == "Invalid Date"


# ---------------------------------------------------------------------------
# 5. Health endpoint
# ---------------------------------------------------------------------------

def _assert_healthy(response):
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "healthy"
    assert data["service"] == "store-admin"
    assert data["timestamp"].endswith("Z")
    parsed = datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
    assert parsed.tzinfo is not None


def test_health_endpoint(client):
    """GET /health returns the fixed payload with a parsable timestamp."""
    _assert_healthy(client.get("/health"))
    _assert_healthy(client.get("/health/"))


def test_health_ignores_application_state(client, product_service):
    """A failing product service does not affect liveness."""
    product_service.list_products.side_effect = ServiceError("list_products", "down")
    client.get("/")

    _assert_healthy(client.get("/health"))


def test_health_allows_cross_origin_requests(client):
    origin = "https://status.example.com"
    response = client.get("/health", headers={"Origin": origin})
    # Wildcard or echoed origin depending on the Flask-CORS release
    assert response.headers.get("Access-Control-Allow-Origin") in ("*", origin)


def test_health_service_name_is_fixed():
    """The service identity does not follow app config."""
    app = create_app({"TESTING": True, "SERVICE_NAME": "something-else"})
    data = app.test_client().get("/health").get_json()
    assert data["service"] == "store-admin"


# ---------------------------------------------------------------------------
# 6. Session state is bounded
# ---------------------------------------------------------------------------

def test_anonymous_requests_do_not_grow_state_without_limit(product_service, app):
    """Cookieless clients (monitors, crawlers) cannot exhaust the state store."""
    app.config["STATE_MAX_SESSIONS"] = 10
    app.extensions["storeadmin"].state.max_sessions = 10

    for _ in range(50):
        assert app.test_client().get("/").status_code == 200

    assert len(app.extensions["storeadmin"].state) == 10


def test_state_store_size_from_config():
    app = create_app({"TESTING": True, "STATE_MAX_SESSIONS": 25})
    assert app.extensions["storeadmin"].state.max_sessions == 25
