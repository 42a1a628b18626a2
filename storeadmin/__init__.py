"""
Store Admin - Pet Store Admin Dashboard
=======================================

A Flask admin dashboard for the Algonquin Pet Store with:
- Products tab backed by the product service (list, create, delete)
- Orders tab backed by the order service (list, status transitions)
- Public /health endpoint for liveness checks

Usage:
    from storeadmin import create_app

    app = create_app()

or, on an existing Flask app:

    from storeadmin import StoreAdmin

    StoreAdmin(app)
"""

from datetime import datetime

from flask import Flask

from .core.config import Config, CONFIG_KEYS
from .core.services import ProductServiceClient, OrderServiceClient
from .core.state import StateStore, ORDER_STATUS_ACTIONS, ORDER_STATUS_TRANSITIONS

__version__ = '0.1.0'


# ---------------------------------------------------------------------------
# Template filters
# ---------------------------------------------------------------------------

def format_currency(value):
    """9.99 -> '$9.99'"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return '' if value is None else str(value)
    return f"${value:.2f}"


def short_id(value, length=8):
    return f"{str(value or '')[:length]}..."


def format_order_datetime(value):
    """ISO-8601 -> local time as '3/5/2024, 2:07:09 PM'"""
    try:
        dt = datetime.fromisoformat(str(value).replace('Z', '+00:00')).astimezone()
    except (TypeError, ValueError):
        return 'Invalid Date'
    hour = dt.hour % 12 or 12
    meridiem = 'AM' if dt.hour < 12 else 'PM'
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


# ---------------------------------------------------------------------------
# Extension
# ---------------------------------------------------------------------------

class StoreAdmin:
    """Wires the dashboard and ops modules, service clients and state store into a Flask app"""

    def __init__(self, app=None):
        self.products = None
        self.orders = None
        self.state = None
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key in CONFIG_KEYS:
            app.config.setdefault(key, getattr(Config, key))
        app.config.setdefault('CORS_ORIGINS', app.config['HEALTH_CORS_ORIGINS'])

        timeout = float(app.config['SERVICE_TIMEOUT'])
        self.products = ProductServiceClient(app.config['PRODUCT_SERVICE_URL'], timeout)
        self.orders = OrderServiceClient(app.config['ORDER_SERVICE_URL'], timeout)
        self.state = StateStore(app.config['STATE_MAX_SESSIONS'])

        self._register_modules(app)

        app.add_template_filter(format_currency, 'currency')
        app.add_template_filter(short_id, 'short_id')
        app.add_template_filter(format_order_datetime, 'order_datetime')

        @app.context_processor
        def inject_storeadmin_context():
            return {
                'brand_name': app.config['BRAND_NAME'],
                'order_actions': ORDER_STATUS_ACTIONS,
                'order_transitions': ORDER_STATUS_TRANSITIONS,
            }

        app.extensions['storeadmin'] = self

    def _register_modules(self, app):
        from .modules.dashboard import dashboard_bp
        from .modules.ops import ops_health_bp

        for name, blueprint in (('dashboard', dashboard_bp), ('ops', ops_health_bp)):
            app.register_blueprint(blueprint)
            self._registered.append(name)

    def get_registered_modules(self):
        return list(self._registered)


def create_app(config=None):
    """Build a Flask app with the store admin installed"""
    app = Flask(__name__)
    app.config['SECRET_KEY'] = Config.SECRET_KEY
    if config:
        app.config.update(config)
    StoreAdmin(app)
    return app


__all__ = ['StoreAdmin', 'create_app', 'Config']
