import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _service_url(name, default):
    return os.getenv(name, default).rstrip('/')


class Config:
    """
    Base configuration for the store admin dashboard.
    The two service base URLs are the only functional settings; the rest are deployment knobs.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Remote services
    PRODUCT_SERVICE_URL = _service_url('PRODUCT_SERVICE_URL', 'http://localhost:3001')
    ORDER_SERVICE_URL = _service_url('ORDER_SERVICE_URL', 'http://localhost:3002')

    # Seconds to wait on either service before giving up
    SERVICE_TIMEOUT = float(os.getenv('SERVICE_TIMEOUT', '10'))

    # Browser sessions whose dashboard state is kept in memory (least recently used evicted)
    STATE_MAX_SESSIONS = int(os.getenv('STATE_MAX_SESSIONS', '500'))

    # Branding
    BRAND_NAME = "Algonquin Pet Store"

    # Origins allowed to call /health from a browser
    HEALTH_CORS_ORIGINS = os.getenv('HEALTH_CORS_ORIGINS', '*')

    # Port for local server
    port = int(os.getenv('PORT', '3000'))


CONFIG_KEYS = [
    'SECRET_KEY',
    'PRODUCT_SERVICE_URL',
    'ORDER_SERVICE_URL',
    'SERVICE_TIMEOUT',
    'STATE_MAX_SESSIONS',
    'BRAND_NAME',
    'HEALTH_CORS_ORIGINS',
]
