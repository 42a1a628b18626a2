"""
Algonquin Pet Store - Admin
===========================

Run with:
    python app.py

Visit:
    http://localhost:3000         - Admin dashboard
    http://localhost:3000/health  - Health check
"""

from storeadmin import create_app
from storeadmin.core.config import Config

app = create_app()


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Algonquin Pet Store - Admin")
    print("=" * 60)
    print(f"Dashboard:       http://localhost:{Config.port}")
    print(f"Health:          http://localhost:{Config.port}/health")
    print(f"Product service: {Config.PRODUCT_SERVICE_URL}")
    print(f"Order service:   {Config.ORDER_SERVICE_URL}")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=False)
