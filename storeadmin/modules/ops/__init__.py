"""
Ops Module
==========

Public liveness endpoint for external infrastructure (load balancers, uptime monitors).

Usage:
    from storeadmin.modules.ops import ops_health_bp

    app.register_blueprint(ops_health_bp)  # Registers at /health
"""

from flask import Blueprint

# Public health endpoint (no auth, for uptime monitors)
ops_health_bp = Blueprint(
    'ops_health',
    __name__,
    url_prefix='/health'
)

from . import routes

__all__ = ['ops_health_bp']
