"""
Dashboard Module
================

Single-page admin dashboard for the pet store.

Provides:
- Products tab: listing, creation form, deletion with confirmation
- Orders tab: listing and status transitions (pending -> processing -> completed)

Products and orders live in the remote product and order services; this module
only holds per-session copies fetched on demand.
"""

from flask import Blueprint

dashboard_bp = Blueprint(
    'dashboard',
    __name__,
    template_folder='templates',
    static_folder='static',
    static_url_path='/dashboard/static'
)

# Import routes after blueprint is created
from . import routes

__all__ = ['dashboard_bp']
