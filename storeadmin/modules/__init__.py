"""
Store Admin Modules
===================

Flask blueprint modules for the admin dashboard and its health endpoint.
"""

__all__ = ['dashboard', 'ops']
