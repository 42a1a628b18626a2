"""
Dashboard Routes
================

Products and orders tabs backed by the remote product and order services.

Every handler works on the caller's DashboardState. Successful mutations
redirect back to the tab, which re-fetches the list; failures render the
current state as-is so the previously displayed list stays on screen.
"""

import uuid

from flask import current_app, flash, redirect, render_template, request, session, url_for

from storeadmin.core.logging_service import LoggingService
from storeadmin.core.services import ServiceError
from storeadmin.core.state import (
    PRODUCTS, ORDERS, InvalidTransitionError, check_order_transition,
    fetch_finished, fetch_succeeded, reset_product_form, select_tab,
    toggle_product_form, update_form,
)
from . import dashboard_bp

FORM_FIELDS = ('name', 'description', 'price', 'category', 'stock')


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _extension():
    return current_app.extensions['storeadmin']


def _session_id():
    """Per-browser key into the state store"""
    sid = session.get('dashboard_sid')
    if not sid:
        sid = uuid.uuid4().hex
        session['dashboard_sid'] = sid
    return sid


def _fetch_list(sid, kind):
    """Fetch one list from its service; the prior list survives a failure"""
    ext = _extension()
    token = ext.state.begin_fetch(sid, kind)
    try:
        if kind == PRODUCTS:
            items = ext.products.list_products()
        else:
            items = ext.orders.list_orders()
        ext.state.apply(sid, fetch_succeeded, kind, token, items)
    except ServiceError as e:
        LoggingService.log_error_with_traceback(kind, f"Error fetching {kind}", e)
    finally:
        ext.state.apply(sid, fetch_finished, kind, token)


def _render_dashboard(sid):
    state = _extension().state.get(sid)
    return render_template('dashboard/dashboard.html', state=state)


def _tab_url(tab):
    return url_for('dashboard.index', tab=tab)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@dashboard_bp.route('/')
def index():
    """Dashboard page; selecting a tab (or loading the page) fetches its list"""
    sid = _session_id()
    state = _extension().state.apply(sid, select_tab, request.args.get('tab', PRODUCTS))
    _fetch_list(sid, state.active_tab)
    return _render_dashboard(sid)


@dashboard_bp.route('/products/form', methods=['POST'])
def toggle_form():
    """Show or hide the create-product form"""
    sid = _session_id()
    store = _extension().state
    store.apply(sid, select_tab, PRODUCTS)
    store.apply(sid, toggle_product_form)
    return _render_dashboard(sid)


@dashboard_bp.route('/products', methods=['POST'])
def create_product():
    """Create a product from the form"""
    sid = _session_id()
    ext = _extension()

    fields = {name: request.form.get(name, '') for name in FORM_FIELDS}
    ext.state.apply(sid, select_tab, PRODUCTS)
    state = ext.state.apply(sid, update_form, **fields)
    payload = state.form.to_payload()

    try:
        ext.products.create_product(payload)
    except ServiceError as e:
        flash('Failed to create product', 'error')
        LoggingService.log_error_with_traceback(PRODUCTS, "Error creating product", e,
                                                {'payload': payload})
        return _render_dashboard(sid)

    LoggingService.log_user_action(PRODUCTS, 'create product', {'name': payload['name']})
    ext.state.apply(sid, reset_product_form)
    flash('Product created successfully!', 'success')
    return redirect(_tab_url(PRODUCTS))


@dashboard_bp.route('/products/<product_id>/delete', methods=['POST'])
def delete_product(product_id):
    """Delete a product once the user has confirmed"""
    sid = _session_id()
    ext = _extension()
    state = ext.state.apply(sid, select_tab, PRODUCTS)

    if request.form.get('confirm') != 'yes':
        product = next((p for p in state.products if p.get('_id') == product_id), None)
        return render_template('dashboard/confirm_delete.html',
                               product_id=product_id, product=product)

    try:
        ext.products.delete_product(product_id)
    except ServiceError as e:
        flash('Failed to delete product', 'error')
        LoggingService.log_error_with_traceback(PRODUCTS, "Error deleting product", e,
                                                {'product_id': product_id})
        return _render_dashboard(sid)

    LoggingService.log_user_action(PRODUCTS, 'delete product', {'product_id': product_id})
    flash('Product deleted successfully!', 'success')
    return redirect(_tab_url(PRODUCTS))


@dashboard_bp.route('/orders/<order_id>/status', methods=['POST'])
def update_order_status(order_id):
    """Move an order to its next status"""
    sid = _session_id()
    ext = _extension()
    state = ext.state.apply(sid, select_tab, ORDERS)
    requested = request.form.get('status')

    order = state.find_order(order_id)
    if order is None:
        flash('Failed to update order status', 'error')
        LoggingService.warning(ORDERS, "Status update for an order not in the current list",
                               {'order_id': order_id, 'status': requested})
        return _render_dashboard(sid)

    try:
        check_order_transition(order.get('status'), requested)
    except InvalidTransitionError as e:
        flash('Failed to update order status', 'error')
        LoggingService.warning(ORDERS, str(e), {'order_id': order_id})
        return _render_dashboard(sid)

    try:
        ext.orders.update_order_status(order_id, requested)
    except ServiceError as e:
        flash('Failed to update order status', 'error')
        LoggingService.log_error_with_traceback(ORDERS, "Error updating order", e,
                                                {'order_id': order_id, 'status': requested})
        return _render_dashboard(sid)

    LoggingService.log_user_action(ORDERS, 'update order status',
                                   {'order_id': order_id, 'status': requested})
    flash('Order status updated!', 'success')
    return redirect(_tab_url(ORDERS))
