"""
Dashboard State
===============

Explicit state container for the admin dashboard.

Every browser session owns one immutable DashboardState. Transitions are pure
functions that return a new state; StateStore swaps states atomically.
Fetches are tagged with a per-list token so a late response for an older
request cannot overwrite newer data.
"""

import re
import threading
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from typing import Tuple

PRODUCTS = 'products'
ORDERS = 'orders'
TABS = (PRODUCTS, ORDERS)

PENDING = 'pending'
PROCESSING = 'processing'
COMPLETED = 'completed'

# Current status -> the only status it may move to. Anything absent is terminal.
ORDER_STATUS_TRANSITIONS = {
    PENDING: PROCESSING,
    PROCESSING: COMPLETED,
}

ORDER_STATUS_ACTIONS = {
    PENDING: 'Start Processing',
    PROCESSING: 'Complete',
}


class InvalidTransitionError(Exception):
    """Requested order status is not the allowed next status"""

    def __init__(self, current, requested):
        super().__init__(f"Order status cannot move from {current!r} to {requested!r}")
        self.current = current
        self.requested = requested


def next_order_status(status):
    """Allowed next status for an order, or None when the status is terminal"""
    return ORDER_STATUS_TRANSITIONS.get(status)


def check_order_transition(current, requested):
    if requested is None or next_order_status(current) != requested:
        raise InvalidTransitionError(current, requested)
    return requested


# ---------------------------------------------------------------------------
# Form text conversion
# ---------------------------------------------------------------------------

_FLOAT_PREFIX = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_INT_PREFIX = re.compile(r'^[+-]?\d+')


def parse_price(text):
    """Leading decimal of the text, or None. '12.5abc' -> 12.5"""
    match = _FLOAT_PREFIX.match((text or '').strip())
    if not match:
        return None
    return float(match.group(0))


def parse_stock(text):
    """Leading integer of the text, or None. '5.7' -> 5"""
    match = _INT_PREFIX.match((text or '').strip())
    if not match:
        return None
    return int(match.group(0))


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductForm:
    name: str = ''
    description: str = ''
    price: str = ''
    category: str = ''
    stock: str = ''

    def to_payload(self):
        return {
            'name': self.name,
            'description': self.description,
            'price': parse_price(self.price),
            'category': self.category,
            'stock': parse_stock(self.stock),
        }


@dataclass(frozen=True)
class DashboardState:
    active_tab: str = PRODUCTS
    products: Tuple[dict, ...] = ()
    orders: Tuple[dict, ...] = ()
    loading: bool = False
    show_product_form: bool = False
    form: ProductForm = field(default_factory=ProductForm)
    product_token: int = 0
    order_token: int = 0

    def find_order(self, order_id):
        for order in self.orders:
            if order.get('_id') == order_id:
                return order
        return None


def _token_field(kind):
    if kind == PRODUCTS:
        return 'product_token'
    if kind == ORDERS:
        return 'order_token'
    raise ValueError(f"Unknown list kind: {kind!r}")


def select_tab(state, tab):
    if tab not in TABS:
        tab = PRODUCTS
    return replace(state, active_tab=tab)


def begin_fetch(state, kind):
    """Returns (new_state, token) for a fetch of the given list"""
    token_field = _token_field(kind)
    token = getattr(state, token_field) + 1
    return replace(state, loading=True, **{token_field: token}), token


def fetch_succeeded(state, kind, token, items):
    if getattr(state, _token_field(kind)) != token:
        return state
    return replace(state, **{kind: tuple(items)})


def fetch_finished(state, kind, token):
    """Clear the loading flag unless a newer fetch of the same list is in flight"""
    if getattr(state, _token_field(kind)) != token:
        return state
    return replace(state, loading=False)


def toggle_product_form(state):
    return replace(state, show_product_form=not state.show_product_form)


def update_form(state, **fields):
    return replace(state, form=replace(state.form, **fields))


def reset_product_form(state):
    return replace(state, form=ProductForm(), show_product_form=False)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class StateStore:
    """In-memory map of session id -> DashboardState.

    Holds at most ``max_sessions`` entries; the least recently used session is
    evicted first and simply starts over from an empty DashboardState.
    """

    def __init__(self, max_sessions=500):
        self.max_sessions = max(1, int(max_sessions))
        self._states = OrderedDict()
        self._lock = threading.Lock()

    def _load(self, sid):
        state = self._states.get(sid)
        if state is None:
            return DashboardState()
        self._states.move_to_end(sid)
        return state

    def _store(self, sid, state):
        self._states[sid] = state
        self._states.move_to_end(sid)
        while len(self._states) > self.max_sessions:
            self._states.popitem(last=False)

    def get(self, sid) -> DashboardState:
        with self._lock:
            return self._load(sid)

    def apply(self, sid, transition, *args, **kwargs) -> DashboardState:
        with self._lock:
            state = transition(self._load(sid), *args, **kwargs)
            self._store(sid, state)
            return state

    def begin_fetch(self, sid, kind) -> int:
        with self._lock:
            state, token = begin_fetch(self._load(sid), kind)
            self._store(sid, state)
            return token

    def __contains__(self, sid):
        with self._lock:
            return sid in self._states

    def __len__(self):
        with self._lock:
            return len(self._states)
