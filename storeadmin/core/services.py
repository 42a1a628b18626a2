# storeadmin/core/services.py
import requests
from typing import Optional, Dict, Any, List

from .logging_service import LoggingService


class ServiceError(Exception):
    """A call to the product or order service failed.

    Transport failures, non-2xx responses and malformed bodies all end up here.
    """

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None,
                 cause: Optional[Exception] = None):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.status_code = status_code
        self.cause = cause


class ServiceClient:
    """Thin JSON-over-HTTP client for one remote service"""

    source = 'services'

    def __init__(self, base_url: str, timeout: float = 10, session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, operation: str, method: str, path: str,
                 payload: Dict[str, Any] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}

        try:
            response = self.session.request(method, url, json=payload, headers=headers,
                                            timeout=self.timeout)
        except requests.RequestException as e:
            raise ServiceError(operation, f"{method} {url} failed: {e}", cause=e) from e

        LoggingService.log_api_call(self.source, url, method, response.status_code)

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise ServiceError(operation, f"{method} {url} returned {response.status_code}",
                               status_code=response.status_code, cause=e) from e

        return response

    @staticmethod
    def _json(operation: str, response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            raise ServiceError(operation, "response body is not valid JSON",
                               status_code=response.status_code, cause=e) from e

    def _get_list(self, operation: str, path: str) -> List[Dict[str, Any]]:
        response = self._request(operation, 'GET', path)
        data = self._json(operation, response)
        if not isinstance(data, list):
            raise ServiceError(operation, f"expected a JSON array, got {type(data).__name__}",
                               status_code=response.status_code)
        return data

    @staticmethod
    def _optional_json(response: requests.Response) -> Optional[Dict[str, Any]]:
        """Body of a mutating call; the dashboard never depends on it"""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None


class ProductServiceClient(ServiceClient):
    """Client for the product service (/api/products)"""

    source = 'products'

    def list_products(self) -> List[Dict[str, Any]]:
        return self._get_list('list_products', '/api/products')

    def create_product(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Create a product

        Args:
            payload: {name, description, price, category, stock}; price and stock
                     may be None when the form text did not parse.
        """
        body = {
            'name': payload.get('name'),
            'description': payload.get('description'),
            'price': payload.get('price'),
            'category': payload.get('category'),
            'stock': payload.get('stock'),
        }
        response = self._request('create_product', 'POST', '/api/products', body)
        return self._optional_json(response)

    def delete_product(self, product_id: str) -> None:
        self._request('delete_product', 'DELETE', f"/api/products/{product_id}")


class OrderServiceClient(ServiceClient):
    """Client for the order service (/api/orders)"""

    source = 'orders'

    def list_orders(self) -> List[Dict[str, Any]]:
        return self._get_list('list_orders', '/api/orders')

    def update_order_status(self, order_id: str, status: str) -> Optional[Dict[str, Any]]:
        response = self._request('update_order_status', 'PATCH', f"/api/orders/{order_id}",
                                 {'status': status})
        return self._optional_json(response)
