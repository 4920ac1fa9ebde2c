# catalog_sdk/client.py
from typing import Any, Dict, Optional

import httpx
import requests

API_KEY_HEADER = "x-api-key"


class CatalogAPIError(Exception):
    """Non-2xx response from the catalog API; message is the server's error text."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _unwrap(r) -> Any:
    """Decode a requests/httpx response, raising CatalogAPIError on 4xx/5xx."""
    if r.status_code >= 400:
        try:
            body = r.json()
        except ValueError:
            body = None
        message = body.get("error", r.text) if isinstance(body, dict) else r.text
        raise CatalogAPIError(r.status_code, message)
    if r.status_code == 204 or not r.content:
        return None
    ctype = r.headers.get("content-type", "")
    if ctype.startswith("application/json"):
        return r.json()
    return r.text


class CatalogClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_key: Optional[str] = None,
        timeout: int = 10,
        session=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key
        # any requests.Session-compatible client (the FastAPI TestClient works too)
        self.session = session if session is not None else requests.Session()
        self.transport = transport
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/api/products{path}"

    def welcome(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        return _unwrap(r)

    # Read
    def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = str(page)
        if limit is not None:
            params["limit"] = str(limit)
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        return _unwrap(r)

    def search_products(self, term: str):
        return self.list_products(search=term)["products"]

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        return _unwrap(r)

    def stats(self) -> Dict[str, int]:
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        return _unwrap(r)

    # Write
    def create_product(
        self,
        name: str,
        price: float,
        category: str,
        description: Optional[str] = None,
        in_stock: Optional[bool] = None,
    ) -> Dict[str, Any]:
        payload = _payload(name, price, category, description, in_stock)
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        return _unwrap(r)

    def update_product(
        self,
        product_id: str,
        name: str,
        price: float,
        category: str,
        description: Optional[str] = None,
        in_stock: Optional[bool] = None,
    ) -> Dict[str, Any]:
        payload = _payload(name, price, category, description, in_stock)
        r = self.session.put(self._url(f"/{product_id}"), json=payload, timeout=self.timeout)
        return _unwrap(r)

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        return _unwrap(r)

    # Async create (for concurrent loads)
    async def create_product_async(
        self,
        name: str,
        price: float,
        category: str,
        description: Optional[str] = None,
        in_stock: Optional[bool] = None,
    ) -> Dict[str, Any]:
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        payload = _payload(name, price, category, description, in_stock)
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            r = await client.post(self._url(), json=payload, headers=headers)
            return _unwrap(r)


def _payload(name, price, category, description, in_stock) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"name": name, "price": price, "category": category}
    if description is not None:
        payload["description"] = description
    if in_stock is not None:
        payload["inStock"] = in_stock
    return payload
