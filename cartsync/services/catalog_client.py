# cartsync/services/catalog_client.py
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError
from requests import RequestException

from cartsync.domain.errors import (
    RemoteEmptyBody,
    RemoteIOError,
    RemoteStatusError,
    RemoteUnreachable,
)
from cartsync.domain.schemas import Product, ProductRecord
from cartsync.utils.settings import CATALOG_API_URL, CATALOG_TIMEOUT_SECONDS
from cartsync.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogClient:
    """
    Klient zdalnego katalogu /api/productos.
    Jedna proba na wywolanie (bez retry) - fallback robi CatalogService.
    Kazdy blad tlumaczony na RemoteCatalogError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or CATALOG_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else CATALOG_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def list_products(self) -> List[Product]:
        body = self._request("GET", "/api/productos")
        return self._parse_list(body)

    def get_product(self, product_id: int) -> Product:
        body = self._request("GET", f"/api/productos/{product_id}")
        return self._parse_one(body)

    def list_by_category(self, category: str) -> List[Product]:
        body = self._request("GET", f"/api/productos/category/{quote(category, safe='')}")
        return self._parse_list(body)

    def create_product(self, product: Product) -> Optional[Product]:
        """Zwraca produkt odeslany przez API albo None gdy body jest puste."""
        payload = ProductRecord.from_product(product).to_payload(include_id=False)
        body = self._request("POST", "/api/productos", json=payload, allow_empty=True)
        if body is None:
            return None
        return self._parse_one(body)

    def update_product(self, product: Product) -> Optional[Product]:
        payload = ProductRecord.from_product(product).to_payload()
        body = self._request("PUT", f"/api/productos/{product.id}", json=payload, allow_empty=True)
        if body is None:
            return None
        return self._parse_one(body)

    def delete_product(self, product_id: int) -> None:
        self._request("DELETE", f"/api/productos/{product_id}", allow_empty=True)

    def close(self):
        self.session.close()

    # =====================================================
    # HTTP
    # =====================================================
    def _request(self, method: str, path: str, json: Any = None, allow_empty: bool = False) -> Any:
        url = f"{self.base_url}{path}"
        logger.info(f"CatalogClient {method} {url}")

        try:
            resp = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.ConnectionError as e:
            raise RemoteUnreachable(f"{method} {url}: {e}") from e
        except RequestException as e:
            # timeout i pozostale bledy transportu
            raise RemoteIOError(f"{method} {url}: {e}") from e

        if not resp.ok:
            raise RemoteStatusError(resp.status_code, url)

        if not resp.content or not resp.content.strip():
            if allow_empty:
                return None
            raise RemoteEmptyBody(f"{method} {url}: empty body")

        try:
            body = resp.json()
        except ValueError as e:
            raise RemoteEmptyBody(f"{method} {url}: invalid JSON") from e

        if body is None and not allow_empty:
            raise RemoteEmptyBody(f"{method} {url}: null body")
        return body

    @staticmethod
    def _parse_one(body: Any) -> Product:
        if not isinstance(body, dict):
            raise RemoteEmptyBody(f"Expected product object, got {type(body).__name__}")
        try:
            return ProductRecord.model_validate(body).to_product()
        except ValidationError as e:
            raise RemoteEmptyBody(f"Unexpected product record: {e}") from e

    @classmethod
    def _parse_list(cls, body: Any) -> List[Product]:
        if not isinstance(body, list):
            raise RemoteEmptyBody(f"Expected product list, got {type(body).__name__}")
        return [cls._parse_one(item) for item in body]
