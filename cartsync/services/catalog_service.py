# cartsync/services/catalog_service.py
from typing import Iterable, Iterator, List, Optional

from cartsync.data.store import LocalStore
from cartsync.domain.errors import RemoteCatalogError, RemoteStatusError, RemoteUnreachable
from cartsync.domain.schemas import Product
from cartsync.services.catalog_client import CatalogClient
from cartsync.utils.logging import get_logger

logger = get_logger(__name__)


def _describe(exc: Exception) -> str:
    if isinstance(exc, RemoteUnreachable):
        return "no connection"
    if isinstance(exc, RemoteStatusError):
        return f"HTTP {exc.status_code}"
    if isinstance(exc, RemoteCatalogError):
        return str(exc)
    return f"unexpected error: {exc!r}"


class CatalogService:
    """
    Uzgadnianie katalogu zdalnego z lokalnym cache.

    odczyt: najpierw API, przy jakimkolwiek bledzie dane lokalne
    zapis: lokalnie zawsze, API best-effort

    Bledy zdalne nigdy nie wychodza na zewnatrz. Bledy lokalnego store
    (LocalStoreError) ida do wywolujacego.
    """

    def __init__(self, store: LocalStore, client: CatalogClient):
        self.store = store
        self.client = client

    # =====================================================
    # QUERY
    # =====================================================
    def list_products(self) -> Iterator[List[Product]]:
        """Leniwy strumien z jedna wartoscia: lista z API (i odswiezony cache) albo lista lokalna."""
        logger.info("Fetching products from remote catalog")
        try:
            products = self.client.list_products()
        except Exception as e:
            logger.warning(f"Remote catalog unavailable ({_describe(e)}), using local data")
            yield self._local_products()
            return

        self.store.upsert_products(products)
        logger.info(f"Products fetched from API and cached locally: {len(products)} items")
        yield products

    def list_by_category(self, category: str) -> Iterator[List[Product]]:
        logger.info(f"Fetching category '{category}' from remote catalog")
        try:
            products = self.client.list_by_category(category)
        except Exception as e:
            logger.warning(f"Remote category call failed ({_describe(e)}), filtering locally")
            yield self._filter_locally(category)
            return

        logger.info(f"{len(products)} products fetched for category '{category}'")
        yield products

    def get_by_id(self, product_id: int) -> Optional[Product]:
        try:
            product = self.client.get_product(product_id)
        except Exception as e:
            logger.warning(f"Remote lookup of product {product_id} failed ({_describe(e)}), using local")
            return self.store.get_product(product_id)

        # API bez id w body - zostaje id o ktore pytalismy
        if product.id == 0:
            product = product.model_copy(update={"id": product_id})

        self.store.upsert_product(product)
        logger.info(f"Product {product_id} refreshed from API")
        return product

    # =====================================================
    # COMMANDS
    # =====================================================
    def create(self, product: Product) -> int:
        try:
            created = self.client.create_product(product)
            to_store = created or product
            logger.info(f"Product '{product.name}' created in API")
        except Exception as e:
            logger.warning(f"Remote create failed ({_describe(e)}), saving locally only")
            to_store = product

        local_id = self.store.upsert_product(to_store)
        logger.info(f"Product saved locally with id {local_id}")
        return local_id

    def update(self, product: Product):
        try:
            self.client.update_product(product)
            logger.info(f"Product {product.id} updated in API")
        except Exception as e:
            logger.warning(f"Remote update of {product.id} failed ({_describe(e)}), updating locally only")

        # lokalnie zawsze, zeby cache zgadzal sie z intencja uzytkownika
        if not self.store.update_product(product):
            logger.info(f"Product {product.id} not in local store, nothing to update")

    def delete(self, product: Product):
        try:
            self.client.delete_product(product.id)
            logger.info(f"Product {product.id} deleted in API")
        except Exception as e:
            logger.warning(f"Remote delete of {product.id} failed ({_describe(e)}), deleting locally only")

        self.store.delete_product(product.id)

    def delete_all(self) -> int:
        deleted = self.store.delete_all_products()
        logger.info(f"Local catalog cleared ({deleted} products)")
        return deleted

    def insert_products(self, products: Iterable[Product]) -> List[int]:
        return self.store.upsert_products(products)

    # =====================================================
    # FALLBACK
    # =====================================================
    def _local_products(self) -> List[Product]:
        products = self.store.list_products()
        if not products:
            logger.warning("Local database is empty")
        else:
            logger.info(f"Products from local cache: {len(products)} items")
        return products

    def _filter_locally(self, category: str) -> List[Product]:
        wanted = category.casefold()
        products = [p for p in self.store.list_products() if p.category.casefold() == wanted]
        logger.info(f"Local filter: {len(products)} items for '{category}'")
        return products
