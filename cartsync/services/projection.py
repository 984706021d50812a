# cartsync/services/projection.py
from typing import AsyncIterator, Iterator, List, Optional

import anyio

from cartsync.data import changes
from cartsync.data.store import LocalStore
from cartsync.domain.errors import LocalStoreError
from cartsync.domain.schemas import Cart, CatalogState, Product
from cartsync.services.catalog_service import CatalogService
from cartsync.utils.logging import get_logger

logger = get_logger(__name__)


def filter_products(
    products: List[Product],
    query: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Product]:
    """Szukanie po nazwie/opisie (bez wielkosci liter) + dokladna kategoria."""
    needle = (query or "").strip().casefold()
    result = []
    for p in products:
        if needle and needle not in p.name.casefold() and needle not in p.description.casefold():
            continue
        if category is not None and p.category != category:
            continue
        result.append(p)
    return result


class CatalogProjection:
    """
    Stan ekranu katalogu. Tylko czyta i emituje - nic nie zapisuje sam z siebie
    (odswiezenie cache robi CatalogService).
    """

    def __init__(self, catalog: CatalogService, store: LocalStore, heartbeat: Optional[float] = None):
        self.catalog = catalog
        self.store = store
        self.heartbeat = heartbeat

    def watch(self, query: Optional[str] = None, category: Optional[str] = None) -> Iterator[CatalogState]:
        # subskrypcja przed uzgadnianiem, zeby nie zgubic zmian w miedzyczasie
        subscription = self.store.feed.subscribe(changes.PRODUCTS)
        try:
            yield CatalogState(is_loading=True)

            state = self._initial_state(query, category)
            yield state
            if state.error is not None:
                return

            while True:
                subscription.wait(timeout=self.heartbeat)
                yield self._local_state(query, category)
        finally:
            subscription.close()

    async def awatch(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> AsyncIterator[CatalogState]:
        subscription = self.store.feed.subscribe(changes.PRODUCTS)
        try:
            yield CatalogState(is_loading=True)

            # zapytanie do API blokuje - w watku
            state = await anyio.to_thread.run_sync(self._initial_state, query, category)
            yield state
            if state.error is not None:
                return

            while True:
                await subscription.wait_async(timeout=self.heartbeat)
                yield await anyio.to_thread.run_sync(self._local_state, query, category)
        finally:
            subscription.close()

    def _initial_state(self, query: Optional[str], category: Optional[str]) -> CatalogState:
        try:
            products = next(self.catalog.list_products())
        except LocalStoreError as e:
            # API padlo i lokalny fallback tez - stan koncowy z bledem
            logger.error(f"Catalog load failed: {e}")
            return CatalogState(error=str(e))
        return CatalogState(products=filter_products(products, query, category))

    def _local_state(self, query: Optional[str], category: Optional[str]) -> CatalogState:
        return CatalogState(products=filter_products(self.store.list_products(), query, category))


class CartProjection:
    def __init__(self, store: LocalStore, heartbeat: Optional[float] = None):
        self.store = store
        self.heartbeat = heartbeat

    def watch(self) -> Iterator[Cart]:
        live = self.store.watch_cart(heartbeat=self.heartbeat)
        try:
            for lines in live:
                yield Cart(lines=lines)
        finally:
            live.close()

    async def awatch(self) -> AsyncIterator[Cart]:
        live = self.store.awatch_cart(heartbeat=self.heartbeat)
        try:
            async for lines in live:
                yield Cart(lines=lines)
        finally:
            await live.aclose()
