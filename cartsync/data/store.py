# cartsync/data/store.py
import functools
from decimal import Decimal
from typing import AsyncIterator, Callable, Iterable, Iterator, List, Optional, TypeVar

import anyio
from sqlalchemy.exc import SQLAlchemyError

from cartsync.data import changes
from cartsync.data.changes import ChangeFeed
from cartsync.data.database import Database
from cartsync.domain.errors import LocalStoreError
from cartsync.domain.schemas import CartLine, Product
from cartsync.repos.cart_repo import CartRepo
from cartsync.repos.product_repo import ProductRepo
from cartsync.utils.logging import get_logger
from cartsync.utils.retry import db_retry

logger = get_logger(__name__)

T = TypeVar("T")


def store_operation(func):
    """
    Bledy przejsciowe -> retry (tenacity), po wyczerpaniu prob albo dla
    innych bledow SQLAlchemy -> LocalStoreError do wywolujacego.
    """
    retried = db_retry()(func)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return retried(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Local store failure in {func.__name__}: {e}")
            raise LocalStoreError(f"{func.__name__} failed: {e}") from e

    return wrapper


def _product_values(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "image_ref": product.image_ref,
        "category": product.category,
        "stock": product.stock,
    }


class LocalStore:
    """
    Trwaly store produktow i pozycji koszyka.
    Kazda operacja ma wlasna krotka sesje, po commit publikuje zmiane na ChangeFeed.
    """

    def __init__(self, database: Database, feed: Optional[ChangeFeed] = None):
        self.database = database
        self.feed = feed or ChangeFeed()

    # =====================================================
    # PRODUKTY
    # =====================================================
    @store_operation
    def get_product(self, product_id: int) -> Optional[Product]:
        with self.database.session() as db:
            row = ProductRepo(db).get_product(product_id)
            return Product.model_validate(row) if row else None

    @store_operation
    def list_products(self) -> List[Product]:
        with self.database.session() as db:
            return [Product.model_validate(r) for r in ProductRepo(db).list_products()]

    @store_operation
    def upsert_product(self, product: Product) -> int:
        with self.database.session() as db:
            repo = ProductRepo(db)
            product_id = repo.upsert_product(_product_values(product))
            repo.commit()

        self.feed.publish(changes.PRODUCTS)
        return product_id

    @store_operation
    def upsert_products(self, products: Iterable[Product]) -> List[int]:
        with self.database.session() as db:
            repo = ProductRepo(db)
            ids = [repo.upsert_product(_product_values(p)) for p in products]
            repo.commit()

        self.feed.publish(changes.PRODUCTS)
        return ids

    @store_operation
    def update_product(self, product: Product) -> bool:
        with self.database.session() as db:
            repo = ProductRepo(db)
            row = repo.update_product(_product_values(product))
            if row is None:
                return False
            repo.commit()

        self.feed.publish(changes.PRODUCTS)
        return True

    @store_operation
    def delete_product(self, product_id: int) -> bool:
        with self.database.session() as db:
            repo = ProductRepo(db)
            deleted = repo.delete_product(product_id)
            repo.commit()

        if deleted:
            self.feed.publish(changes.PRODUCTS)
        return bool(deleted)

    @store_operation
    def delete_all_products(self) -> int:
        with self.database.session() as db:
            repo = ProductRepo(db)
            deleted = repo.delete_all()
            repo.commit()

        self.feed.publish(changes.PRODUCTS)
        return deleted

    def watch_products(self, heartbeat: Optional[float] = None) -> Iterator[List[Product]]:
        return self._watch(changes.PRODUCTS, self.list_products, heartbeat)

    def awatch_products(self, heartbeat: Optional[float] = None) -> AsyncIterator[List[Product]]:
        return self._awatch(changes.PRODUCTS, self.list_products, heartbeat)

    # =====================================================
    # KOSZYK
    # =====================================================
    @store_operation
    def list_cart_lines(self) -> List[CartLine]:
        with self.database.session() as db:
            return [CartLine.model_validate(r) for r in CartRepo(db).get_lines()]

    @store_operation
    def get_cart_line(self, product_id: int) -> Optional[CartLine]:
        with self.database.session() as db:
            row = CartRepo(db).get_line(product_id)
            return CartLine.model_validate(row) if row else None

    def add_to_cart(self, product: Product, quantity: int) -> CartLine:
        self._increment_cart_line(product, quantity)
        # odczyt poza retry upsertu - ponowienie odczytu nie dolicza ilosci drugi raz
        return self.get_cart_line(product.id)

    @store_operation
    def _increment_cart_line(self, product: Product, quantity: int):
        snapshot = _product_values(product)
        snapshot["product_id"] = snapshot.pop("id")

        with self.database.session() as db:
            repo = CartRepo(db)
            repo.add_quantity(snapshot, quantity)
            repo.commit()

        self.feed.publish(changes.CART)

    @store_operation
    def set_cart_quantity(self, product_id: int, quantity: int) -> bool:
        with self.database.session() as db:
            repo = CartRepo(db)
            updated = repo.update_quantity(product_id, quantity)
            repo.commit()

        if updated:
            self.feed.publish(changes.CART)
        return bool(updated)

    @store_operation
    def delete_cart_line(self, product_id: int) -> bool:
        with self.database.session() as db:
            repo = CartRepo(db)
            deleted = repo.delete_line(product_id)
            repo.commit()

        if deleted:
            self.feed.publish(changes.CART)
        return bool(deleted)

    @store_operation
    def clear_cart(self) -> int:
        with self.database.session() as db:
            repo = CartRepo(db)
            deleted = repo.delete_all()
            repo.commit()

        self.feed.publish(changes.CART)
        return deleted

    @store_operation
    def cart_total(self) -> Decimal:
        with self.database.session() as db:
            return CartRepo(db).total()

    def watch_cart(self, heartbeat: Optional[float] = None) -> Iterator[List[CartLine]]:
        return self._watch(changes.CART, self.list_cart_lines, heartbeat)

    def awatch_cart(self, heartbeat: Optional[float] = None) -> AsyncIterator[List[CartLine]]:
        return self._awatch(changes.CART, self.list_cart_lines, heartbeat)

    def watch_cart_total(self, heartbeat: Optional[float] = None) -> Iterator[Decimal]:
        return self._watch(changes.CART, self.cart_total, heartbeat)

    # =====================================================
    # LIVE STREAMS
    # =====================================================
    def _watch(
        self,
        topic: str,
        load: Callable[[], T],
        heartbeat: Optional[float],
    ) -> Iterator[T]:
        """
        Nieskonczony strumien: od razu aktualny snapshot, potem kolejny po kazdej zmianie.
        Przy heartbeat snapshot jest ponawiany takze po timeout.
        Zamkniecie generatora (close / koniec petli) zdejmuje subskrypcje.
        """
        # subskrypcja przed pierwszym odczytem, zeby nie zgubic zmiany
        subscription = self.feed.subscribe(topic)
        try:
            while True:
                yield load()
                subscription.wait(timeout=heartbeat)
        finally:
            subscription.close()
            logger.debug(f"Observer of '{topic}' detached")

    async def _awatch(
        self,
        topic: str,
        load: Callable[[], T],
        heartbeat: Optional[float],
    ) -> AsyncIterator[T]:
        """
        Wersja async dla endpointow strumieniowych. Odczyt idzie przez domyslna
        pule watkow (krotko), czekanie na zmiane przez limiter feedu.
        """
        subscription = self.feed.subscribe(topic)
        try:
            while True:
                yield await anyio.to_thread.run_sync(load)
                await subscription.wait_async(timeout=heartbeat)
        finally:
            subscription.close()
            logger.debug(f"Async observer of '{topic}' detached")
