# cartsync/services/cart_service.py
from decimal import Decimal
from typing import Iterator, List, Optional

from cartsync.data.store import LocalStore
from cartsync.domain.schemas import Cart, CartLine, Product
from cartsync.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Koszyk: jedna pozycja na product_id, scalanie ilosci przy kolejnych dodaniach.
    Wszystkie zmiany koszyka ida przez ten serwis.
    commands (add, set, remove, clear) modyfikuja stan
    query (get_cart, get_total, get_summary) tylko odczyt
    """

    def __init__(self, store: LocalStore, heartbeat: Optional[float] = None):
        self.store = store
        self.heartbeat = heartbeat

    #query - odczyt
    def get_cart(self) -> Iterator[List[CartLine]]:
        return self.store.watch_cart(heartbeat=self.heartbeat)

    def get_total(self) -> Iterator[Decimal]:
        return self.store.watch_cart_total(heartbeat=self.heartbeat)

    def get_summary(self) -> Cart:
        return Cart(lines=self.store.list_cart_lines())

    #commands
    def add_product(self, product: Product, quantity: int = 1) -> CartLine:
        if quantity <= 0:
            raise ValueError("Ilosc musi być wieksza niz 0")

        # INSERT ... ON CONFLICT DO UPDATE - bez wyscigu read-modify-write
        line = self.store.add_to_cart(product, quantity)

        if line.quantity == quantity:
            logger.info(f"Dodaje nowy produkt {product.id} do koszyka")
        else:
            logger.info(
                f"Produkt {product.id} już jest w koszyku, zwiekszam ilosc "
                f"z {line.quantity - quantity} do {line.quantity}"
            )
        return line

    def set_quantity(self, product_id: int, quantity: int):
        if quantity <= 0:
            logger.info(f"Ilosc {quantity} dla produktu {product_id} - usuwam pozycje")
            self.remove_product(product_id)
            return

        if self.store.set_cart_quantity(product_id, quantity):
            logger.info(f"Produkt {product_id}: nowa ilosc {quantity}")
        else:
            logger.info(f"Produktu {product_id} nie ma w koszyku, pomijam")

    def remove_product(self, product_id: int):
        if self.store.delete_cart_line(product_id):
            logger.info(f"Produkt {product_id} usunięty z koszyka")

    def clear(self):
        deleted = self.store.clear_cart()
        logger.info(f"Koszyk wyczyszczony ({deleted} pozycji)")
