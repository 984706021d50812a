# cartsync/data/seed.py
from decimal import Decimal

from cartsync.data.store import LocalStore
from cartsync.domain.schemas import Product
from cartsync.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    Product(
        id=1,
        name="Mouse Logitech G502 Negro",
        description="Mouse gamer ergonómico con sensor HERO de hasta 25.600 DPI, 11 botones programables e iluminación RGB.",
        price=Decimal("25000"),
        image_ref="g502",
        category="Periféricos",
        stock=12,
    ),
    Product(
        id=2,
        name="Mouse Logitech G502 X Blanco",
        description="Rediseño liviano de la gama G502, 89 gramos, switches LIGHTFORCE híbridos y sensor HERO 25K.",
        price=Decimal("45000"),
        image_ref="g502x",
        category="Periféricos",
        stock=10,
    ),
    Product(
        id=3,
        name="Audífonos Gamer Chinos",
        description="Audífonos over-ear con sonido envolvente 7.1 y micrófono con cancelación de ruido.",
        price=Decimal("30000"),
        image_ref="audi1",
        category="Audio",
        stock=12,
    ),
    Product(
        id=4,
        name="PC Gamer AlienWare",
        description="PC de escritorio con NVIDIA GeForce RTX y procesadores Intel Core de alto rendimiento.",
        price=Decimal("45000"),
        image_ref="pc",
        category="Computacion",
        stock=9,
    ),
    Product(
        id=5,
        name="Play Station 5 Pro",
        description="Gráficos 4K/8K, trazado de rayos y hasta 120 fps.",
        price=Decimal("380000"),
        image_ref="ps5",
        category="Consolas",
        stock=6,
    ),
    Product(
        id=6,
        name="Silla Gamer Secret Lab",
        description="Silla ergonómica multipremiada, preferida por jugadores de esports.",
        price=Decimal("189000"),
        image_ref="sillagamer",
        category="Almacenamiento",
        stock=20,
    ),
]


def ensure_seeded(store: LocalStore) -> bool:
    """Wstawia produkty demo tylko gdy ich nie ma. True gdy cos wstawiono."""
    # not forcing: only seed if product 1 is missing
    if store.get_product(1) is not None:
        logger.info("Catalog already seeded")
        return False

    store.upsert_products(DEMO_PRODUCTS)
    logger.info(f"Seeded local catalog with {len(DEMO_PRODUCTS)} products")
    return True
