# cartsync/tasks/refresh.py
from cartsync.celery_worker import celery_app
from cartsync.data.database import Database
from cartsync.data.store import LocalStore
from cartsync.services.catalog_client import CatalogClient
from cartsync.services.catalog_service import CatalogService
from cartsync.utils.settings import DATABASE_URL
from cartsync.utils.logging import get_logger

logger = get_logger(__name__)


def refresh_catalog(catalog: CatalogService) -> int:
    """Jedno przejscie uzgadniania - przy dzialajacym API cache jest swiezy."""
    products = next(catalog.list_products())
    logger.info(f"Catalog refresh done, {len(products)} products available")
    return len(products)


@celery_app.task(name="cartsync.tasks.refresh.refresh_catalog_task")
def refresh_catalog_task():
    logger.info("Refresh catalog task started")

    database = Database(DATABASE_URL)
    client = CatalogClient()
    try:
        database.create_all()
        return refresh_catalog(CatalogService(LocalStore(database), client))
    finally:
        client.close()
        database.dispose()
