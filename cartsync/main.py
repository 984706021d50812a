# cartsync/main.py
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from cartsync.api.routers import cart, health, products
from cartsync.data.changes import ChangeFeed
from cartsync.data.database import Database
from cartsync.data.seed import ensure_seeded
from cartsync.data.store import LocalStore
from cartsync.domain.errors import LocalStoreError
from cartsync.services.cart_service import CartService
from cartsync.services.catalog_client import CatalogClient
from cartsync.services.catalog_service import CatalogService
from cartsync.services.projection import CartProjection, CatalogProjection
from cartsync.utils.logging import get_logger
from cartsync.utils.settings import DATABASE_URL, STREAM_POLL_SECONDS

logger = get_logger(__name__)


def build_services(database: Database, client: CatalogClient, heartbeat: Optional[float] = None) -> dict:
    """Composition root: store tworzony raz i przekazywany do silnikow."""
    store = LocalStore(database, ChangeFeed())
    catalog_service = CatalogService(store, client)
    return {
        "store": store,
        "catalog_service": catalog_service,
        "cart_service": CartService(store, heartbeat=heartbeat),
        "catalog_projection": CatalogProjection(catalog_service, store, heartbeat=heartbeat),
        "cart_projection": CartProjection(store, heartbeat=heartbeat),
    }


def create_app(database: Optional[Database] = None, client: Optional[CatalogClient] = None) -> FastAPI:
    database = database or Database(DATABASE_URL)
    client = client or CatalogClient()
    services = build_services(database, client, heartbeat=STREAM_POLL_SECONDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Initializing database...")
        await run_in_threadpool(database.create_all)
        # seed przed pierwszym requestem, nie w tle
        await run_in_threadpool(ensure_seeded, services["store"])
        app.state.ready = True
        logger.info("Cart sync service ready")
        yield
        app.state.ready = False
        client.close()
        database.dispose()

    app = FastAPI(
        title="Cart Sync Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.ready = False
    for name, service in services.items():
        setattr(app.state, name, service)

    @app.exception_handler(LocalStoreError)
    async def local_store_error_handler(request: Request, exc: LocalStoreError):
        logger.error(f"Local store error on {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Local store unavailable"})

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(cart.router)

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
