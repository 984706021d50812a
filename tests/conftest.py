"""Pytest fixtures: in-memory SQLite store and a fake remote catalog."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from cartsync.data.changes import ChangeFeed
from cartsync.data.database import Database
from cartsync.data.store import LocalStore
from cartsync.domain.errors import RemoteUnreachable
from cartsync.domain.schemas import Product
from cartsync.services.cart_service import CartService
from cartsync.services.catalog_client import CatalogClient
from cartsync.services.catalog_service import CatalogService


def make_product(product_id=0, name="Producto", category="General", price="100", stock=5, **extra):
    return Product(
        id=product_id,
        name=name,
        description=extra.get("description", f"Descripcion de {name}"),
        price=Decimal(price),
        image_ref=extra.get("image_ref", ""),
        category=category,
        stock=stock,
    )


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def store(database):
    return LocalStore(database, ChangeFeed())


@pytest.fixture
def file_store(tmp_path):
    """File-backed SQLite store, safe to hit from several threads."""
    db = Database(f"sqlite:///{tmp_path / 'cartsync.db'}")
    db.create_all()
    yield LocalStore(db, ChangeFeed())
    db.dispose()


@pytest.fixture
def client():
    """Remote catalog that is unreachable unless a test says otherwise."""
    fake = MagicMock(spec=CatalogClient)
    offline = RemoteUnreachable("no connection")
    fake.list_products.side_effect = offline
    fake.get_product.side_effect = offline
    fake.list_by_category.side_effect = offline
    fake.create_product.side_effect = offline
    fake.update_product.side_effect = offline
    fake.delete_product.side_effect = offline
    return fake


@pytest.fixture
def catalog(store, client):
    return CatalogService(store, client)


@pytest.fixture
def cart(store):
    return CartService(store)
