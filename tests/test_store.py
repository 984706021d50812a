import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from cartsync.data import changes
from cartsync.data.database import Database
from cartsync.data.store import LocalStore
from cartsync.domain.errors import LocalStoreError
from cartsync.repos.cart_repo import CartRepo
from tests.conftest import make_product


def test_upsert_replaces_row_with_same_id(store):
    store.upsert_product(make_product(1, name="A", price="10", stock=1))
    store.upsert_product(make_product(1, name="B", price="20", stock=0))

    products = store.list_products()
    assert len(products) == 1
    assert products[0].name == "B"
    assert products[0].price == Decimal("20")
    assert products[0].has_stock is False


def test_upsert_with_id_zero_generates_id(store):
    first = store.upsert_product(make_product(0, name="Uno"))
    second = store.upsert_product(make_product(0, name="Dos"))

    assert first > 0
    assert second not in (0, first)
    assert store.get_product(second).name == "Dos"


def test_list_is_ordered_by_name(store):
    store.upsert_products([
        make_product(1, name="Zeta"),
        make_product(2, name="Alfa"),
        make_product(3, name="Mu"),
    ])
    assert [p.name for p in store.list_products()] == ["Alfa", "Mu", "Zeta"]


def test_writes_publish_changes(store):
    subscription = store.feed.subscribe(changes.PRODUCTS)

    store.upsert_product(make_product(1))
    assert subscription.wait(timeout=0) is True
    assert subscription.wait(timeout=0) is False

    store.delete_product(1)
    assert subscription.wait(timeout=0) is True
    subscription.close()


def test_notifications_are_coalesced(store):
    with store.feed.subscribe(changes.CART) as subscription:
        store.add_to_cart(make_product(1), 1)
        store.add_to_cart(make_product(2), 1)
        assert subscription.wait(timeout=0) is True
        assert subscription.wait(timeout=0) is False


def test_product_stream_follows_table(store):
    stream = store.watch_products()
    assert next(stream) == []

    store.upsert_product(make_product(1, name="Nuevo"))
    assert [p.name for p in next(stream)] == ["Nuevo"]
    stream.close()


def test_heartbeat_reemits_snapshot(store):
    stream = store.watch_cart_total(heartbeat=0.01)
    assert next(stream) == Decimal("0.00")
    assert next(stream) == Decimal("0.00")
    stream.close()


def test_store_failures_surface_as_local_store_error():
    database = Database("sqlite://")  # bez create_all
    store = LocalStore(database)

    with pytest.raises(LocalStoreError):
        store.list_products()
    database.dispose()


def test_failed_read_back_does_not_repeat_cart_increment(store, monkeypatch):
    original = CartRepo.get_line
    calls = {"n": 0}

    def flaky_get_line(self, product_id):
        calls["n"] += 1
        if calls["n"] == 1:
            raise OperationalError("SELECT cart_lines", {}, Exception("database is locked"))
        return original(self, product_id)

    monkeypatch.setattr(CartRepo, "get_line", flaky_get_line)

    line = store.add_to_cart(make_product(1), 1)

    assert line.quantity == 1
    assert store.get_cart_line(1).quantity == 1


def test_concurrent_upserts_of_same_id_keep_one_row(file_store):
    def refresh(i):
        return file_store.upsert_product(make_product(7, name=f"Odswiezony {i}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(refresh, range(8)))

    assert ids == [7] * 8
    products = file_store.list_products()
    assert len(products) == 1
    assert products[0].name.startswith("Odswiezony")


def test_upsert_from_second_store_replaces_row(file_store):
    other = LocalStore(file_store.database)
    file_store.upsert_product(make_product(7, name="A", stock=3))
    other.upsert_product(make_product(7, name="B", stock=0))

    product = file_store.get_product(7)
    assert product.name == "B"
    assert product.stock == 0


def test_burst_of_changes_leaves_single_pending_notification(store):
    subscription = store.feed.subscribe(changes.PRODUCTS)
    for _ in range(100):
        store.feed.publish(changes.PRODUCTS)

    assert subscription._queue.qsize() == 1
    assert subscription.wait(timeout=0) is True
    assert subscription.wait(timeout=0) is False
    subscription.close()


def test_close_wakes_blocked_waiter(store):
    subscription = store.feed.subscribe(changes.CART)
    result = {}
    waiter = threading.Thread(target=lambda: result.setdefault("woke", subscription.wait()))
    waiter.start()

    subscription.close()
    waiter.join(timeout=5)

    assert not waiter.is_alive()
    assert result["woke"] is True
    assert store.feed.subscriber_count(changes.CART) == 0
