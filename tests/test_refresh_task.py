from cartsync.tasks.refresh import refresh_catalog
from tests.conftest import make_product


def test_refresh_warms_local_cache(catalog, client, store):
    client.list_products.side_effect = None
    client.list_products.return_value = [make_product(1, name="A"), make_product(2, name="B")]

    assert refresh_catalog(catalog) == 2
    assert [p.id for p in store.list_products()] == [1, 2]


def test_refresh_offline_keeps_cache(catalog, store):
    store.upsert_product(make_product(1))
    assert refresh_catalog(catalog) == 1
