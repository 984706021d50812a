from cartsync.data.seed import DEMO_PRODUCTS, ensure_seeded
from cartsync.domain.images import PLACEHOLDER_IMAGE, resolve_image
from tests.conftest import make_product


def test_ensure_seeded_is_idempotent(store):
    assert ensure_seeded(store) is True
    assert ensure_seeded(store) is False
    assert len(store.list_products()) == len(DEMO_PRODUCTS)


def test_seed_does_not_overwrite_existing_catalog(store):
    store.upsert_product(make_product(1, name="Editado"))

    assert ensure_seeded(store) is False
    assert store.get_product(1).name == "Editado"


def test_seeded_products_resolve_bundled_images(store):
    ensure_seeded(store)
    for product in store.list_products():
        assert product.image_url != PLACEHOLDER_IMAGE


def test_resolve_image():
    assert resolve_image("ps5") == "/static/img/ps5.png"
    assert resolve_image("https://cdn.test/a.png") == "https://cdn.test/a.png"
    assert resolve_image("desconocido") == PLACEHOLDER_IMAGE
    assert resolve_image("") == PLACEHOLDER_IMAGE
    assert resolve_image(None) == PLACEHOLDER_IMAGE


def test_formatted_price_uses_dot_thousands():
    assert make_product(1, price="380000").formatted_price() == "$380.000"
    assert make_product(1, price="999").formatted_price() == "$999"
