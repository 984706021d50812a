import json
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from cartsync.domain.errors import (
    RemoteEmptyBody,
    RemoteIOError,
    RemoteStatusError,
    RemoteUnreachable,
)
from cartsync.services.catalog_client import CatalogClient
from tests.conftest import make_product


def _response(body=None, status=200, raw=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    if raw is not None:
        resp.content = raw
    else:
        resp.content = b"" if body is None else json.dumps(body).encode()
    resp.json.return_value = body
    return resp


def _client(*responses, error=None):
    session = MagicMock()
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.side_effect = list(responses)
    return CatalogClient(base_url="http://catalog.test/", timeout=2, session=session), session


def test_list_products_maps_spanish_fields_and_defaults():
    client, session = _client(_response([
        {
            "id": 7,
            "nombre": "Teclado",
            "descripcion": "Mecanico",
            "precio": "1800.00",
            "imagen": "https://cdn.test/k.png",
            "categoria_nombre": "Periféricos",
            "stock": 3,
        },
        {"id": None, "nombre": None, "precio": None},
    ]))

    products = client.list_products()

    session.request.assert_called_once_with("GET", "http://catalog.test/api/productos", json=None, timeout=2)
    assert products[0].id == 7
    assert products[0].name == "Teclado"
    assert products[0].price == Decimal("1800.00")
    assert products[0].category == "Periféricos"
    assert products[0].image_url == "https://cdn.test/k.png"

    blank = products[1]
    assert blank.id == 0
    assert blank.name == "Sin nombre"
    assert blank.description == "Sin descripción"
    assert blank.price == Decimal("0")
    assert blank.image_ref == ""
    assert blank.category == "General"
    assert blank.stock == 0


def test_category_is_url_encoded():
    client, session = _client(_response([]))

    assert client.list_by_category("Audio y Video") == []
    url = session.request.call_args.args[1]
    assert url == "http://catalog.test/api/productos/category/Audio%20y%20Video"


def test_create_sends_record_without_id():
    echoed = {"id": 42, "nombre": "Nuevo", "precio": 10, "categoria_nombre": "Audio", "stock": 1}
    client, session = _client(_response(echoed, status=201))

    created = client.create_product(make_product(0, name="Nuevo", category="Audio", price="10", stock=1))

    payload = session.request.call_args.kwargs["json"]
    assert "id" not in payload
    assert payload["nombre"] == "Nuevo"
    assert payload["precio"] == 10.0
    assert payload["categoria_nombre"] == "Audio"
    assert created.id == 42


def test_create_with_empty_body_returns_none():
    client, _ = _client(_response(None, status=201))
    assert client.create_product(make_product(0)) is None


def test_update_uses_product_id_in_path():
    client, session = _client(_response(None))
    client.update_product(make_product(9))
    assert session.request.call_args.args[:2] == ("PUT", "http://catalog.test/api/productos/9")
    assert session.request.call_args.kwargs["json"]["id"] == 9


def test_connection_error_is_unreachable():
    client, _ = _client(error=requests.ConnectionError("Name or service not known"))
    with pytest.raises(RemoteUnreachable):
        client.list_products()


def test_timeout_is_io_error():
    client, _ = _client(error=requests.ReadTimeout("slow"))
    with pytest.raises(RemoteIOError):
        client.get_product(1)


def test_non_success_status():
    client, _ = _client(_response({"detail": "boom"}, status=500))
    with pytest.raises(RemoteStatusError) as exc:
        client.list_products()
    assert exc.value.status_code == 500


def test_empty_body_on_read_is_an_error():
    client, _ = _client(_response(None, raw=b"  "))
    with pytest.raises(RemoteEmptyBody):
        client.list_products()


def test_unexpected_shape_is_an_error():
    client, _ = _client(_response({"not": "a list"}))
    with pytest.raises(RemoteEmptyBody):
        client.list_products()


def test_invalid_record_is_an_error():
    client, _ = _client(_response({"id": 1, "precio": "abc"}))
    with pytest.raises(RemoteEmptyBody):
        client.get_product(1)
