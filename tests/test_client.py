# tests/test_client.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.client import StoreClient, TransportFailure


def test_async_list_and_get(api_client):
    products = asyncio.run(api_client.alist_products())
    assert [p["id"] for p in products] == ["p1", "p2"]

    shirt = asyncio.run(api_client.aget_product("p1"))
    assert shirt["name"] == "Shirt"


def test_async_missing_product_carries_server_message(api_client):
    with pytest.raises(TransportFailure) as exc:
        asyncio.run(api_client.aget_product("zz"))
    assert exc.value.message == "Product Not Found"
    assert exc.value.status_code == 404


def test_async_network_error_uses_transport_message():
    def handler(request):
        raise httpx.ConnectError("Network Error", request=request)

    client = StoreClient(base_url="http://testserver", transport=httpx.MockTransport(handler))
    with pytest.raises(TransportFailure) as exc:
        asyncio.run(client.alist_products())
    assert exc.value.message == "Network Error"
    assert exc.value.status_code is None


def test_async_error_without_json_body():
    client = StoreClient(
        base_url="http://testserver",
        transport=httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway")),
    )
    with pytest.raises(TransportFailure) as exc:
        asyncio.run(client.alist_products())
    assert exc.value.message == "Request failed with status code 502"


def test_async_create_update_delete(api_client):
    created = asyncio.run(api_client.acreate_product())
    assert created["name"] == "Sample name"

    updated = asyncio.run(api_client.aupdate_product(created["id"], {"name": "Lamp"}))
    assert updated["name"] == "Lamp"

    assert asyncio.run(api_client.adelete_product(created["id"])) == {"message": "Product removed"}


def test_blocking_calls(app):
    c = StoreClient(base_url="http://testserver", session=TestClient(app))
    assert [p["id"] for p in c.list_products(keyword="shirt")] == ["p1"]
    assert c.get_product("p2")["name"] == "Coffee Mug"

    created = c.create_product({"name": "Hat", "price": 5})
    assert c.update_product(created["id"], {"price": 6})["price"] == 6
    assert c.delete_product(created["id"]) == {"message": "Product removed"}

    with pytest.raises(TransportFailure) as exc:
        c.get_product(created["id"])
    assert exc.value.message == "Product Not Found"


def test_async_success_without_json_body():
    client = StoreClient(
        base_url="http://testserver",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>")),
    )
    with pytest.raises(TransportFailure) as exc:
        asyncio.run(client.alist_products())
    assert exc.value.message == "Response was not valid JSON"
    assert exc.value.status_code == 200


def test_async_redirect_is_a_failure(api_client):
    # an empty id hits the trailing-slash redirect
    with pytest.raises(TransportFailure) as exc:
        asyncio.run(api_client.aget_product(""))
    assert exc.value.status_code == 307
    assert exc.value.message == "Request failed with status code 307"
