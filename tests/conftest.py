# tests/conftest.py
import asyncio

import httpx
import pytest

from proshop.config import Settings
from proshop.database import ProductStore, UserStore
from proshop.main import create_app
from proshop.models import Product, User
from proshop.security import hash_password
from storefront.client import StoreClient
from storefront.storage import LocalStorage
from storefront.store import create_store

ADMIN = {"id": "u1", "name": "Admin User", "email": "admin@example.com", "is_admin": True}
SHIRT = {"id": "p1", "name": "Shirt", "price": 19.99, "brand": "Acme", "category": "Clothing"}
MUG = {"id": "p2", "name": "Coffee Mug", "price": 7.5, "brand": "Acme", "category": "Kitchen"}


def seed(products: ProductStore, users: UserStore, rows=(SHIRT, MUG)):
    async def _seed():
        await users.insert_many([User(password=hash_password("123456"), **ADMIN)])
        await products.insert_many([Product(user=ADMIN["id"], **row) for row in rows])

    asyncio.run(_seed())


@pytest.fixture
def stores():
    products, users = ProductStore(), UserStore()
    seed(products, users)
    return products, users


@pytest.fixture
def app(stores):
    products, users = stores
    return create_app(products, users, Settings(seed=False))


@pytest.fixture
def api_client(app):
    """StoreClient whose async calls go straight into the ASGI app."""
    return StoreClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def store(api_client, storage):
    return create_store(api_client, storage)
