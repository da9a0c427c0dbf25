# tests/test_database.py
import asyncio

import pytest

from proshop import data
from proshop.config import DEFAULT_PORT, Settings
from proshop.database import ProductStore, UserStore
from proshop.errors import NotFound, StoreUnavailable, ValidationFailure
from proshop.models import Product, User
from proshop.security import hash_password, verify_password
from proshop.seeder import destroy_data, import_data


def run(coro):
    return asyncio.run(coro)


def test_get_by_id_returns_each_inserted_product():
    store = ProductStore()
    inserted = [Product(id=f"p{i}", name=f"Item {i}", price=i) for i in range(5)]
    run(store.insert_many(inserted))

    for p in inserted:
        assert run(store.get_by_id(p.id)) == p
    with pytest.raises(NotFound) as exc:
        run(store.get_by_id("absent"))
    assert exc.value.message == "Product Not Found"


def test_list_all_has_no_duplicates_and_keeps_insertion_order():
    store = ProductStore()
    run(store.insert(Product(id="b", name="B")))
    run(store.insert(Product(id="a", name="A")))
    run(store.get_by_id("a"))

    first = [p.id for p in run(store.list_all())]
    second = [p.id for p in run(store.list_all())]
    assert first == second == ["b", "a"]

    with pytest.raises(ValidationFailure):
        run(store.insert(Product(id="a", name="again")))


def test_returned_products_are_copies():
    store = ProductStore()
    run(store.insert(Product(id="p1", name="Shirt", price=10)))
    got = run(store.get_by_id("p1"))
    got.price = 99
    assert run(store.get_by_id("p1")).price == 10


def test_update_validates_changes():
    store = ProductStore()
    run(store.insert(Product(id="p1", name="Shirt", price=10)))
    assert run(store.update("p1", {"price": 12})).price == 12
    with pytest.raises(ValidationFailure):
        run(store.update("p1", {"count_in_stock": -3}))
    assert run(store.get_by_id("p1")).count_in_stock == 0


def test_update_rejects_explicit_null():
    store = ProductStore()
    run(store.insert(Product(id="p1", name="Shirt", price=10)))
    with pytest.raises(ValidationFailure):
        run(store.update("p1", {"name": None}))
    assert run(store.get_by_id("p1")).name == "Shirt"


def test_disconnected_store_is_unavailable():
    store = ProductStore()
    store.disconnect()
    with pytest.raises(StoreUnavailable):
        run(store.list_all())
    store.connect()
    assert run(store.list_all()) == []


def test_user_email_is_unique():
    users = UserStore()
    run(users.insert_many([User(id="u1", name="A", email="a@example.com", password="x")]))
    with pytest.raises(ValidationFailure):
        run(users.insert_many([User(id="u2", name="B", email="A@example.com", password="x")]))
    assert run(users.get_by_email("a@example.com")).id == "u1"
    with pytest.raises(NotFound):
        run(users.get_by_email("nobody@example.com"))


def test_import_data_links_products_to_admin():
    products, users = ProductStore(), UserStore()
    created_users, created_products = run(import_data(products, users))

    assert len(created_users) == len(data.USERS)
    assert created_users[0].is_admin
    assert len(created_products) == len(data.PRODUCTS)
    assert all(p.user == created_users[0].id for p in created_products)
    # plaintext never stored
    assert all(u.password != "123456" for u in run(users.list_all()))

    # importing again replaces, never duplicates
    run(import_data(products, users))
    assert len(run(products.list_all())) == len(data.PRODUCTS)

    run(destroy_data(products, users))
    assert run(products.list_all()) == []
    assert run(users.list_all()) == []


def test_password_hash_is_salted():
    a, b = hash_password("123456"), hash_password("123456")
    assert a != b
    assert verify_password("123456", a)
    assert not verify_password("654321", a)
    assert not verify_password("123456", "garbage")


def test_settings_from_env(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    settings = Settings.from_env()
    assert settings.port == DEFAULT_PORT
    assert settings.env == "development"
    assert settings.debug

    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SEED", "0")
    settings = Settings.from_env()
    assert settings.port == 8080
    assert not settings.debug
    assert not settings.seed

    monkeypatch.setenv("PORT", "not-a-port")
    assert Settings.from_env().port == DEFAULT_PORT
