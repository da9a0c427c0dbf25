#!/usr/bin/env python
# Walks the product flow against a running server (python -m proshop).
import asyncio

from rich import print

from storefront import StoreClient, create_store
from storefront.actions import delete_product, list_products, product_details, remember_user


async def run(c: StoreClient):
    store = create_store(c)
    store.dispatch(remember_user({"name": "Admin User", "email": "admin@example.com", "is_admin": True}))

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    await store.dispatch(list_products())
    products = store.get_state().products
    print([p["name"] for p in products])

    # -----------------------------
    # Product details
    # -----------------------------
    first = products[0]["id"]
    print(f"\nFetching {first}...")
    await store.dispatch(product_details(first))
    print(store.get_state().product_details)

    # -----------------------------
    # Missing product
    # -----------------------------
    print("\nFetching a product that does not exist...")
    await store.dispatch(product_details("zz"))
    print(store.get_state().product_details)

    # -----------------------------
    # Create, then delete
    # -----------------------------
    print("\nCreating a sample product...")
    created = await c.acreate_product()
    print(created)
    await store.dispatch(delete_product(created["id"]))
    print(store.get_state().product_delete)


def main():
    asyncio.run(run(StoreClient(base_url="http://127.0.0.1:5000")))


if __name__ == "__main__":
    main()
