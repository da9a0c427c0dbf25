# proshop/seeder.py
# Import/destroy of the seed fixtures. The server runs import_data on start-up
# when Settings.seed is on; `python -m proshop -d` starts with empty stores.
from typing import Any, Dict, Iterable, List, Optional, Tuple

from . import data
from .database import ProductStore, UserStore, new_id
from .logger import get_logger
from .models import Product, User

_logger = get_logger(__name__)


async def import_data(
    products: ProductStore,
    users: UserStore,
    user_rows: Optional[Iterable[Dict[str, Any]]] = None,
    product_rows: Optional[Iterable[Dict[str, Any]]] = None,
) -> Tuple[List[User], List[Product]]:
    """Wipe both stores, then insert users and products owned by the first user."""
    await destroy_data(products, users)

    user_rows = data.USERS if user_rows is None else user_rows
    product_rows = data.PRODUCTS if product_rows is None else product_rows

    created_users = await users.insert_many(
        User(**{**row, "id": row.get("id") or new_id()}) for row in user_rows
    )
    admin_id = created_users[0].id if created_users else None

    sample_products = [
        Product(**{**row, "id": row.get("id") or new_id(), "user": admin_id})
        for row in product_rows
    ]
    created_products = await products.insert_many(sample_products)
    _logger.info(
        f"Data imported: {len(created_users)} users, {len(created_products)} products"
    )
    return created_users, created_products


async def destroy_data(products: ProductStore, users: UserStore) -> None:
    await products.delete_many()
    await users.delete_many()
    _logger.info("Data destroyed")
