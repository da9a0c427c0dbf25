# storefront/actions.py
"""Actions and action creators.

Async resources share one action shape: ``AsyncAction(resource, phase)``.
Action creators that talk to the server are thunks: callables taking
``(dispatch, get_state, extra)`` which the store runs instead of reducing.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from proshop.logger import get_logger
from .client import StoreClient, TransportFailure
from .state import CART_ITEMS_KEY, USER_INFO_KEY

_logger = get_logger(__name__)


class Resource(Enum):
    PRODUCT_LIST = "PRODUCT_LIST"
    PRODUCT_DETAILS = "PRODUCT_DETAILS"
    PRODUCT_DELETE = "PRODUCT_DELETE"
    PRODUCT_CREATE = "PRODUCT_CREATE"
    PRODUCT_UPDATE = "PRODUCT_UPDATE"
    USER_LOGIN = "USER_LOGIN"


class Phase(Enum):
    REQUEST = "REQUEST"
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    RESET = "RESET"


@dataclass(frozen=True)
class AsyncAction:
    resource: Resource
    phase: Phase
    payload: Any = None
    error: Optional[str] = None

    @property
    def type(self) -> str:
        return f"{self.resource.value}_{self.phase.value}"


@dataclass(frozen=True)
class CartAdd:
    item: Dict[str, Any]


@dataclass(frozen=True)
class CartRemove:
    product_id: str


@dataclass(frozen=True)
class CartAddFailed:
    message: str


@dataclass(frozen=True)
class UserLogout:
    pass


def reset(resource: Resource) -> AsyncAction:
    return AsyncAction(resource, Phase.RESET)


# ---------------------------
# Async resource thunks
# ---------------------------
def _async_thunk(resource: Resource, call: Callable[[StoreClient], Awaitable[Any]]):
    async def thunk(dispatch, get_state, extra):
        token = extra.tracker.begin(resource)
        dispatch(AsyncAction(resource, Phase.REQUEST))
        try:
            payload = await call(extra.client)
        except TransportFailure as e:
            if not extra.tracker.is_current(resource, token):
                _logger.debug(f"Dropping stale {resource.value}_FAIL: {e.message}")
                return None
            _logger.warning(f"{resource.value}_FAIL: {e.message}")
            dispatch(AsyncAction(resource, Phase.FAIL, error=e.message))
            return None

        if not extra.tracker.is_current(resource, token):
            _logger.debug(f"Dropping stale {resource.value}_SUCCESS")
            return None
        dispatch(AsyncAction(resource, Phase.SUCCESS, payload=payload))
        return payload

    thunk.__name__ = f"{resource.value.lower()}_thunk"
    return thunk


def list_products(keyword: Optional[str] = None):
    return _async_thunk(Resource.PRODUCT_LIST, lambda c: c.alist_products(keyword))


def product_details(product_id: str):
    return _async_thunk(Resource.PRODUCT_DETAILS, lambda c: c.aget_product(product_id))


def delete_product(product_id: str):
    async def call(client: StoreClient):
        await client.adelete_product(product_id)
        return product_id

    return _async_thunk(Resource.PRODUCT_DELETE, call)


def create_product(data: Optional[Dict[str, Any]] = None):
    return _async_thunk(Resource.PRODUCT_CREATE, lambda c: c.acreate_product(data))


def update_product(product_id: str, changes: Dict[str, Any]):
    return _async_thunk(Resource.PRODUCT_UPDATE, lambda c: c.aupdate_product(product_id, changes))


# ---------------------------
# Cart
# ---------------------------
def _save_cart(get_state, extra) -> None:
    if extra.storage is not None:
        extra.storage.set_item(CART_ITEMS_KEY, list(get_state().cart.cart_items))


def add_to_cart(product_id: str, qty: int = 1):
    async def thunk(dispatch, get_state, extra):
        try:
            product = await extra.client.aget_product(product_id)
        except TransportFailure as e:
            _logger.warning(f"CART_ADD_ITEM failed: {e.message}")
            dispatch(CartAddFailed(e.message))
            return None
        item = {
            "product": product["id"],
            "name": product["name"],
            "image": product.get("image"),
            "price": product["price"],
            "count_in_stock": product.get("count_in_stock", 0),
            "qty": qty,
        }
        dispatch(CartAdd(item))
        _save_cart(get_state, extra)
        return item

    return thunk


def remove_from_cart(product_id: str):
    def thunk(dispatch, get_state, extra):
        dispatch(CartRemove(product_id))
        _save_cart(get_state, extra)

    return thunk


# ---------------------------
# User
# ---------------------------
def remember_user(user_info: Dict[str, Any]):
    """Record an already-known user as logged in. No credentials are checked here."""

    def thunk(dispatch, get_state, extra):
        dispatch(AsyncAction(Resource.USER_LOGIN, Phase.SUCCESS, payload=user_info))
        if extra.storage is not None:
            extra.storage.set_item(USER_INFO_KEY, user_info)

    return thunk


def logout():
    def thunk(dispatch, get_state, extra):
        if extra.storage is not None:
            extra.storage.remove_item(USER_INFO_KEY)
        dispatch(UserLogout())

    return thunk
