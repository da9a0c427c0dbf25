# storefront/state.py
"""Typed records for the client-side state tree.

Every async resource is tracked by a ``RequestState``. Its ``status`` decides
which of ``data`` and ``error`` may be set, so a finished request can never
still look like it is loading or carry both a payload and an error.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .storage import LocalStorage

CART_ITEMS_KEY = "cartItems"
USER_INFO_KEY = "userInfo"


class Status(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RequestState:
    status: Status = Status.IDLE
    data: Any = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.status is Status.FAILED:
            if not self.error:
                raise ValueError("failed state needs an error message")
            if self.data is not None:
                raise ValueError("failed state cannot carry data")
        elif self.error is not None:
            raise ValueError(f"{self.status.value} state cannot carry an error")
        if self.status is Status.LOADING and self.data is not None:
            raise ValueError("loading state cannot carry data")

    @classmethod
    def idle(cls, data: Any = None) -> "RequestState":
        return cls(Status.IDLE, data=data)

    @classmethod
    def pending(cls) -> "RequestState":
        return cls(Status.LOADING)

    @classmethod
    def succeeded(cls, payload: Any) -> "RequestState":
        return cls(Status.SUCCEEDED, data=payload)

    @classmethod
    def failed(cls, message: str) -> "RequestState":
        return cls(Status.FAILED, error=message)

    @property
    def loading(self) -> bool:
        return self.status is Status.LOADING

    @property
    def success(self) -> bool:
        return self.status is Status.SUCCEEDED


@dataclass(frozen=True)
class CartState:
    cart_items: Tuple[Dict[str, Any], ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class RootState:
    product_list: RequestState = field(default_factory=RequestState.idle)
    product_details: RequestState = field(default_factory=RequestState.idle)
    product_delete: RequestState = field(default_factory=RequestState.idle)
    product_create: RequestState = field(default_factory=RequestState.idle)
    product_update: RequestState = field(default_factory=RequestState.idle)
    user_login: RequestState = field(default_factory=RequestState.idle)
    cart: CartState = field(default_factory=CartState)

    @property
    def products(self) -> List[Dict[str, Any]]:
        return list(self.product_list.data or [])

    @property
    def user_info(self) -> Optional[Dict[str, Any]]:
        return self.user_login.data


def build_initial_state(storage: Optional[LocalStorage] = None) -> RootState:
    """Initial tree, with cart items and user info read back from local storage."""
    if storage is None:
        return RootState()
    cart_items = storage.get_item(CART_ITEMS_KEY) or []
    user_info = storage.get_item(USER_INFO_KEY)
    return RootState(
        cart=CartState(cart_items=tuple(cart_items)),
        user_login=RequestState.idle(user_info) if user_info else RequestState.idle(),
    )
