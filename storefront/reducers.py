# storefront/reducers.py
# Pure (state, action) -> state functions. Unknown actions return the input
# state object itself.
from dataclasses import fields, replace
from typing import Any, Callable, Dict

from .actions import AsyncAction, CartAdd, CartAddFailed, CartRemove, Phase, Resource, UserLogout
from .state import CartState, RequestState, RootState

Reducer = Callable[[Any, Any], Any]


def async_resource_reducer(resource: Resource) -> Reducer:
    def reducer(state: RequestState, action) -> RequestState:
        if not isinstance(action, AsyncAction) or action.resource is not resource:
            return state
        if action.phase is Phase.REQUEST:
            return RequestState.pending()
        if action.phase is Phase.SUCCESS:
            return RequestState.succeeded(action.payload)
        if action.phase is Phase.FAIL:
            return RequestState.failed(action.error or "Unknown error")
        if action.phase is Phase.RESET:
            return RequestState.idle()
        raise ValueError(f"unhandled phase {action.phase}")

    reducer.__name__ = f"{resource.value.lower()}_reducer"
    return reducer


_login = async_resource_reducer(Resource.USER_LOGIN)


def user_login_reducer(state: RequestState, action) -> RequestState:
    if isinstance(action, UserLogout):
        return RequestState.idle()
    return _login(state, action)


def cart_reducer(state: CartState, action) -> CartState:
    if isinstance(action, CartAdd):
        item = action.item
        items = list(state.cart_items)
        for i, existing in enumerate(items):
            if existing["product"] == item["product"]:
                items[i] = item
                break
        else:
            items.append(item)
        return CartState(cart_items=tuple(items))
    if isinstance(action, CartRemove):
        return CartState(
            cart_items=tuple(x for x in state.cart_items if x["product"] != action.product_id)
        )
    if isinstance(action, CartAddFailed):
        return replace(state, error=action.message)
    return state


def combine_reducers(reducers: Dict[str, Reducer]) -> Reducer:
    """Build a RootState reducer from one reducer per slice.

    Returns the very same root object when no slice changed.
    """
    names = {f.name for f in fields(RootState)}
    missing = names - set(reducers)
    if missing:
        raise ValueError(f"no reducer for slices: {sorted(missing)}")

    def root(state: RootState, action) -> RootState:
        changes = {}
        for name, reducer in reducers.items():
            before = getattr(state, name)
            after = reducer(before, action)
            if after is not before:
                changes[name] = after
        if not changes:
            return state
        return replace(state, **changes)

    return root


root_reducer = combine_reducers(
    {
        "product_list": async_resource_reducer(Resource.PRODUCT_LIST),
        "product_details": async_resource_reducer(Resource.PRODUCT_DETAILS),
        "product_delete": async_resource_reducer(Resource.PRODUCT_DELETE),
        "product_create": async_resource_reducer(Resource.PRODUCT_CREATE),
        "product_update": async_resource_reducer(Resource.PRODUCT_UPDATE),
        "user_login": user_login_reducer,
        "cart": cart_reducer,
    }
)
