# tests/test_store.py
from storefront.actions import AsyncAction, Phase, Resource
from storefront.state import CART_ITEMS_KEY, USER_INFO_KEY, RootState, build_initial_state
from storefront.store import RequestTracker, Store, create_store
from storefront.reducers import root_reducer


def test_dispatch_notifies_until_unsubscribed():
    store = Store(root_reducer, RootState())
    calls = []
    unsubscribe = store.subscribe(lambda: calls.append(store.get_state().product_list.loading))

    store.dispatch(AsyncAction(Resource.PRODUCT_LIST, Phase.REQUEST))
    assert calls == [True]

    unsubscribe()
    store.dispatch(AsyncAction(Resource.PRODUCT_LIST, Phase.FAIL, error="x"))
    assert calls == [True]
    assert store.get_state().product_list.error == "x"


def test_thunk_receives_dispatch_get_state_and_extra(api_client):
    store = create_store(api_client)
    seen = {}

    def thunk(dispatch, get_state, extra):
        seen["client"] = extra.client
        dispatch(AsyncAction(Resource.PRODUCT_DETAILS, Phase.SUCCESS, payload={"id": "p1"}))
        return get_state().product_details.data

    assert store.dispatch(thunk) == {"id": "p1"}
    assert seen["client"] is api_client


def test_stores_are_independent(api_client):
    a, b = create_store(api_client), create_store(api_client)
    a.dispatch(AsyncAction(Resource.PRODUCT_LIST, Phase.REQUEST))
    assert a.get_state().product_list.loading
    assert not b.get_state().product_list.loading


def test_tracker_generations():
    tracker = RequestTracker()
    first = tracker.begin(Resource.PRODUCT_LIST)
    assert tracker.is_current(Resource.PRODUCT_LIST, first)

    second = tracker.begin(Resource.PRODUCT_LIST)
    assert not tracker.is_current(Resource.PRODUCT_LIST, first)
    assert tracker.is_current(Resource.PRODUCT_LIST, second)

    other = tracker.begin(Resource.PRODUCT_DELETE)
    assert tracker.is_current(Resource.PRODUCT_LIST, second)

    tracker.cancel(Resource.PRODUCT_DELETE)
    assert not tracker.is_current(Resource.PRODUCT_DELETE, other)


def test_initial_state_reads_local_storage(storage):
    assert build_initial_state(storage) == RootState()

    storage.set_item(CART_ITEMS_KEY, [{"product": "p1", "name": "Shirt", "price": 19.99, "qty": 2}])
    storage.set_item(USER_INFO_KEY, {"name": "Admin User", "is_admin": True})
    state = build_initial_state(storage)
    assert state.cart.cart_items[0]["qty"] == 2
    assert state.user_info["is_admin"]
    assert not state.user_login.loading


def test_local_storage_round_trip_and_corruption(storage):
    storage.set_item("a", {"x": 1})
    storage.set_item("b", [1, 2])
    storage.remove_item("a")
    assert storage.get_item("a") is None
    assert storage.get_item("b") == [1, 2]

    storage.path.write_text("{not json")
    assert storage.get_item("b") is None
