# storefront/store.py
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from proshop.logger import get_logger
from .actions import Resource
from .client import StoreClient
from .reducers import Reducer, root_reducer
from .state import RootState, build_initial_state
from .storage import LocalStorage

_logger = get_logger(__name__)


class RequestTracker:
    """Generation counter per resource.

    ``begin`` hands out a token for a new request; only the latest token of a
    resource is current. ``cancel`` makes every outstanding token stale, so
    responses arriving after a view has gone away are dropped.
    """

    def __init__(self):
        self._generations: Dict[Resource, int] = {}

    def begin(self, resource: Resource) -> int:
        gen = self._generations.get(resource, 0) + 1
        self._generations[resource] = gen
        return gen

    def is_current(self, resource: Resource, token: int) -> bool:
        return self._generations.get(resource, 0) == token

    def cancel(self, resource: Resource) -> None:
        self._generations[resource] = self._generations.get(resource, 0) + 1


@dataclass
class ThunkContext:
    """Services handed to every thunk as its third argument."""

    client: StoreClient
    storage: Optional[LocalStorage] = None
    tracker: RequestTracker = field(default_factory=RequestTracker)


class Store:
    def __init__(self, reducer: Reducer, initial_state: RootState, extra: Optional[ThunkContext] = None):
        self._reducer = reducer
        self._state = initial_state
        self._listeners: List[Callable[[], None]] = []
        self._dispatching = False
        self.extra = extra

    def get_state(self) -> RootState:
        return self._state

    def dispatch(self, action) -> Any:
        """Reduce a plain action, or run a thunk and return whatever it returns.

        Async thunks return a coroutine; awaiting it runs the request.
        """
        if callable(action):
            return action(self.dispatch, self.get_state, self.extra)

        if self._dispatching:
            raise RuntimeError("Reducers may not dispatch actions")
        try:
            self._dispatching = True
            self._state = self._reducer(self._state, action)
        finally:
            self._dispatching = False

        _logger.debug(f"dispatched {getattr(action, 'type', type(action).__name__)}")
        for listener in list(self._listeners):
            listener()
        return action

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def create_store(
    client: StoreClient,
    storage: Optional[LocalStorage] = None,
    initial_state: Optional[RootState] = None,
) -> Store:
    if initial_state is None:
        initial_state = build_initial_state(storage)
    return Store(root_reducer, initial_state, ThunkContext(client=client, storage=storage))
