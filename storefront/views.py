# storefront/views.py
import asyncio
from typing import Any, Callable, Dict, List, Optional, Set

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.prompt import Confirm
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from proshop.logger import get_logger
from .actions import Resource, create_product, delete_product, list_products, reset
from .state import CartState, RequestState, RootState
from .store import Store

_logger = get_logger(__name__)

_VARIANTS = {"danger": "red", "success": "green", "info": "blue"}


# ---------------------------
# Display helpers
# ---------------------------
def message(text: str, variant: str = "info") -> Panel:
    color = _VARIANTS.get(variant, "blue")
    return Panel.fit(f"[{color}]{text}[/{color}]", border_style=color)


def loader() -> Spinner:
    return Spinner("dots", text="Loading...")


def products_table(products: List[Dict[str, Any]]) -> Table:
    table = Table(box=box.ROUNDED, header_style="bold cyan", show_lines=True)
    table.add_column("ID", style="dim")
    table.add_column("NAME", style="bold")
    table.add_column("PRICE", justify="right")
    table.add_column("CATEGORY")
    table.add_column("BRAND")
    for p in products:
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", ""),
            p.get("brand", ""),
        )
    return table


def render_product_list(state: RootState) -> RenderableType:
    """Frame for the admin product list, computed from state alone."""
    parts: List[RenderableType] = [Text("Products", style="bold magenta")]
    deleting, creating, listing = state.product_delete, state.product_create, state.product_list

    if deleting.success:
        parts.append(message("Product Deleted", "success"))
    if deleting.loading:
        parts.append(loader())
    if deleting.error:
        parts.append(message(deleting.error, "danger"))
    if creating.loading:
        parts.append(loader())
    if creating.error:
        parts.append(message(creating.error, "danger"))

    if listing.loading:
        parts.append(loader())
    elif listing.error:
        parts.append(message(listing.error, "danger"))
    else:
        parts.append(products_table(state.products))
    return Group(*parts)


def render_product_details(details: RequestState) -> RenderableType:
    if details.loading:
        return loader()
    if details.error:
        return message(details.error, "danger")
    p = details.data
    if not p:
        return message("No product selected")
    return Panel.fit(
        f"[bold]{p['name']}[/bold]\n"
        f"{p.get('description', '')}\n\n"
        f"Brand: {p.get('brand', '')}   Category: {p.get('category', '')}\n"
        f"Price: [green]${p.get('price', 0):.2f}[/green]   "
        f"Status: {'In Stock' if p.get('count_in_stock', 0) > 0 else 'Out Of Stock'}\n"
        f"Rating: {p.get('rating', 0)} from {p.get('num_reviews', 0)} reviews",
        title=p["id"],
        border_style="cyan",
    )


def render_cart(cart: CartState) -> RenderableType:
    parts: List[RenderableType] = []
    if cart.error:
        parts.append(message(cart.error, "danger"))
    if not cart.cart_items:
        parts.append(message("Your cart is empty"))
        return Group(*parts)

    table = Table(title="Shopping Cart", box=box.ROUNDED, header_style="bold blue")
    table.add_column("Product", style="bold")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Subtotal", justify="right")
    total = 0.0
    for it in cart.cart_items:
        line = it["price"] * it["qty"]
        total += line
        table.add_row(it["name"], str(it["qty"]), f"${it['price']:.2f}", f"${line:.2f}")
    parts.append(table)
    parts.append(Text(f"Total: ${total:.2f}", style="bold green"))
    return Group(*parts)


# ---------------------------
# Admin product list
# ---------------------------
class ProductListView:
    """Admin product list bound to a store.

    On mount, and whenever the logged-in user, the delete outcome or the create
    outcome changes, the view runs its effect: clear the create slice, send
    non-admins to /login, open the editor for a freshly created product, or
    else clear the delete slice and fetch the list. Effects run on the event
    loop after the dispatch that triggered them, never inside it.
    """

    # requests this view starts, with the slice each one drives
    FETCHES = {
        Resource.PRODUCT_LIST: "product_list",
        Resource.PRODUCT_DELETE: "product_delete",
        Resource.PRODUCT_CREATE: "product_create",
    }

    def __init__(
        self,
        store: Store,
        confirm: Optional[Callable[[str], bool]] = None,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.confirm = confirm or (lambda prompt: Confirm.ask(prompt))
        self._navigate = navigate
        self.location: Optional[str] = None
        self.frame: Optional[RenderableType] = None
        self._deps = None
        self._mounted = False
        self._unsubscribe = None
        self._queued = 0
        self._pending: Set[asyncio.Future] = set()

    @staticmethod
    def dependencies(state: RootState) -> tuple:
        created = state.product_create
        return (
            state.user_info,
            state.product_delete.success,
            created.success,
            created.data.get("id") if created.success and created.data else None,
        )

    def render(self, state: RootState) -> RenderableType:
        return render_product_list(state)

    def navigate(self, path: str) -> None:
        self.location = path
        _logger.debug(f"navigate to {path}")
        if self._navigate:
            self._navigate(path)

    @property
    def mounted(self) -> bool:
        return self._mounted

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def mount(self) -> None:
        """Subscribe and schedule the first effect. Needs a running event loop."""
        if self._mounted:
            return
        self._mounted = True
        self._unsubscribe = self.store.subscribe(self._on_change)
        state = self.store.get_state()
        self.frame = self.render(state)
        self._deps = self.dependencies(state)
        self._schedule_effect(self._deps)

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        tracker = self.store.extra.tracker if self.store.extra else None
        if tracker:
            state = self.store.get_state()
            for resource, slice_name in self.FETCHES.items():
                tracker.cancel(resource)
                # a cancelled request never reaches SUCCESS or FAIL
                if getattr(state, slice_name).loading:
                    self.store.dispatch(reset(resource))

    async def settle(self) -> None:
        """Wait until no effect is queued and no request started here is in flight."""
        while True:
            await asyncio.sleep(0)
            if self._pending:
                await asyncio.gather(*list(self._pending))
                continue
            if self._queued:
                continue
            return

    def _on_change(self) -> None:
        state = self.store.get_state()
        self.frame = self.render(state)
        deps = self.dependencies(state)
        if deps != self._deps:
            self._deps = deps
            self._schedule_effect(deps)

    def _schedule_effect(self, deps: tuple) -> None:
        self._queued += 1
        asyncio.get_running_loop().call_soon(self._run_effect, deps)

    def _run_effect(self, deps: tuple) -> None:
        self._queued -= 1
        if not self._mounted:
            return
        user_info, _, create_success, created_id = deps

        self.store.dispatch(reset(Resource.PRODUCT_CREATE))

        if not user_info or not user_info.get("is_admin"):
            self.navigate("/login")
            return

        if create_success:
            self.navigate(f"/admin/product/{created_id}/edit")
        else:
            self.store.dispatch(reset(Resource.PRODUCT_DELETE))
            self._spawn(self.store.dispatch(list_products()))

    def _spawn(self, coro) -> asyncio.Future:
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    # ---------------------------
    # Handlers
    # ---------------------------
    def delete(self, product_id: str) -> Optional[asyncio.Future]:
        if not self.confirm("Are you sure?"):
            return None
        return self._spawn(self.store.dispatch(delete_product(product_id)))

    def create(self) -> asyncio.Future:
        return self._spawn(self.store.dispatch(create_product()))

    def refresh(self) -> asyncio.Future:
        return self._spawn(self.store.dispatch(list_products()))
