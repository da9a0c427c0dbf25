# storefront/cli.py
import asyncio
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from . import config
from .actions import (
    Resource,
    add_to_cart,
    logout,
    product_details,
    remember_user,
    remove_from_cart,
    reset,
    update_product,
)
from .client import StoreClient
from .storage import LocalStorage
from .store import Store, create_store
from .views import ProductListView, message, render_cart, render_product_details

console = Console()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

OPTIONS = [
    ("1", "📦 Manage products", "6", "➖ Remove from cart"),
    ("2", "ℹ️ Product details", "7", "🛒 View cart"),
    ("3", "➕ Create product", "8", "🔑 Sign in"),
    ("4", "🗑️ Delete product", "9", "🚪 Log out"),
    ("5", "🛒 Add to cart", "q", "👋 Quit"),
]


def create_header(store: Store) -> Panel:
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    user = store.get_state().user_info
    who = f"{user['name']}{' (admin)' if user.get('is_admin') else ''}" if user else "not signed in"
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row("🛍️ ProShop", f"[bold blue]{who}[/bold blue]", f"[dim]{now}[/dim]")
    return Panel(header, style="bold blue")


def product_completer(store: Store) -> WordCompleter:
    ids = [p.get("id", "") for p in store.get_state().products]
    return WordCompleter([i for i in ids if i], ignore_case=True)


class StorefrontCLI:
    def __init__(self, store: Store, session: Optional[PromptSession] = None):
        self.store = store
        self.session = session or PromptSession(style=custom_style)
        self.view = ProductListView(store, confirm=lambda prompt: Confirm.ask(prompt))

    def is_admin(self) -> bool:
        user = self.store.get_state().user_info
        return bool(user and user.get("is_admin"))

    async def ask(self, text: str, completer=None, default: str = "") -> str:
        answer = await self.session.prompt_async(f"{text} ", completer=completer, default=default)
        return answer.strip()

    async def show_products(self) -> None:
        self.view.location = None
        if self.view.mounted:
            self.view.refresh()
        else:
            self.view.mount()
        await self.view.settle()
        if self.view.location == "/login":
            self.view.unmount()
            console.print(message("Admin access required, sign in first (8)", "danger"))
            return
        console.print(self.view.frame)

    async def edit_product(self, product_id: str) -> None:
        """Editor reached after creating a product."""
        await self.store.dispatch(product_details(product_id))
        current: Dict[str, Any] = self.store.get_state().product_details.data or {}
        changes = {
            "name": Prompt.ask("Name", default=current.get("name", "")),
            "price": FloatPrompt.ask("Price", default=float(current.get("price", 0))),
            "brand": Prompt.ask("Brand", default=current.get("brand", "")),
            "category": Prompt.ask("Category", default=current.get("category", "")),
            "count_in_stock": IntPrompt.ask("Count in stock", default=current.get("count_in_stock", 0)),
            "description": Prompt.ask("Description", default=current.get("description", "")),
        }
        await self.store.dispatch(update_product(product_id, changes))
        updated = self.store.get_state().product_update
        if updated.error:
            console.print(message(updated.error, "danger"))
        else:
            console.print(message(f"Product {product_id} updated", "success"))
        self.store.dispatch(reset(Resource.PRODUCT_UPDATE))

    async def handle(self, choice: str) -> bool:
        store = self.store
        if choice == "1":
            await self.show_products()

        elif choice == "2":
            pid = await self.ask("Product ID", completer=product_completer(store))
            await store.dispatch(product_details(pid))
            console.print(render_product_details(store.get_state().product_details))

        elif choice == "3":
            if not self.is_admin():
                console.print(message("Admin access required, sign in first (8)", "danger"))
                return True
            self.view.location = None
            self.view.mount()
            self.view.create()
            await self.view.settle()
            location = self.view.location or ""
            if location.startswith("/admin/product/"):
                await self.edit_product(location.split("/")[3])
                await self.show_products()
            else:
                console.print(self.view.frame)

        elif choice == "4":
            if not self.is_admin():
                console.print(message("Admin access required, sign in first (8)", "danger"))
                return True
            pid = await self.ask("Product ID", completer=product_completer(store))
            self.view.mount()
            self.view.delete(pid)
            await self.view.settle()
            console.print(self.view.frame)

        elif choice == "5":
            pid = await self.ask("Product ID", completer=product_completer(store))
            qty = IntPrompt.ask("Quantity", default=1)
            await store.dispatch(add_to_cart(pid, qty))
            console.print(render_cart(store.get_state().cart))

        elif choice == "6":
            pid = await self.ask("Product ID")
            store.dispatch(remove_from_cart(pid))
            console.print(render_cart(store.get_state().cart))

        elif choice == "7":
            console.print(render_cart(store.get_state().cart))

        elif choice == "8":
            # No login endpoint exists yet; the entered identity is kept locally.
            name = Prompt.ask("Name")
            email = Prompt.ask("Email")
            is_admin = Confirm.ask("Admin?", default=False)
            store.dispatch(remember_user({"name": name, "email": email, "is_admin": is_admin}))
            console.print(message(f"Signed in as {name}", "success"))

        elif choice == "9":
            self.view.unmount()
            store.dispatch(logout())
            console.print(message("Logged out", "info"))

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for shopping! 👋[/bold green]", title="Goodbye"))
                return False
        return True

    async def menu(self) -> None:
        console.clear()
        while True:
            console.print(create_header(self.store))
            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            for row in OPTIONS:
                menu_table.add_row(*row)
            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = await self.ask(
                "\nChoose an option",
                completer=WordCompleter([str(i) for i in range(1, 10)] + ["q", "quit", "exit"]),
            )
            if not await self.handle(choice):
                self.view.unmount()
                return
            console.print()
            console.rule(style="dim")


def main(argv: Optional[List[str]] = None) -> int:
    client = StoreClient(base_url=config.api_url())
    store = create_store(client, LocalStorage(config.storage_path()))
    try:
        asyncio.run(StorefrontCLI(store).menu())
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
