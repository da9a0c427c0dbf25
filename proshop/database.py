# proshop/database.py
# Product and user collections. Each store is keyed by document id so that
# single-document lookups never scan the collection.
import asyncio
import uuid
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import NotFound, StoreUnavailable, ValidationFailure
from .logger import get_logger
from .models import Product, User

_logger = get_logger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


class _Collection:
    """Connection lifecycle and write lock shared by every collection."""

    name = "collection"

    def __init__(self, connected: bool = True):
        self._connected = connected
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        self._connected = True
        _logger.debug(f"{self.name} store connected")

    def disconnect(self) -> None:
        self._connected = False
        _logger.debug(f"{self.name} store disconnected")

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise StoreUnavailable(f"{self.name} store is not connected")


class ProductStore(_Collection):
    name = "products"

    def __init__(self, connected: bool = True):
        super().__init__(connected)
        self._docs: Dict[str, Product] = {}

    async def list_all(self, keyword: Optional[str] = None) -> List[Product]:
        self._ensure_connected()
        out = []
        term = keyword.lower() if keyword else None
        for p in self._docs.values():
            if term and term not in p.name.lower():
                continue
            out.append(p.model_copy())
        return out

    async def get_by_id(self, product_id: str) -> Product:
        self._ensure_connected()
        p = self._docs.get(product_id)
        if p is None:
            raise NotFound("Product")
        return p.model_copy()

    async def insert(self, product: Product) -> Product:
        self._ensure_connected()
        async with self._lock:
            if product.id in self._docs:
                raise ValidationFailure(f"Duplicate product id {product.id}")
            self._docs[product.id] = product.model_copy()
        return product

    async def insert_many(self, products: Iterable[Product]) -> List[Product]:
        created = []
        for p in products:
            created.append(await self.insert(p))
        return created

    async def update(self, product_id: str, changes: Dict[str, Any]) -> Product:
        self._ensure_connected()
        async with self._lock:
            current = self._docs.get(product_id)
            if current is None:
                raise NotFound("Product")
            # Re-validate so a bad update can't slip past the model constraints
            merged = current.model_dump()
            merged.update(changes)
            try:
                updated = Product.model_validate(merged)
            except PydanticValidationError as e:
                first = e.errors()[0]
                loc = ".".join(str(part) for part in first["loc"])
                raise ValidationFailure(f"{loc}: {first['msg']}" if loc else first["msg"]) from e
            self._docs[product_id] = updated
        return updated.model_copy()

    async def delete(self, product_id: str) -> None:
        self._ensure_connected()
        async with self._lock:
            if self._docs.pop(product_id, None) is None:
                raise NotFound("Product")

    async def delete_many(self) -> int:
        self._ensure_connected()
        async with self._lock:
            count = len(self._docs)
            self._docs.clear()
        return count


class UserStore(_Collection):
    name = "users"

    def __init__(self, connected: bool = True):
        super().__init__(connected)
        self._docs: Dict[str, User] = {}
        self._by_email: Dict[str, str] = {}

    async def list_all(self) -> List[User]:
        self._ensure_connected()
        return [u.model_copy() for u in self._docs.values()]

    async def get_by_email(self, email: str) -> User:
        self._ensure_connected()
        uid = self._by_email.get(email.lower())
        if uid is None:
            raise NotFound("User")
        return self._docs[uid].model_copy()

    async def first_admin(self) -> Optional[User]:
        self._ensure_connected()
        for u in self._docs.values():
            if u.is_admin:
                return u.model_copy()
        return None

    async def insert_many(self, users: Iterable[User]) -> List[User]:
        self._ensure_connected()
        created = []
        async with self._lock:
            for u in users:
                key = u.email.lower()
                if key in self._by_email:
                    raise ValidationFailure(f"Email {u.email} already registered")
                self._docs[u.id] = u.model_copy()
                self._by_email[key] = u.id
                created.append(u)
        return created

    async def delete_many(self) -> int:
        self._ensure_connected()
        async with self._lock:
            count = len(self._docs)
            self._docs.clear()
            self._by_email.clear()
        return count
