"""storefront: client for the proshop API with a reducer-driven state store."""

from .client import StoreClient, TransportFailure
from .store import Store, create_store

__all__ = ["StoreClient", "TransportFailure", "Store", "create_store"]
