# storefront/config.py
import os

DEFAULT_API_URL = "http://127.0.0.1:5000"
DEFAULT_STORAGE = "~/.proshop/storage.json"


def api_url() -> str:
    return os.getenv("PROSHOP_API_URL", DEFAULT_API_URL)


def storage_path() -> str:
    return os.getenv("PROSHOP_STORAGE", DEFAULT_STORAGE)
