# proshop/config.py
import os
from dataclasses import dataclass

from .logger import get_logger

_logger = get_logger(__name__)

DEFAULT_PORT = 5000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_ENV = "development"


def _port_from_env(raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        _logger.warning(f"Invalid PORT {raw!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    env: str = DEFAULT_ENV
    seed: bool = True

    @property
    def debug(self) -> bool:
        return self.env == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        raw_port = os.getenv("PORT")
        return cls(
            port=_port_from_env(raw_port) if raw_port else DEFAULT_PORT,
            host=os.getenv("HOST", DEFAULT_HOST),
            env=os.getenv("APP_ENV", DEFAULT_ENV),
            seed=os.getenv("SEED", "1").lower() not in ("0", "false", "no"),
        )
