# storefront/storage.py
import json
import os
from pathlib import Path
from typing import Any, Dict, Union

from proshop.logger import get_logger


_logger = get_logger(__name__)


class LocalStorage:
    """Key/value store persisted as a single JSON document, like browser localStorage."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(os.path.expanduser(str(path)))

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                doc = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            _logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        return doc if isinstance(doc, dict) else {}

    def _write(self, doc: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(doc, f)
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> Any:
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        doc = self._read()
        doc[key] = value
        self._write(doc)

    def remove_item(self, key: str) -> None:
        doc = self._read()
        if doc.pop(key, None) is not None:
            self._write(doc)
