"""Durable key-value storage for saved calculator inputs.

Supports two backends with the same string-in / string-out interface:
- JSON file on local disk (default, survives restarts)
- In-memory dict, for tests
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

STORE_PATH_ENV = "PLATECOST_STORE_PATH"


class MemoryStore:
    """Process-local store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self):
        return list(self._data)


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    The whole file is rewritten on every change via a temp file and
    ``os.replace`` so a crash never leaves half a file behind.  A missing,
    unreadable or malformed file reads as an empty store.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Store file %s unreadable, treating as empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s is not a JSON object, treating as empty", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def keys(self):
        return list(self._read())


def get_store(path: Optional[str] = None) -> JsonFileStore:
    """File store at ``path``, else ``$PLATECOST_STORE_PATH``, else ``~/.platecost``."""
    if path is None:
        path = os.environ.get(STORE_PATH_ENV) or str(Path.home() / ".platecost" / "store.json")
    logger.info("Using key-value store at %s", path)
    return JsonFileStore(path)
