"""Key-value persistence used by the session store and transaction history.

Each key is one named slot holding a JSON-serializable value. Writers replace
the whole slot; there is no merging between concurrent processes.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol

from arena_wallet.shared.logging import get_logger

logger = get_logger(__name__)


class KeyValueStorage(Protocol):
    """Raw string storage, shaped like browser ``localStorage``."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStorage:
    """Stores each key as ``<storage_dir>/<key>.json``."""

    def __init__(self, storage_dir: str | Path | None = None):
        self.storage_dir = self.resolve_storage_dir(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def resolve_storage_dir(storage_dir: str | Path | None = None) -> Path:
        if storage_dir:
            return Path(storage_dir).expanduser()

        env_dir = os.getenv("ARENA_WALLET_DIR")
        if env_dir:
            return Path(env_dir).expanduser()

        return Path.home() / ".config" / "arena-wallet"

    def _path_for(self, key: str) -> Path:
        safe_key = "".join(c if c.isalnum() or c in "-_" else "_" for c in key)
        return self.storage_dir / f"{safe_key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read storage key %s: %s", key, e)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass


def read_json(storage: KeyValueStorage, key: str) -> Any | None:
    """Decode the JSON stored under ``key``; unparsable values read as ``None``."""
    raw = storage.get_item(key)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Discarding unparsable value stored under %s", key)
        return None


def write_json(storage: KeyValueStorage, key: str, value: Any) -> None:
    storage.set_item(key, json.dumps(value))
