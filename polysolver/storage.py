"""
PolySolver - Session-scoped key/value storage.

Mirrors the browser's ``sessionStorage``: string values under string keys.
``MemorySessionStorage`` lives as long as the process; ``JsonFileSessionStorage``
keeps the values in a small JSON file so a terminal session can be resumed.
"""

import json
import logging
import os
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class SessionStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemorySessionStorage:
    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class JsonFileSessionStorage:
    """Values persisted in ``path`` as a flat JSON object."""

    def __init__(self, path: str) -> None:
        self.path = path

    # ── File access ─────────────────────────────────────────────────────

    def _ensure_dir(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

    def _load_db(self) -> dict:
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    db = json.load(f)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
                return {}
            if isinstance(db, dict):
                return db
            logger.warning("Ignoring session file %s: not a JSON object", self.path)
        return {}

    def _save_db(self, db: dict) -> None:
        self._ensure_dir()
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(db, f, indent=2, ensure_ascii=False)

    # ── Storage interface ───────────────────────────────────────────────

    def get_item(self, key: str) -> Optional[str]:
        value = self._load_db().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        db = self._load_db()
        db[key] = value
        self._save_db(db)

    def remove_item(self, key: str) -> None:
        db = self._load_db()
        if key in db:
            del db[key]
            self._save_db(db)
