"""
PolySolver - Append-only transcript with session persistence.

Every mutation writes the whole transcript back to session storage before
returning. Clearing removes the stored record instead of writing an empty
one, so "never used" and "explicitly cleared" stay distinguishable.
"""

import json
import logging
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from polysolver.entries import RequestEntry, ResultEntry, transcript_adapter
from polysolver.errors import CorruptPersistedRecord, UnknownOperation
from polysolver.operations import coerce_operation
from polysolver.storage import SessionStorage

logger = logging.getLogger(__name__)

TRANSCRIPT_KEY = "chatHistory"


# ── Encoding ─────────────────────────────────────────────────────────────

def encode_transcript(entries: Sequence) -> str:
    return json.dumps(
        [entry.model_dump(mode="json") for entry in entries], ensure_ascii=False
    )


def _migrate_legacy(item: Any) -> Any:
    """Convert an ``input``/``output`` chat message from the old web client.

    Old records stored the request echo as text (``"SUMA: a, b"``) and the
    result under Spanish field names. Anything else passes through as is.
    """
    if not isinstance(item, dict) or item.get("type") not in ("input", "output"):
        return item
    content = item.get("content")
    if item["type"] == "input":
        if not isinstance(content, str) or ":" not in content:
            raise CorruptPersistedRecord(f"Unreadable request echo: {content!r}")
        badge, _, rest = content.partition(":")
        return {
            "type": "request",
            "operation": coerce_operation(badge),
            "operands": [p.strip() for p in rest.split(", ") if p.strip()],
        }
    if not isinstance(content, dict):
        raise CorruptPersistedRecord(f"Unreadable result: {content!r}")
    return {
        "type": "result",
        "operation": content.get("operacion"),
        "result": content.get("resultado"),
        "explanation": content.get("explicacion") or "",
        "operands": content.get("polinomios") or [],
    }


def decode_transcript(raw: str) -> list:
    """Decode a stored record, raising ``CorruptPersistedRecord`` on any defect."""
    try:
        items = json.loads(raw)
    except ValueError as exc:
        raise CorruptPersistedRecord(f"Stored transcript is not JSON: {exc}") from exc
    if not isinstance(items, list):
        raise CorruptPersistedRecord("Stored transcript is not a list of entries.")
    try:
        items = [_migrate_legacy(item) for item in items]
        return transcript_adapter.validate_python(items)
    except (ValidationError, UnknownOperation) as exc:
        raise CorruptPersistedRecord(f"Stored transcript is invalid: {exc}") from exc


# ── Store ────────────────────────────────────────────────────────────────

class TranscriptStore:
    def __init__(self, storage: SessionStorage, key: str = TRANSCRIPT_KEY) -> None:
        self._storage = storage
        self._key = key
        self._entries: list = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple:
        return tuple(self._entries)

    def append(self, entry) -> None:
        if not isinstance(entry, (RequestEntry, ResultEntry)):
            raise TypeError(f"Not a transcript entry: {entry!r}")
        self._entries.append(entry)
        self.persist()

    def clear(self) -> None:
        self._entries = []
        self.persist()

    def persist(self) -> None:
        """Write the in-memory transcript; an empty one removes the record."""
        if self._entries:
            self._storage.set_item(self._key, encode_transcript(self._entries))
        else:
            self._storage.remove_item(self._key)

    def restore(self) -> int:
        """Load the stored record, keeping an empty transcript if it is missing or corrupt."""
        raw: Optional[str] = self._storage.get_item(self._key)
        if raw is None:
            self._entries = []
            return 0
        try:
            self._entries = decode_transcript(raw)
        except CorruptPersistedRecord as exc:
            logger.warning("Discarding stored transcript: %s", exc)
            self._entries = []
            return 0
        logger.info("Restored %d transcript entries", len(self._entries))
        return len(self._entries)
