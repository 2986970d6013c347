"""JSON document storage for economy, farm and profession state.

Each component is saved as one pretty-printed JSON object so server operators
can read and hand-edit it. Saves rewrite the whole document atomically; there
is no append log.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol
from uuid import UUID

from rooster_ranch.errors import MalformedRecord, StorageFailure

ECONOMY_DOCUMENT = "economy.json"
FARMS_DOCUMENT = "farms.json"
PROFESSIONS_DOCUMENT = "professions.json"


class DocumentStore(Protocol):
    """Persistence contract for one key/value document."""

    def load(self) -> dict[str, Any]:
        """Return the stored document, or an empty one if nothing was saved yet."""

    def save(self, document: dict[str, Any]) -> None:
        """Replace the stored document."""


class InMemoryDocumentStore:
    """Document store that keeps a deep copy in memory."""

    def __init__(self, document: dict[str, Any] | None = None) -> None:
        self._payload = json.dumps(document or {})

    def load(self) -> dict[str, Any]:
        return json.loads(self._payload)

    def save(self, document: dict[str, Any]) -> None:
        self._payload = json.dumps(document)


class JsonDocumentStore:
    """File-backed JSON document store."""

    def __init__(self, file_path: str | Path) -> None:
        self._path = Path(file_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise StorageFailure(f"Unable to read {self._path}: {exc}") from exc

        if not text.strip():
            return {}
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageFailure(f"{self._path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise StorageFailure(f"{self._path} must contain a JSON object, found {type(payload).__name__}")
        return payload

    def save(self, document: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self._path.stem}_", suffix=".json", dir=self._path.parent)
        except OSError as exc:
            raise StorageFailure(f"Unable to prepare {self._path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, sort_keys=True)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageFailure(f"Unable to write {self._path}: {exc}") from exc
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


def parse_owner_id(key: Any) -> UUID:
    """Decode a stored owner id, raising ``MalformedRecord`` for anything but a UUID."""
    try:
        return UUID(str(key))
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(str(key), "not a valid owner id") from exc


def document_stores(data_dir: str | Path) -> dict[str, JsonDocumentStore]:
    """Return the three component stores rooted at ``data_dir``."""
    root = Path(data_dir)
    return {
        "economy": JsonDocumentStore(root / ECONOMY_DOCUMENT),
        "farms": JsonDocumentStore(root / FARMS_DOCUMENT),
        "professions": JsonDocumentStore(root / PROFESSIONS_DOCUMENT),
    }
