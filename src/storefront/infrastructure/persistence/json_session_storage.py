"""JSON-file-backed implementation of SessionStorage.

One file per session id, holding a flat ``{key: string}`` object. OSError
from the filesystem is left to propagate; the cart decides how to treat an
unavailable storage.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from storefront.domain.exceptions import StorageError, ValidationError
from storefront.domain.repository.session_storage import SessionStorage

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


class JsonSessionStorage(SessionStorage):

    def __init__(self, sessions_dir: Path, session_id: str) -> None:
        if not _SESSION_ID_RE.match(session_id) or session_id.startswith("."):
            raise ValidationError(f"Invalid session id: '{session_id}'")
        self._file_path = sessions_dir / f"{session_id}.json"

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(
                f"Corrupt session file {self._file_path.name}: "
                f"value of '{key}' is not a string"
            )
        return value

    def set(self, key: str, value: str) -> None:
        # A corrupt file is overwritten rather than left blocking every write.
        data = self._load(discard_corrupt=True)
        data[key] = value
        self._persist(data)

    def delete(self, key: str) -> None:
        data = self._load(discard_corrupt=True)
        if data.pop(key, None) is not None:
            self._persist(data)

    # --- File helpers ---------------------------------------------------------

    def _load(self, discard_corrupt: bool = False) -> dict[str, str]:
        if not self._file_path.exists():
            return {}
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except ValueError as exc:
            if discard_corrupt:
                return {}
            raise StorageError(f"Corrupt session file {self._file_path.name}") from exc
        if not isinstance(data, dict):
            if discard_corrupt:
                return {}
            raise StorageError(f"Corrupt session file {self._file_path.name}")
        return data

    def _persist(self, data: dict[str, str]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
