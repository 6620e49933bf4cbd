"""A JSON file holding one table: a list of records.

Each ``write`` replaces the whole file atomically, so a record set is either
fully written or not at all. I/O and decode errors surface as StoreError,
which is what the remote-store repositories promise their callers.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from storefront.domain.exceptions import StoreError


class JsonTable:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def read(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {self._file_path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise StoreError(f"Cannot read {self._file_path.name}: expected a list")
        return records

    def write(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self._file_path)
        except OSError as exc:
            raise StoreError(f"Cannot write {self._file_path.name}: {exc}") from exc

    def append(self, *new_records: dict) -> None:
        self.write(self.read() + list(new_records))

    def next_id(self) -> int:
        records = self.read()
        if not records:
            return 1
        return max(r["id"] for r in records) + 1

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Cannot create {self._file_path}: {exc}") from exc
