# src/redshift_dashboard/session/local_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    String key-value storage persisted as a single JSON object file.

    Semantics follow browser localStorage: values are strings, missing keys
    read as None, removing a missing key is a no-op.

    The file holds credentials, so writes are atomic (tmp + os.replace) and
    the file is made private on disk (best-effort).
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data: Any = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Local storage at %s is unreadable, treating it as empty.", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage at %s is not a JSON object, treating it as empty.", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(Exception):
            os.chmod(self._path, 0o600)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)

