from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from filmfinder.application.ports.key_value_storage_port import KeyValueStoragePort

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStoragePort):
    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(initial or {}))

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileKeyValueStore(KeyValueStoragePort):
    """Named slots kept in one JSON object file.

    Reads tolerate a missing or corrupt file (treated as empty). Writes replace
    the file atomically so a crash mid-write leaves the previous version.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_unlocked(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("state file %s unreadable (%s); treating as empty", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("state file %s does not hold a JSON object; treating as empty", self._path)
            return {}
        return raw

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._read_unlocked().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read_unlocked()
            data[key] = value
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=str(self._path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
