from __future__ import annotations

from typing import Any, Optional, Protocol


class KeyValueStoragePort(Protocol):
    def get(self, key: str) -> Optional[Any]:
        """Return the JSON-compatible value stored under `key`, or None."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Overwrite the slot `key` with a JSON-compatible value."""
        ...
