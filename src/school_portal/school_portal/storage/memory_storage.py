from __future__ import annotations

from typing import Dict, Optional

from .base import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Process-local storage used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def delete(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self):
        return sorted(self._items)
