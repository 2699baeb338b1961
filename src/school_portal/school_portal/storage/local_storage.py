from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .base import KeyValueStorage

logger = logging.getLogger(__name__)


class LocalFileStorage(KeyValueStorage):
    """Browser-style storage: every key lives in one plain JSON document.

    Each write rewrites the whole document, so concurrent writers are
    last-write-wins.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt storage file %s", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def _write_all(self, items: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self._path)

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def delete(self, key: str) -> None:
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)
