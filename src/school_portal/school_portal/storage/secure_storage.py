from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from .base import KeyValueStorage

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class SecureFileStorage(KeyValueStorage):
    """On-device storage: one owner-only file per key in an owner-only directory."""

    DIR_MODE = 0o700
    FILE_MODE = 0o600

    def __init__(self, directory: Path):
        self._dir = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self._dir / f"{key}.secret"

    def _ensure_dir(self) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        os.chmod(self._dir, self.DIR_MODE)

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._ensure_dir()
        path = self._path_for(key)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(value)
        os.chmod(path, self.FILE_MODE)

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()
