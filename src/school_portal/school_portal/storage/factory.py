from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.enums import Platform
from .base import KeyValueStorage
from .local_storage import LocalFileStorage
from .secure_storage import SecureFileStorage


@dataclass
class StorageFactory:
    """Factory Pattern: choose the storage adapter once, at startup."""

    directory: Path

    def for_platform(self, platform: Platform) -> KeyValueStorage:
        if platform == Platform.WEB:
            return LocalFileStorage(Path(self.directory) / "local_storage.json")
        return SecureFileStorage(Path(self.directory) / "secure")
