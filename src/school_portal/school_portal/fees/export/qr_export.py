from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from ...core.constants import QR_IMAGE_NAME
from ...core.exceptions import DomainError
from .launcher import UrlLauncher

logger = logging.getLogger(__name__)


class QrImageExporter(Protocol):
    def export(self, png: bytes) -> Path:
        raise NotImplementedError


class DownloadQrExporter(QrImageExporter):
    """Browser flavour: save the code into the downloads folder."""

    def __init__(self, directory: Path, filename: str = QR_IMAGE_NAME):
        self._directory = Path(directory)
        self._filename = filename

    def export(self, png: bytes) -> Path:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path = self._directory / self._filename
            path.write_bytes(png)
        except OSError as e:
            raise DomainError("Failed to download image", title="Some error occurred") from e
        logger.info("QR code saved to %s", path)
        return path


class ShareQrExporter(QrImageExporter):
    """Native flavour: write a cache file and pass it to the share handler."""

    def __init__(self, cache_dir: Path, launcher: UrlLauncher, filename: str = QR_IMAGE_NAME):
        self._cache_dir = Path(cache_dir)
        self._launcher = launcher
        self._filename = filename

    def export(self, png: bytes) -> Path:
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            path = self._cache_dir / self._filename
            path.write_bytes(png)
        except OSError as e:
            raise DomainError("Failed to download image", title="Some error occurred") from e
        if not self._launcher.open(path.resolve().as_uri()):
            raise DomainError("Failed to share image", title="Some error occurred")
        return path
