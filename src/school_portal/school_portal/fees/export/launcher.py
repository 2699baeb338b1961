from __future__ import annotations

import logging
import webbrowser
from typing import Protocol

logger = logging.getLogger(__name__)


class UrlLauncher(Protocol):
    def open(self, url: str) -> bool:
        """Hand ``url`` to the platform; False when nothing can handle it."""

        raise NotImplementedError


class WebBrowserLauncher(UrlLauncher):
    """Dispatch through the desktop's registered URL handlers."""

    def open(self, url: str) -> bool:
        try:
            return bool(webbrowser.open(url))
        except webbrowser.Error as e:
            logger.warning("No handler for %s: %s", url.split(":", 1)[0], e)
            return False
