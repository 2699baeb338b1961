from __future__ import annotations

import logging
import threading
from typing import Callable, List

from ..core.exceptions import WorkflowCancelled

logger = logging.getLogger(__name__)


class CancellationScope:
    """Lifetime token shared by a workflow instance and its pending calls.

    Once cancelled, ``check()`` raises so late responses never reach state
    owned by a discarded screen.
    """

    def __init__(self, name: str = "workflow"):
        self._name = name
        self._event = threading.Event()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def on_cancel(self, callback: Callable[[], None]) -> None:
        if self.cancelled:
            callback()
            return
        self._callbacks.append(callback)

    def cancel(self) -> None:
        if self.cancelled:
            return
        self._event.set()
        logger.debug("%s cancelled", self._name)
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def check(self) -> None:
        if self.cancelled:
            raise WorkflowCancelled(f"{self._name} was closed before the response arrived")
