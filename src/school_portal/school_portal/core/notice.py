from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Notice:
    """Success confirmation handed back to the screen (rendered as a toast)."""

    title: str
    message: str = ""
    kind: str = "success"
