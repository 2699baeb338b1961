"""School Portal client package.

This package is organized by feature modules (auth, attendance, fees, ...)
around an explicit session store and a thin JSON gateway to the school
backend.
"""
from __future__ import annotations

from .container import ClientSettings, Container, build_container
from .main import create_client

__all__ = ["ClientSettings", "Container", "build_container", "create_client"]
