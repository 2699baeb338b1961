from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from .container import ClientSettings, Container, build_container
from .core.enums import Platform

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_settings() -> ClientSettings:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    storage_dir = Path(getattr(settings, "STORAGE_DIR", ".school_portal"))
    return ClientSettings(
        backend_url=str(getattr(settings, "BACKEND_URL", "")),
        storage_dir=storage_dir,
        download_dir=Path(getattr(settings, "DOWNLOAD_DIR", storage_dir / "downloads")),
        platform=Platform(getattr(settings, "PLATFORM", Platform.WEB.value)),
        request_timeout=float(getattr(settings, "REQUEST_TIMEOUT", 15)),
        school_timezone=str(getattr(settings, "SCHOOL_TIMEZONE", "")),
        upi_payee_vpa=str(getattr(settings, "UPI_PAYEE_VPA", "")),
        upi_payee_name=str(getattr(settings, "UPI_PAYEE_NAME", "")),
        upi_note=str(getattr(settings, "UPI_NOTE", "Fee Payment")),
        currency=str(getattr(settings, "CURRENCY", "INR")),
    )


def create_client() -> Container:
    load_dotenv(override=False)
    settings_module = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings_module, "LOG_LEVEL", "INFO"))

    settings = load_settings()
    if getattr(settings_module, "DEBUG", False):
        logger.debug(
            "settings=%s backend=%s platform=%s storage=%s",
            settings_module.__name__, settings.backend_url, settings.platform.value, settings.storage_dir,
        )
    return build_container(settings=settings)
