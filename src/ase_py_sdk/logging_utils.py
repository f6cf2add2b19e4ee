from __future__ import annotations

import logging
from pathlib import Path

from .settings import AseSdkSettings


def configure_logging(level: str | None = None, log_file: Path | None = None) -> None:
    """Install root handlers for scripts built on the SDK.

    `level` defaults to `AseSdkSettings.load().log_level` (`ASE_LOG_LEVEL`).
    The decoder only emits DEBUG records; nothing in the library calls this.
    """

    if level is None:
        level = AseSdkSettings.load().log_level

    resolved_level = getattr(logging, level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=handlers,
        force=True,
    )
