from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AseSdkSettings:
    """Simple settings for tool authors.

    Design goals:
    - No required dependencies.
    - Works with plain environment variables (CI-friendly).
    - Optionally supports `.env` if `python-dotenv` is installed.

    Recommended env vars:
    - `ASE_DIR`: folder holding `.ase`/`.aseprite` sources.
    - `ASE_OUTPUT_DIR`: default output directory for exports.
    - `ASE_LOG_LEVEL`: level name passed to `configure_logging`.

    Paths can include placeholders:
    - `{ase_dir}` expands to the resolved ASE_DIR.
    """

    sprites_dir: Path | None = None
    output_dir: Path | None = None
    log_level: str = "INFO"

    @staticmethod
    def _expand_placeholders(value: str, *, sprites_dir: Path | None) -> str:
        if sprites_dir is not None:
            value = value.replace("{ase_dir}", str(sprites_dir))
        return value

    @classmethod
    def load(cls, *, dotenv_path: str | Path | None = None) -> "AseSdkSettings":
        """Load settings from env vars (and optionally a `.env`).

        If `python-dotenv` is available, this will load the `.env` file into the
        environment first.
        """

        if dotenv_path is None:
            dotenv_path = ".env"

        try:
            from dotenv import load_dotenv  # type: ignore
        except ImportError:
            load_dotenv = None

        if load_dotenv is not None and Path(dotenv_path).is_file():
            load_dotenv(dotenv_path=dotenv_path, override=False)

        raw_dir = os.getenv("ASE_DIR")
        sprites_dir = Path(raw_dir).expanduser() if raw_dir else None

        raw_out = os.getenv("ASE_OUTPUT_DIR")
        if raw_out and sprites_dir is not None:
            raw_out = cls._expand_placeholders(raw_out, sprites_dir=sprites_dir)
        output_dir = Path(raw_out).expanduser() if raw_out else None

        log_level = (os.getenv("ASE_LOG_LEVEL") or "INFO").strip().upper() or "INFO"

        return cls(sprites_dir=sprites_dir, output_dir=output_dir, log_level=log_level)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a sprite path, relative ones against `sprites_dir`."""

        p = Path(path).expanduser()
        if p.is_absolute() or self.sprites_dir is None:
            return p
        return self.sprites_dir / p
