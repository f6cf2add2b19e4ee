from __future__ import annotations

from pathlib import Path

from ..settings import AseSdkSettings
from .document import decode
from .model import Document


def read_document(path: str | Path, *, settings: AseSdkSettings | None = None) -> Document:
    """Open and decode a `.ase`/`.aseprite` file.

    Relative paths are resolved against `settings.sprites_dir` when given.
    """

    p = settings.resolve(path) if settings is not None else Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(p))

    with p.open("rb") as f:
        return decode(f)
