"""ase-py-sdk: read-only decoder for Aseprite sprite files.

Core concept: a file is a header plus frames; frames hold typed,
length-prefixed chunks (layers, cels, tags, palette, user data).
"""

from __future__ import annotations

from .aseprite import Document, decode, read_document
from .errors import AseFormatError, AseSdkError, AseTruncatedError
from .settings import AseSdkSettings

__all__ = [
    "__version__",
    "AseFormatError",
    "AseSdkError",
    "AseSdkSettings",
    "AseTruncatedError",
    "Document",
    "decode",
    "read_document",
]

__version__ = "0.1.0"
