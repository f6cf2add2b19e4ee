"""Sequential little-endian readers over caller-supplied byte streams."""

from __future__ import annotations

from .bounded import BoundedReader
from .reader import ByteReader

__all__ = ["BoundedReader", "ByteReader"]
