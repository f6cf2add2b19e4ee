from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from ..errors import AseFormatError
from ..stream.reader import ByteReader


RgbaPixel = tuple[int, int, int, int]
GrayscalePixel = tuple[int, int]  # (value, alpha)
IndexedPixel = int

PixelT = TypeVar("PixelT")


class PixelFormat(ABC, Generic[PixelT]):
    """How one pixel unit is stored on disk.

    Frame, chunk and cel decoding are written once against this interface;
    only the unit width differs between the three formats.
    """

    name: str = ""
    size: int = 0
    depth: int = 0

    @abstractmethod
    def unpack(self, raw: bytes) -> list[PixelT]:
        """Split `raw` (a multiple of `size` bytes) into pixel units."""

    def read(self, reader: ByteReader) -> PixelT:
        return self.unpack(reader.read_exact(self.size))[0]

    def read_many(self, reader: ByteReader, count: int) -> tuple[PixelT, ...]:
        if count <= 0:
            return ()
        return tuple(self.unpack(reader.read_exact(count * self.size)))

    def __repr__(self) -> str:
        return f"<PixelFormat {self.name} ({self.size} bytes)>"


class RgbaFormat(PixelFormat[RgbaPixel]):
    name = "rgba"
    size = 4
    depth = 32

    def unpack(self, raw: bytes) -> list[RgbaPixel]:
        it = iter(raw)
        return list(zip(it, it, it, it))


class GrayscaleFormat(PixelFormat[GrayscalePixel]):
    name = "grayscale"
    size = 2
    depth = 16

    def unpack(self, raw: bytes) -> list[GrayscalePixel]:
        it = iter(raw)
        return list(zip(it, it))


class IndexedFormat(PixelFormat[IndexedPixel]):
    name = "indexed"
    size = 1
    depth = 8

    def unpack(self, raw: bytes) -> list[IndexedPixel]:
        return list(raw)


RGBA = RgbaFormat()
GRAYSCALE = GrayscaleFormat()
INDEXED = IndexedFormat()

_BY_DEPTH: dict[int, PixelFormat[Any]] = {f.depth: f for f in (RGBA, GRAYSCALE, INDEXED)}


def pixel_format_for_depth(depth: int) -> PixelFormat[Any]:
    try:
        return _BY_DEPTH[int(depth)]
    except KeyError:
        raise AseFormatError(f"unsupported color depth {depth} (expected 8, 16 or 32)") from None
