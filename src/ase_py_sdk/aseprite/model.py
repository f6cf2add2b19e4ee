from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any, ClassVar, Generic, Union

from ..images.pixel_formats import (
    GRAYSCALE,
    INDEXED,
    RGBA,
    GrayscalePixel,
    IndexedPixel,
    PixelFormat,
    PixelT,
    RgbaPixel,
)


CHUNK_LAYER = 0x2004
CHUNK_CEL = 0x2005
CHUNK_FRAME_TAGS = 0x2018
CHUNK_PALETTE = 0x2019
CHUNK_USER_DATA = 0x2020


class ColorDepth(IntEnum):
    INDEXED = 8
    GRAYSCALE = 16
    RGBA = 32


class LayerFlags(IntFlag):
    VISIBLE = 1
    EDITABLE = 2
    LOCK_MOVEMENT = 4
    BACKGROUND = 8
    PREFER_LINKED_CELS = 16
    COLLAPSED = 32
    REFERENCE = 64


class BlendMode(IntEnum):
    NORMAL = 0
    MULTIPLY = 1
    SCREEN = 2
    OVERLAY = 3
    DARKEN = 4
    LIGHTEN = 5
    COLOR_DODGE = 6
    COLOR_BURN = 7
    HARD_LIGHT = 8
    SOFT_LIGHT = 9
    DIFFERENCE = 10
    EXCLUSION = 11
    HUE = 12
    SATURATION = 13
    COLOR = 14
    LUMINOSITY = 15
    ADDITION = 16
    SUBTRACT = 17
    DIVIDE = 18


class CelType(IntEnum):
    RAW = 0
    LINKED = 1
    COMPRESSED = 2


class LoopMode(IntEnum):
    FORWARD = 0
    REVERSE = 1
    PING_PONG = 2


@dataclass(frozen=True, slots=True)
class CelPixels(Generic[PixelT]):
    width: int
    height: int
    data: tuple[PixelT, ...]  # row-major, length = width*height


@dataclass(frozen=True, slots=True)
class CelLink:
    # Index of an earlier frame whose cel (same layer) holds the pixels.
    frame: int


CelData = Union[CelPixels[Any], CelLink]


@dataclass(frozen=True, slots=True)
class Cel(Generic[PixelT]):
    x: int
    y: int
    opacity: int
    cel_type: CelType
    data: CelPixels[PixelT] | CelLink


@dataclass(frozen=True, slots=True)
class FrameTag:
    from_frame: int
    to_frame: int
    loop_mode: LoopMode
    color: tuple[int, int, int]
    name: str


@dataclass(frozen=True, slots=True)
class ColorEntry:
    color: RgbaPixel
    name: str | None = None


@dataclass(frozen=True, slots=True)
class LayerChunk:
    chunk_type: ClassVar[int] = CHUNK_LAYER

    flags: int
    is_group: bool
    child_level: int
    width: int
    height: int
    blend_mode: int
    opacity: int
    name: str

    @property
    def visible(self) -> bool:
        return bool(self.flags & LayerFlags.VISIBLE)


@dataclass(frozen=True, slots=True)
class CelChunk(Generic[PixelT]):
    chunk_type: ClassVar[int] = CHUNK_CEL

    layer_index: int
    cel: Cel[PixelT]


@dataclass(frozen=True, slots=True)
class FrameTagsChunk:
    chunk_type: ClassVar[int] = CHUNK_FRAME_TAGS

    tags: tuple[FrameTag, ...]


@dataclass(frozen=True, slots=True)
class PaletteChunk:
    chunk_type: ClassVar[int] = CHUNK_PALETTE

    new_size: int
    first: int
    last: int  # inclusive
    entries: tuple[ColorEntry, ...]


@dataclass(frozen=True, slots=True)
class UserDataChunk:
    chunk_type: ClassVar[int] = CHUNK_USER_DATA

    text: str | None = None
    color: RgbaPixel | None = None


@dataclass(frozen=True, slots=True)
class UnsupportedChunk:
    """A chunk whose body was drained without being interpreted."""

    chunk_type: int
    size: int  # body bytes drained after the type tag


Chunk = Union[LayerChunk, CelChunk[Any], FrameTagsChunk, PaletteChunk, UserDataChunk, UnsupportedChunk]


@dataclass(frozen=True, slots=True)
class Frame(Generic[PixelT]):
    duration: int  # milliseconds
    chunks: tuple[Chunk, ...]

    def cels(self) -> list[CelChunk[PixelT]]:
        return [c for c in self.chunks if isinstance(c, CelChunk)]


@dataclass(frozen=True, slots=True)
class FormattedDocument(Generic[PixelT]):
    """A decoded sprite whose pixels all share one on-disk format."""

    color_depth: ClassVar[ColorDepth]
    pixel_format: ClassVar[PixelFormat[Any]]

    width: int
    height: int
    transparent_index: int  # only meaningful for indexed documents
    frames: tuple[Frame[PixelT], ...]
    palette: tuple[RgbaPixel, ...] = ()

    def layers(self) -> list[LayerChunk]:
        """Layer definitions, in layer-index order.

        Layers are declared in the first frame only.
        """

        if not self.frames:
            return []
        return [c for c in self.frames[0].chunks if isinstance(c, LayerChunk)]

    def tags(self) -> list[FrameTag]:
        out: list[FrameTag] = []
        for frame in self.frames:
            for chunk in frame.chunks:
                if isinstance(chunk, FrameTagsChunk):
                    out.extend(chunk.tags)
        return out

    def resolve_link(self, frame_index: int, layer_index: int) -> CelPixels[PixelT] | None:
        """Follow linked cels back to the frame that owns the pixels.

        Returns None when the layer has no cel in that frame, or when a link
        points at a missing frame or loops back on itself.
        """

        seen: set[int] = set()
        index = int(frame_index)
        while 0 <= index < len(self.frames) and index not in seen:
            seen.add(index)
            cel = next(
                (c.cel for c in self.frames[index].cels() if c.layer_index == layer_index),
                None,
            )
            if cel is None:
                return None
            if isinstance(cel.data, CelPixels):
                return cel.data
            index = cel.data.frame
        return None


@dataclass(frozen=True, slots=True)
class RgbaDocument(FormattedDocument[RgbaPixel]):
    color_depth: ClassVar[ColorDepth] = ColorDepth.RGBA
    pixel_format: ClassVar[PixelFormat[Any]] = RGBA


@dataclass(frozen=True, slots=True)
class GrayscaleDocument(FormattedDocument[GrayscalePixel]):
    color_depth: ClassVar[ColorDepth] = ColorDepth.GRAYSCALE
    pixel_format: ClassVar[PixelFormat[Any]] = GRAYSCALE


@dataclass(frozen=True, slots=True)
class IndexedDocument(FormattedDocument[IndexedPixel]):
    color_depth: ClassVar[ColorDepth] = ColorDepth.INDEXED
    pixel_format: ClassVar[PixelFormat[Any]] = INDEXED


Document = Union[RgbaDocument, GrayscaleDocument, IndexedDocument]

DOCUMENT_TYPES: dict[ColorDepth, type[FormattedDocument[Any]]] = {
    ColorDepth.RGBA: RgbaDocument,
    ColorDepth.GRAYSCALE: GrayscaleDocument,
    ColorDepth.INDEXED: IndexedDocument,
}
