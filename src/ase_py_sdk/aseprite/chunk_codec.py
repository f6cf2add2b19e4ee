from __future__ import annotations

import io
import logging
import zlib
from typing import Any, Callable

from ..errors import AseFormatError
from ..images.pixel_formats import PixelFormat
from ..stream.bounded import BoundedReader
from ..stream.reader import ByteReader
from .model import (
    CHUNK_CEL,
    CHUNK_FRAME_TAGS,
    CHUNK_LAYER,
    CHUNK_PALETTE,
    CHUNK_USER_DATA,
    Cel,
    CelChunk,
    CelLink,
    CelPixels,
    CelType,
    Chunk,
    ColorEntry,
    FrameTag,
    FrameTagsChunk,
    LayerChunk,
    LoopMode,
    PaletteChunk,
    UnsupportedChunk,
    UserDataChunk,
)


logger = logging.getLogger(__name__)

_PALETTE_ENTRY_HAS_NAME = 0x1
_USER_DATA_HAS_TEXT = 0x1
_USER_DATA_HAS_COLOR = 0x2


def _decode_layer(reader: BoundedReader, pixel_format: PixelFormat[Any]) -> LayerChunk:
    flags = reader.read_u16()
    is_group = reader.read_u16() != 0
    child_level = reader.read_u16()
    width = reader.read_u16()
    height = reader.read_u16()
    blend_mode = reader.read_u16()
    opacity = reader.read_u8()
    reader.skip(3)
    name = reader.read_string()
    return LayerChunk(
        flags=flags,
        is_group=is_group,
        child_level=child_level,
        width=width,
        height=height,
        blend_mode=blend_mode,
        opacity=opacity,
        name=name,
    )


def _inflate(raw: bytes, size: int) -> bytes:
    """Inflate at most `size` bytes of `raw`.

    A truncated stream yields what it holds; the short pixel read afterwards
    reports the truncation.
    """

    if size <= 0:
        return b""
    d = zlib.decompressobj()
    try:
        return d.decompress(raw, size)
    except zlib.error as e:
        raise AseFormatError(f"cel pixel data is not a valid zlib stream: {e}") from e


def _decode_cel(reader: BoundedReader, pixel_format: PixelFormat[Any]) -> CelChunk[Any]:
    layer_index = reader.read_u16()
    x = reader.read_i16()
    y = reader.read_i16()
    opacity = reader.read_u8()
    raw_type = reader.read_u16()

    try:
        cel_type = CelType(raw_type)
    except ValueError:
        raise AseFormatError(f"unknown cel type {raw_type}") from None

    reader.skip(7)

    data: CelPixels[Any] | CelLink
    if cel_type is CelType.LINKED:
        data = CelLink(frame=reader.read_u16())
    else:
        width = reader.read_u16()
        height = reader.read_u16()
        count = width * height
        if cel_type is CelType.RAW:
            pixels = pixel_format.read_many(reader, count)
        else:
            # The whole remainder of the chunk is the compressed payload,
            # so reading it also leaves the bounded view exhausted.
            inflated = ByteReader(io.BytesIO(_inflate(reader.read_remaining(), count * pixel_format.size)))
            pixels = pixel_format.read_many(inflated, count)
        data = CelPixels(width=width, height=height, data=pixels)

    return CelChunk(
        layer_index=layer_index,
        cel=Cel(x=x, y=y, opacity=opacity, cel_type=cel_type, data=data),
    )


def _decode_frame_tags(reader: BoundedReader, pixel_format: PixelFormat[Any]) -> FrameTagsChunk:
    count = reader.read_u16()
    reader.skip(8)

    tags: list[FrameTag] = []
    for _ in range(count):
        from_frame = reader.read_u16()
        to_frame = reader.read_u16()
        raw_loop = reader.read_u8()
        try:
            loop_mode = LoopMode(raw_loop)
        except ValueError:
            raise AseFormatError(f"unknown tag loop mode {raw_loop}") from None
        reader.skip(8)
        color = reader.read_color3()
        reader.skip(1)
        name = reader.read_string()
        tags.append(
            FrameTag(from_frame=from_frame, to_frame=to_frame, loop_mode=loop_mode, color=color, name=name)
        )

    return FrameTagsChunk(tags=tuple(tags))


def _decode_palette(reader: BoundedReader, pixel_format: PixelFormat[Any]) -> PaletteChunk:
    new_size = reader.read_u32()
    first = reader.read_u32()
    last = reader.read_u32()
    reader.skip(8)

    if last < first:
        raise AseFormatError(f"palette update range is inverted ({first}..{last})")

    entries: list[ColorEntry] = []
    for _ in range(last - first + 1):
        flags = reader.read_u16()
        color = reader.read_color4()
        name = reader.read_string() if flags & _PALETTE_ENTRY_HAS_NAME else None
        entries.append(ColorEntry(color=color, name=name))

    return PaletteChunk(new_size=new_size, first=first, last=last, entries=tuple(entries))


def _decode_user_data(reader: BoundedReader, pixel_format: PixelFormat[Any]) -> UserDataChunk:
    flags = reader.read_u32()
    text = reader.read_string() if flags & _USER_DATA_HAS_TEXT else None
    color = reader.read_color4() if flags & _USER_DATA_HAS_COLOR else None
    return UserDataChunk(text=text, color=color)


_DECODERS: dict[int, Callable[[BoundedReader, PixelFormat[Any]], Chunk]] = {
    CHUNK_LAYER: _decode_layer,
    CHUNK_CEL: _decode_cel,
    CHUNK_FRAME_TAGS: _decode_frame_tags,
    CHUNK_PALETTE: _decode_palette,
    CHUNK_USER_DATA: _decode_user_data,
}


def decode_chunk(reader: BoundedReader, pixel_format: PixelFormat[Any]) -> Chunk:
    """Decode one chunk body (type tag onward) from its bounded view.

    Recognized bodies:
    - 0x2004 layer definition
    - 0x2005 cel (raw, linked or zlib-compressed pixels)
    - 0x2018 frame tags
    - 0x2019 palette update
    - 0x2020 user data

    Any other tag, including legacy palettes (0x0004, 0x0011), cel extras
    (0x2006) and slices (0x2022), becomes an `UnsupportedChunk` and the rest
    of the view is drained.
    """

    chunk_type = reader.read_u16()
    decoder = _DECODERS.get(chunk_type)
    if decoder is None:
        size = reader.drain()
        logger.debug("skipped unsupported chunk 0x%04x (%d bytes)", chunk_type, size)
        return UnsupportedChunk(chunk_type=chunk_type, size=size)
    return decoder(reader, pixel_format)
