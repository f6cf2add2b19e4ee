from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from ..errors import AseFormatError
from ..images.pixel_formats import RgbaPixel, pixel_format_for_depth
from ..stream.reader import ByteReader, Readable
from .frame_codec import decode_frame
from .model import DOCUMENT_TYPES, ColorDepth, Document, Frame, PaletteChunk


logger = logging.getLogger(__name__)

HEADER_SIZE = 128
_FRAME_SIZE_FIELD = 4
_EMPTY_SLOT: RgbaPixel = (0, 0, 0, 0)


@dataclass(frozen=True, slots=True)
class DocumentHeader:
    file_size: int
    magic: int
    frame_count: int
    width: int
    height: int
    color_depth: int
    flags: int
    transparent_index: int
    color_count: int


def read_header(reader: ByteReader) -> DocumentHeader:
    """Read the fixed 128-byte file header.

    Layout:
    - file size: u32
    - magic: u16 (0xA5E0, not checked)
    - frame count, width, height, color depth: u16 each
    - flags: u32
    - reserved: 10 bytes (legacy speed + two zero dwords)
    - transparent palette index: u8
    - reserved: 3 bytes
    - color count: u16
    - reserved: 94 bytes (pixel ratio, grid, padding)
    """

    file_size = reader.read_u32()
    magic = reader.read_u16()
    frame_count = reader.read_u16()
    width = reader.read_u16()
    height = reader.read_u16()
    color_depth = reader.read_u16()
    flags = reader.read_u32()
    reader.skip(10)
    transparent_index = reader.read_u8()
    reader.skip(3)
    color_count = reader.read_u16()
    reader.skip(94)

    return DocumentHeader(
        file_size=file_size,
        magic=magic,
        frame_count=frame_count,
        width=width,
        height=height,
        color_depth=color_depth,
        flags=flags,
        transparent_index=transparent_index,
        color_count=color_count,
    )


def accumulate_palette(frames: Iterable[Frame[Any]]) -> tuple[RgbaPixel, ...]:
    """Apply every palette update, in order, to an initially empty palette."""

    palette: list[RgbaPixel] = []
    for frame in frames:
        for chunk in frame.chunks:
            if not isinstance(chunk, PaletteChunk):
                continue
            if chunk.new_size < len(palette):
                del palette[chunk.new_size :]
            else:
                palette.extend([_EMPTY_SLOT] * (chunk.new_size - len(palette)))
            for offset, entry in enumerate(chunk.entries):
                slot = chunk.first + offset
                if slot >= len(palette):
                    palette.extend([_EMPTY_SLOT] * (slot + 1 - len(palette)))
                palette[slot] = entry.color
    return tuple(palette)


def decode(source: Readable | bytes | bytearray | memoryview) -> Document:
    """Decode a whole sprite file into a `Document`.

    `source` is any readable binary stream (only sequential `read` is used)
    or an in-memory buffer. Fails with `AseFormatError` or
    `AseTruncatedError`; no partial document is ever returned.
    """

    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(source))

    reader = ByteReader(source)
    header = read_header(reader)
    pixel_format = pixel_format_for_depth(header.color_depth)
    document_type = DOCUMENT_TYPES[ColorDepth(header.color_depth)]

    logger.debug(
        "header: %dx%d depth=%d frames=%d",
        header.width,
        header.height,
        header.color_depth,
        header.frame_count,
    )

    frames: list[Frame[Any]] = []
    for _ in range(header.frame_count):
        length = reader.read_u32()
        if length < _FRAME_SIZE_FIELD:
            raise AseFormatError(f"frame length {length} is smaller than its own size field")

        # The declared length counts the length field itself.
        view = reader.bounded(length - _FRAME_SIZE_FIELD)
        frames.append(decode_frame(view, pixel_format))

        leftover = view.drain()
        if leftover:
            logger.debug("drained %d bytes after the chunks of frame %d", leftover, len(frames) - 1)

    return document_type(
        width=header.width,
        height=header.height,
        transparent_index=header.transparent_index,
        frames=tuple(frames),
        palette=accumulate_palette(frames),
    )
