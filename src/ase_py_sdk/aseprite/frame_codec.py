from __future__ import annotations

import logging
from typing import Any

from ..errors import AseFormatError
from ..images.pixel_formats import PixelFormat
from ..stream.reader import ByteReader
from .chunk_codec import decode_chunk
from .model import Chunk, Frame


logger = logging.getLogger(__name__)

_CHUNK_SIZE_FIELD = 4


def decode_frame(reader: ByteReader, pixel_format: PixelFormat[Any]) -> Frame[Any]:
    """Decode one frame from the view bounded by its length prefix.

    Frame header (16 bytes, the length prefix already consumed):
    - magic: u16 (not checked)
    - legacy chunk count: u16
    - duration: u16 (ms)
    - reserved: 2 bytes
    - chunk count: u32 (0 on old files; the legacy count applies)
    """

    _magic = reader.read_u16()
    legacy_count = reader.read_u16()
    duration = reader.read_u16()
    reader.skip(2)
    chunk_count = reader.read_u32()
    if chunk_count == 0:
        chunk_count = legacy_count

    chunks: list[Chunk] = []
    for _ in range(chunk_count):
        declared = reader.read_u32()
        if declared < _CHUNK_SIZE_FIELD:
            raise AseFormatError(f"chunk length {declared} is smaller than its own size field")

        body = reader.bounded(declared - _CHUNK_SIZE_FIELD)
        chunk = decode_chunk(body, pixel_format)

        # Fields added by newer writers trail the ones decoded here.
        leftover = body.drain()
        if leftover:
            logger.debug("drained %d trailing bytes after chunk 0x%04x", leftover, chunk.chunk_type)
        chunks.append(chunk)

    return Frame(duration=duration, chunks=tuple(chunks))
