"""Byte builders for hand-made sprite fixtures used across the tests."""

from __future__ import annotations

import io
import struct
import zlib

from ase_py_sdk.stream import BoundedReader, ByteReader


HEADER_MAGIC = 0xA5E0
FRAME_MAGIC = 0xF1FA


def string(text: str) -> bytes:
    return string_raw(text.encode("utf-8"))


def string_raw(raw: bytes) -> bytes:
    return struct.pack("<H", len(raw)) + raw


def header(
    *,
    frame_count: int,
    width: int = 16,
    height: int = 16,
    depth: int = 32,
    transparent_index: int = 0,
    color_count: int = 0,
) -> bytes:
    data = struct.pack(
        "<IHHHHHI10xB3xH94x",
        0,
        HEADER_MAGIC,
        frame_count,
        width,
        height,
        depth,
        1,
        transparent_index,
        color_count,
    )
    assert len(data) == 128
    return data


def chunk(chunk_type: int, body: bytes) -> bytes:
    # The declared size counts itself and the type tag.
    return struct.pack("<IH", 6 + len(body), chunk_type) + body


def chunk_view(chunk_type: int, body: bytes) -> BoundedReader:
    """A bounded view positioned at a chunk's type tag, as the frame decoder hands it over."""

    data = struct.pack("<H", chunk_type) + body
    return ByteReader(io.BytesIO(data)).bounded(len(data))


def frame(
    chunks: list[bytes],
    *,
    duration: int = 100,
    legacy_count: int | None = None,
    chunk_count: int | None = None,
) -> bytes:
    if legacy_count is None:
        legacy_count = min(len(chunks), 0xFFFF)
    if chunk_count is None:
        chunk_count = len(chunks)
    payload = struct.pack("<HHH2xI", FRAME_MAGIC, legacy_count, duration, chunk_count) + b"".join(chunks)
    # Frame length includes its own 4-byte field, as Aseprite writes it.
    return struct.pack("<I", 4 + len(payload)) + payload


def sprite(frames: list[bytes], **header_kwargs: int) -> bytes:
    return header(frame_count=len(frames), **header_kwargs) + b"".join(frames)


def layer_body(
    name: str,
    *,
    flags: int = 3,
    is_group: bool = False,
    child_level: int = 0,
    width: int = 0,
    height: int = 0,
    blend_mode: int = 0,
    opacity: int = 255,
) -> bytes:
    return struct.pack(
        "<HHHHHHB3x", flags, int(is_group), child_level, width, height, blend_mode, opacity
    ) + string(name)


def _cel_header(layer_index: int, x: int, y: int, opacity: int, cel_type: int) -> bytes:
    return struct.pack("<HhhBH7x", layer_index, x, y, opacity, cel_type)


def raw_cel_body(
    width: int, height: int, pixels: bytes, *, layer_index: int = 0, x: int = 0, y: int = 0, opacity: int = 255
) -> bytes:
    return _cel_header(layer_index, x, y, opacity, 0) + struct.pack("<HH", width, height) + pixels


def linked_cel_body(frame_index: int, *, layer_index: int = 0, x: int = 0, y: int = 0, opacity: int = 255) -> bytes:
    return _cel_header(layer_index, x, y, opacity, 1) + struct.pack("<H", frame_index)


def compressed_cel_body(
    width: int, height: int, pixels: bytes, *, layer_index: int = 0, x: int = 0, y: int = 0, opacity: int = 255
) -> bytes:
    return _cel_header(layer_index, x, y, opacity, 2) + struct.pack("<HH", width, height) + zlib.compress(pixels)


def cel_body_with_type(cel_type: int) -> bytes:
    return _cel_header(0, 0, 0, 255, cel_type) + struct.pack("<HH", 1, 1) + b"\x00" * 4


def frame_tags_body(tags: list[tuple[int, int, int, tuple[int, int, int], str]]) -> bytes:
    out = struct.pack("<H8x", len(tags))
    for from_frame, to_frame, loop_mode, color, name in tags:
        out += struct.pack("<HHB8x3Bx", from_frame, to_frame, loop_mode, *color) + string(name)
    return out


def palette_body(
    new_size: int, first: int, entries: list[tuple[tuple[int, int, int, int], str | None]], *, last: int | None = None
) -> bytes:
    if last is None:
        last = first + len(entries) - 1
    out = struct.pack("<III8x", new_size, first, last)
    for color, name in entries:
        out += struct.pack("<H4B", 1 if name is not None else 0, *color)
        if name is not None:
            out += string(name)
    return out


def user_data_body(*, text: str | None = None, color: tuple[int, int, int, int] | None = None) -> bytes:
    flags = (1 if text is not None else 0) | (2 if color is not None else 0)
    out = struct.pack("<I", flags)
    if text is not None:
        out += string(text)
    if color is not None:
        out += bytes(color)
    return out
