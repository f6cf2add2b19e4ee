"""Decoder for the Aseprite sprite container (`.ase` / `.aseprite`).

Structure: a 128-byte header, then `frame_count` frames. Every frame and
every chunk inside it is length-prefixed; each level is decoded from a
bounded view of exactly the bytes it owns.
"""

from __future__ import annotations

from .chunk_codec import decode_chunk
from .document import DocumentHeader, accumulate_palette, decode, read_header
from .files import read_document
from .frame_codec import decode_frame
from .model import (
    BlendMode,
    Cel,
    CelChunk,
    CelData,
    CelLink,
    CelPixels,
    CelType,
    Chunk,
    ColorDepth,
    ColorEntry,
    Document,
    FormattedDocument,
    Frame,
    FrameTag,
    FrameTagsChunk,
    GrayscaleDocument,
    IndexedDocument,
    LayerChunk,
    LayerFlags,
    LoopMode,
    PaletteChunk,
    RgbaDocument,
    UnsupportedChunk,
    UserDataChunk,
)

__all__ = [
    "BlendMode",
    "Cel",
    "CelChunk",
    "CelData",
    "CelLink",
    "CelPixels",
    "CelType",
    "Chunk",
    "ColorDepth",
    "ColorEntry",
    "Document",
    "DocumentHeader",
    "FormattedDocument",
    "Frame",
    "FrameTag",
    "FrameTagsChunk",
    "GrayscaleDocument",
    "IndexedDocument",
    "LayerChunk",
    "LayerFlags",
    "LoopMode",
    "PaletteChunk",
    "RgbaDocument",
    "UnsupportedChunk",
    "UserDataChunk",
    "accumulate_palette",
    "decode",
    "decode_chunk",
    "decode_frame",
    "read_document",
    "read_header",
]
