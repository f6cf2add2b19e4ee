from __future__ import annotations

import struct
from typing import TYPE_CHECKING, Protocol

from ..errors import AseFormatError, AseTruncatedError


_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")


class Readable(Protocol):
    def read(self, size: int = -1, /) -> bytes: ...


class ByteReader:
    """Pull-style field reader over any object with a `read(n)` method.

    The stream only needs sequential access; nothing here seeks.
    """

    __slots__ = ("_stream",)

    def __init__(self, stream: Readable) -> None:
        self._stream = stream

    def read(self, size: int) -> bytes:
        """Return up to `size` bytes; fewer only at end of stream."""

        return self._stream.read(size)

    def read_exact(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must be >= 0")
        if size == 0:
            return b""

        data = self.read(size)
        if len(data) == size:
            return data

        # Non-seekable streams (pipes, sockets) may hand back short reads.
        buf = bytearray(data)
        while len(buf) < size:
            more = self.read(size - len(buf))
            if not more:
                raise AseTruncatedError(
                    f"stream ended after {len(buf)} of {size} bytes",
                    expected=size,
                    got=len(buf),
                )
            buf += more
        return bytes(buf)

    def skip(self, size: int) -> None:
        """Consume `size` reserved bytes."""

        self.read_exact(size)

    def read_u8(self) -> int:
        return self.read_exact(1)[0]

    def read_u16(self) -> int:
        return _U16.unpack(self.read_exact(2))[0]

    def read_i16(self) -> int:
        return _I16.unpack(self.read_exact(2))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read_exact(4))[0]

    def read_color3(self) -> tuple[int, int, int]:
        r, g, b = self.read_exact(3)
        return r, g, b

    def read_color4(self) -> tuple[int, int, int, int]:
        r, g, b, a = self.read_exact(4)
        return r, g, b, a

    def read_string(self) -> str:
        """Read a u16 length followed by that many UTF-8 bytes."""

        length = self.read_u16()
        raw = self.read_exact(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AseFormatError(f"string field is not valid UTF-8: {raw!r}") from e

    def bounded(self, size: int) -> "BoundedReader":
        """Return a view exposing only the next `size` bytes of this reader."""

        from .bounded import BoundedReader

        return BoundedReader(self, size)


if TYPE_CHECKING:
    from .bounded import BoundedReader
