from __future__ import annotations

from .reader import ByteReader, Readable


_DRAIN_BLOCK = 64 * 1024


class BoundedReader(ByteReader):
    """A reader limited to the next `limit` bytes of its parent.

    Reads are clipped at the bound, so a field that would cross it fails
    with a truncation error instead of consuming the parent's next record.
    """

    __slots__ = ("_limit", "_remaining")

    def __init__(self, parent: Readable, limit: int) -> None:
        if limit < 0:
            raise ValueError("limit must be >= 0")
        super().__init__(parent)
        self._limit = int(limit)
        self._remaining = int(limit)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def consumed(self) -> int:
        return self._limit - self._remaining

    def read(self, size: int) -> bytes:
        size = min(int(size), self._remaining)
        if size <= 0:
            return b""
        data = self._stream.read(size)
        self._remaining -= len(data)
        return data

    def read_remaining(self) -> bytes:
        """Return every byte left inside the bound."""

        return self.read_exact(self._remaining)

    def drain(self) -> int:
        """Discard what is left inside the bound; returns the byte count."""

        drained = 0
        while self._remaining > 0:
            drained += len(self.read_exact(min(self._remaining, _DRAIN_BLOCK)))
        return drained
