from __future__ import annotations


class AseSdkError(Exception):
    """Base exception for ase-py-sdk."""


class AseFormatError(AseSdkError):
    """Raised when a sprite file holds a value the decoder cannot interpret."""


class AseTruncatedError(AseSdkError, EOFError):
    """Raised when the stream (or a bounded view of it) ends mid-field."""

    def __init__(self, message: str, *, expected: int = 0, got: int = 0) -> None:
        super().__init__(message)
        self.expected = expected
        self.got = got
