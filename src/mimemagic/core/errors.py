"""Exception hierarchy for magic database decoding.

Format corruption and I/O failures are kept apart: callers can treat a
:class:`DecodeError` as "this file is not a usable rule set" while a
:class:`MagicIOError` still means the underlying stream misbehaved.
"""

from __future__ import annotations

from typing import Optional


class MagicError(Exception):
    """Base class for every error raised by :mod:`mimemagic`."""


class DecodeError(MagicError):
    """The stream does not follow the magic database grammar."""

    def __init__(self, reason: str, *, line_number: Optional[int] = None) -> None:
        self.reason = reason
        self.line_number = line_number
        if line_number is None:
            message = reason
        else:
            message = f"line {line_number}: {reason}"
        super().__init__(message)

    def __repr__(self) -> str:  # pragma: no cover - trivial wrapper
        return (
            f"{type(self).__name__}(reason={self.reason!r}, "
            f"line_number={self.line_number!r})"
        )


class NotMagicFormat(DecodeError):
    """The stream does not start with the ``MIME-Magic\\0\\n`` signature."""


class HeaderCorrupted(DecodeError):
    """A ``[priority:filetype]`` line is malformed or missing."""


class ContentCorrupted(DecodeError):
    """A content rule line is malformed or its payload is truncated."""


class MagicIOError(MagicError):
    """Represents an I/O failure raised by the underlying stream."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{self.source}: {self.reason}")

    def __repr__(self) -> str:  # pragma: no cover - trivial wrapper
        return f"MagicIOError(source={self.source!r}, reason={self.reason!r})"


def wrap_io_error(source: str, exc: OSError) -> MagicIOError:
    """Convert an ``OSError`` into :class:`MagicIOError`."""

    return MagicIOError(source=source, reason=str(exc))
