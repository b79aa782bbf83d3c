"""Low-level cutting helpers shared by the header and content parsers.

Every helper takes the unconsumed slice and hands back what is left, so the
parsers never share a mutable buffer. :class:`LineCursor` is the only object
that touches the stream.

Example
-------
>>> cut(b"12>0=", b">")
Cut(before=b'12', after=b'0=', found=True)
>>> cut(b"0=", b">").found
False
>>> cut_qualifier(b"abc+x", b"+").found
False
>>> parse_uint(b"4096")
4096
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO

from .errors import wrap_io_error

logger = logging.getLogger(__name__)

_UINT_BITS = 32


class TokenError(ValueError):
    """Raised when a field cannot be cut or parsed."""


class StreamExhausted(TokenError):
    """Raised when a payload needs more bytes than the stream holds."""


@dataclass(frozen=True)
class Cut:
    """Result of splitting a buffer at the first delimiter.

    ``found`` is ``False`` when the delimiter is absent; ``before`` then holds
    the whole buffer and ``after`` is empty. An empty ``before`` with
    ``found=True`` means the field was present but blank.
    """

    before: bytes
    after: bytes
    found: bool


def cut(buffer: bytes, delimiter: bytes) -> Cut:
    before, sep, after = bytes(buffer).partition(delimiter)
    return Cut(before=before, after=after, found=bool(sep))


def cut_qualifier(buffer: bytes, delimiter: bytes) -> Cut:
    """Cut at ``delimiter`` only when a decimal digit follows it.

    Qualifier bytes may legitimately appear as data; a delimiter that is not
    followed by a digit is reported as not found and the buffer stays whole.
    """

    result = cut(buffer, delimiter)
    if result.found and result.after[:1].isdigit():
        return result
    return Cut(before=bytes(buffer), after=b"", found=False)


def parse_uint(token: bytes, *, bits: int = _UINT_BITS) -> int:
    """Parse an unsigned base-10 integer that fits in ``bits`` bits."""

    token = bytes(token)
    if not token:
        raise TokenError("empty numeric field")
    # bytes.isdigit() only accepts ASCII digits, unlike int() which also
    # tolerates signs, underscores and whitespace.
    if not token.isdigit():
        raise TokenError(f"non-decimal numeric field {token!r}")
    value = int(token)
    if value >= 1 << bits:
        raise TokenError(f"numeric field {token!r} overflows {bits} bits")
    return value


class LineCursor:
    """Forward-only cursor reading ``\\n``-terminated lines from a stream."""

    def __init__(self, stream: BinaryIO, *, source: str = "<stream>") -> None:
        self._stream = stream
        self.source = source
        self.line_number = 0

    def read(self, size: int) -> bytes:
        try:
            return self._stream.read(size)
        except OSError as exc:
            raise wrap_io_error(self.source, exc) from exc

    def read_line(self) -> bytes:
        """Return the next line with its terminator, or ``b""`` at the end."""

        try:
            line = self._stream.readline()
        except OSError as exc:
            raise wrap_io_error(self.source, exc) from exc
        if line:
            self.line_number += 1
        return bytes(line)

    def pull(self, buffer: bytes) -> bytes:
        """Append the next raw line to ``buffer``.

        Used when a length-prefixed payload contains ``\\n`` bytes and so was
        split across what ``readline`` considers separate lines.
        """

        line = self.read_line()
        if not line:
            raise StreamExhausted("stream ended inside a length-prefixed payload")
        logger.debug("Pulled continuation line %d: %r", self.line_number, line)
        return bytes(buffer) + line

    def pull_until(self, buffer: bytes, size: int) -> bytes:
        """Pull lines until ``buffer`` holds at least ``size`` bytes."""

        while len(buffer) < size:
            buffer = self.pull(buffer)
        return buffer
