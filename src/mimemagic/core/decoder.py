"""Decoder for the shared-mime-info ``magic`` database.

The file mixes ASCII structure with raw length-prefixed payloads::

    MIME-Magic\\0\\n
    [50:application/pdf]\\n
    >0=\\x00\\x05%PDF-\\n
    1>1024=\\x00\\x02PK&\\xff\\xff~2+16\\n

Section headers and the fields in front of ``=`` are delimiter driven. Once the
two-byte big-endian length has been read, value and mask bytes are consumed by
count only: they may contain ``\\n``, ``&``, ``~`` or ``+`` and a ``readline``
boundary inside a payload just means another line has to be pulled.

Examples
--------
>>> sections = decode_bytes(b"MIME-Magic\\x00\\n[50:text/plain]\\n>0=\\x00\\x04test\\n")
>>> sections[0].filetype, sections[0].priority
('text/plain', 50)
>>> rule = sections[0].contents[0]
>>> rule.value, rule.mask.hex(), rule.range_length, rule.word_size
(b'test', 'ffffffff', 1, 1)
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, List, Optional, Tuple

from .errors import ContentCorrupted, HeaderCorrupted, NotMagicFormat, wrap_io_error
from .tokens import LineCursor, StreamExhausted, TokenError, cut, cut_qualifier, parse_uint
from .types import Content, Section

logger = logging.getLogger(__name__)

MAGIC_SIGNATURE = b"MIME-Magic\x00\n"

_HEADER_OPEN = b"["
_HEADER_CLOSE = b"]\n"


class MagicDecoder:
    """Decode one magic database stream into an ordered list of sections.

    The decoder owns ``stream`` from construction on: :meth:`close` (or
    leaving a ``with`` block) closes it. A decoder is single use and must not
    be shared between threads.

    Example
    -------
    >>> import io
    >>> payload = b"MIME-Magic\\x00\\n[80:image/png]\\n>0=\\x00\\x04\\x89PNG\\n"
    >>> with MagicDecoder.open(io.BytesIO(payload)) as decoder:
    ...     [section.filetype for section in decoder.decode()]
    ['image/png']
    """

    def __init__(self, stream: BinaryIO, *, source: Optional[str] = None) -> None:
        if source is None:
            source = str(getattr(stream, "name", "<stream>"))
        self._stream = stream
        self._cursor = LineCursor(stream, source=source)
        self._signature_checked = False
        self._closed = False

    @classmethod
    def open(cls, stream: BinaryIO, *, source: Optional[str] = None) -> "MagicDecoder":
        """Wrap ``stream`` and validate its signature.

        Raises:
            NotMagicFormat: The stream does not start with ``MIME-Magic\\0\\n``.
        """

        decoder = cls(stream, source=source)
        decoder.check_signature()
        return decoder

    @property
    def source(self) -> str:
        return self._cursor.source

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "MagicDecoder":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying stream. Repeated calls are no-ops."""

        if self._closed:
            return
        self._closed = True
        try:
            self._stream.close()
        except OSError as exc:
            raise wrap_io_error(self.source, exc) from exc

    def check_signature(self) -> None:
        if self._signature_checked:
            return
        signature = self._cursor.read(len(MAGIC_SIGNATURE))
        if signature != MAGIC_SIGNATURE:
            logger.debug("Unexpected signature %r in %s", signature, self.source)
            raise NotMagicFormat(f"{self.source} is not a MIME magic file")
        self._signature_checked = True

    def decode(self) -> List[Section]:
        """Decode the remainder of the stream.

        Raises:
            NotMagicFormat: The signature check fails.
            HeaderCorrupted: A header is malformed, a rule precedes every
                header, or a section ends without rules.
            ContentCorrupted: A rule line is malformed or truncated.
            MagicIOError: Reading from the stream failed.
        """

        if self._closed:
            raise ValueError("decode() called on a closed MagicDecoder")
        self.check_signature()

        sections: List[Section] = []
        current: Optional[Section] = None
        header_line = 0

        while True:
            line = self._cursor.read_line()
            if not line:
                break
            logger.debug("Read line %d: %r", self._cursor.line_number, line)

            if line.startswith(_HEADER_OPEN):
                _ensure_rules(current, header_line)
                header_line = self._cursor.line_number
                current = self._read_header(line)
                sections.append(current)
                continue

            if current is None:
                logger.debug("Found rule line, expected section header")
                raise HeaderCorrupted(
                    "content rule found before any section header",
                    line_number=self._cursor.line_number,
                )
            current.contents.append(self._read_content(line))

        _ensure_rules(current, header_line)
        logger.debug("Decoded %d section(s) from %s", len(sections), self.source)
        return sections

    def _read_header(self, line: bytes) -> Section:
        line_number = self._cursor.line_number
        if not line.endswith(_HEADER_CLOSE):
            raise HeaderCorrupted(
                "section header is not terminated by ']'", line_number=line_number
            )

        fields = cut(line[len(_HEADER_OPEN) : -len(_HEADER_CLOSE)], b":")
        if not fields.found:
            logger.debug("Failed to read section header %r", line)
            raise HeaderCorrupted(
                "section header has no ':' separator", line_number=line_number
            )

        try:
            priority = parse_uint(fields.before)
        except TokenError as exc:
            raise HeaderCorrupted(
                f"invalid section priority: {exc}", line_number=line_number
            ) from exc

        try:
            filetype = fields.after.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HeaderCorrupted(
                f"section filetype is not valid UTF-8: {fields.after!r}",
                line_number=line_number,
            ) from exc

        return Section(filetype=filetype, priority=priority)

    def _read_content(self, line: bytes) -> Content:
        line_number = self._cursor.line_number
        try:
            return self._parse_content(line)
        except TokenError as exc:
            logger.debug("Failed to read rule starting at line %d: %s", line_number, exc)
            raise ContentCorrupted(str(exc), line_number=line_number) from exc

    def _parse_content(self, line: bytes) -> Content:
        indent_field = cut(line, b">")
        if not indent_field.found:
            raise TokenError("rule has no '>' offset marker")
        indent = parse_uint(indent_field.before) if indent_field.before else 0

        offset_field = cut(indent_field.after, b"=")
        if not offset_field.found:
            raise TokenError("rule has no '=' value marker")
        offset = parse_uint(offset_field.before)

        length, rest = self._take_length(offset_field.after)
        value, rest = self._take_payload(rest, length)
        logger.debug("Rule value has %d byte(s), %d byte(s) left: %r", length, len(rest), rest)

        mask: Optional[bytes] = None
        if rest.startswith(b"&"):
            mask, rest = self._take_payload(rest[1:], length)

        if not rest.endswith(b"\n"):
            raise StreamExhausted("rule is not terminated by a newline")
        tail = rest[:-1]

        range_field = cut_qualifier(tail, b"+")
        range_length = parse_uint(range_field.after) if range_field.found else 1

        word_field = cut_qualifier(range_field.before, b"~")
        word_size = parse_uint(word_field.after) if word_field.found else 1

        if word_field.before:
            raise TokenError(f"unexpected bytes after rule payload: {word_field.before!r}")

        return Content(
            indent=indent,
            offset=offset,
            value=value,
            mask=mask,
            range_length=range_length,
            word_size=word_size,
        )

    def _take_length(self, buffer: bytes) -> Tuple[int, bytes]:
        buffer = self._cursor.pull_until(buffer, 2)
        return int.from_bytes(buffer[:2], "big"), buffer[2:]

    def _take_payload(self, buffer: bytes, size: int) -> Tuple[bytes, bytes]:
        """Split ``size`` payload bytes off ``buffer``, pulling lines as needed.

        When the payload ends exactly where ``readline`` stopped, its last byte
        was a ``\\n`` and the real line terminator has not been read yet.
        """

        buffer = self._cursor.pull_until(buffer, size)
        payload, rest = buffer[:size], buffer[size:]
        if not rest:
            rest = self._cursor.pull(rest)
        return payload, rest


def _ensure_rules(section: Optional[Section], header_line: int) -> None:
    if section is not None and not section.contents:
        raise HeaderCorrupted(
            f"section {section.filetype!r} has no content rules",
            line_number=header_line,
        )


def decode_bytes(data: bytes, *, source: str = "<bytes>") -> List[Section]:
    """Decode an in-memory magic database."""

    with MagicDecoder(io.BytesIO(data), source=source) as decoder:
        return decoder.decode()
