"""mimemagic core module exports."""

from .decoder import MAGIC_SIGNATURE, MagicDecoder, decode_bytes
from .errors import (
    ContentCorrupted,
    DecodeError,
    HeaderCorrupted,
    MagicError,
    MagicIOError,
    NotMagicFormat,
)
from .tokens import Cut, LineCursor, StreamExhausted, TokenError, cut, cut_qualifier, parse_uint
from .types import Content, Section, default_mask

__all__ = [
    "MAGIC_SIGNATURE",
    "MagicDecoder",
    "decode_bytes",
    "ContentCorrupted",
    "DecodeError",
    "HeaderCorrupted",
    "MagicError",
    "MagicIOError",
    "NotMagicFormat",
    "Cut",
    "LineCursor",
    "StreamExhausted",
    "TokenError",
    "cut",
    "cut_qualifier",
    "parse_uint",
    "Content",
    "Section",
    "default_mask",
]
