"""mimemagic: decoder for the shared-mime-info ``magic`` database.

The package turns the binary ``/usr/share/mime/magic`` file into ordered
:class:`Section` records, each holding the :class:`Content` byte rules a
matching engine would evaluate. It does not sniff files itself.
"""

from __future__ import annotations

from .core import (
    MAGIC_SIGNATURE,
    Content,
    ContentCorrupted,
    DecodeError,
    HeaderCorrupted,
    MagicDecoder,
    MagicError,
    MagicIOError,
    NotMagicFormat,
    Section,
    decode_bytes,
)
from .database import candidate_paths, locate_database, open_database, read_sections

__all__ = [
    "MAGIC_SIGNATURE",
    "Content",
    "ContentCorrupted",
    "DecodeError",
    "HeaderCorrupted",
    "MagicDecoder",
    "MagicError",
    "MagicIOError",
    "NotMagicFormat",
    "Section",
    "decode_bytes",
    "candidate_paths",
    "locate_database",
    "open_database",
    "read_sections",
]
