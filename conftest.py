"""Shared fixtures: a hand-built writer for the magic database wire format.

The package only decodes; tests build their inputs from ``Section`` models
with this writer so round trips and payload boundary cases stay readable.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import pytest

from mimemagic.core.decoder import MAGIC_SIGNATURE
from mimemagic.core.types import Content, Section


def encode_content(content: Content) -> bytes:
    line = bytearray()
    if content.indent:
        line += str(content.indent).encode("ascii")
    line += b">" + str(content.offset).encode("ascii") + b"="
    line += len(content.value).to_bytes(2, "big") + content.value
    if not content.has_default_mask:
        line += b"&" + content.mask
    if content.word_size != 1:
        line += b"~" + str(content.word_size).encode("ascii")
    if content.range_length != 1:
        line += b"+" + str(content.range_length).encode("ascii")
    line += b"\n"
    return bytes(line)


def encode_sections(sections: Iterable[Section]) -> bytes:
    payload = bytearray(MAGIC_SIGNATURE)
    for section in sections:
        payload += f"[{section.priority}:{section.filetype}]\n".encode("utf-8")
        for content in section.contents:
            payload += encode_content(content)
    return bytes(payload)


@pytest.fixture
def encode_magic() -> Callable[[Iterable[Section]], bytes]:
    return encode_sections


@pytest.fixture
def magic_file(tmp_path: Path) -> Callable[[bytes], Path]:
    """Return a factory writing raw database bytes to a temporary file."""

    def _write(data: bytes, name: str = "magic") -> Path:
        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target

    return _write
