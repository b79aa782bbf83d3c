"""Plain-text listing of decoded sections.

The layout is meant for reading in a terminal or pasting into notes::

    Filetype: image/png
    Priority: 50
    Value: 89 50 4e 47
    Indent: 0
    Offset: 0
     -------
"""

from __future__ import annotations

import json
from typing import Iterable, Iterator, List, TextIO

from ..core.types import Content, Section

__all__ = ["format_bytes", "iter_text_lines", "render_text", "write_text"]

RULE_SEPARATOR = " ~~~~~~~ "
SECTION_SEPARATOR = " ------- "


def format_bytes(data: bytes) -> str:
    return " ".join(f"{byte:02x}" for byte in data)


def _quote(data: bytes) -> str:
    # latin-1 maps every byte to one code point, json escapes the unprintable.
    return json.dumps(data.strip(b"\n").decode("latin-1"))


def _content_lines(content: Content, *, show_mask: bool, value_as_string: bool) -> List[str]:
    lines: List[str] = []
    if value_as_string:
        lines.append(f"Value: {_quote(content.value)}")
    else:
        lines.append(f"Value: {format_bytes(content.value)}")
    if show_mask:
        lines.append(f"Mask:  {format_bytes(content.mask)}")
    lines.append(f"Indent: {content.indent}")
    lines.append(f"Offset: {content.offset}")
    if content.range_length != 1:
        lines.append(f"Range: {content.range_length}")
    if content.word_size != 1:
        lines.append(f"Word size: {content.word_size}")
    return lines


def iter_text_lines(
    sections: Iterable[Section],
    *,
    show_mask: bool = False,
    value_as_string: bool = False,
) -> Iterator[str]:
    for section in sections:
        yield f"Filetype: {section.filetype}"
        yield f"Priority: {section.priority}"
        multiple = len(section.contents) > 1
        for content in section.contents:
            if multiple:
                yield RULE_SEPARATOR
            yield from _content_lines(
                content, show_mask=show_mask, value_as_string=value_as_string
            )
        yield SECTION_SEPARATOR


def render_text(
    sections: Iterable[Section],
    *,
    show_mask: bool = False,
    value_as_string: bool = False,
) -> str:
    """Return the listing for ``sections`` as a single string."""

    lines = iter_text_lines(sections, show_mask=show_mask, value_as_string=value_as_string)
    return "".join(f"{line}\n" for line in lines)


def write_text(
    sections: Iterable[Section],
    stream: TextIO,
    *,
    show_mask: bool = False,
    value_as_string: bool = False,
) -> None:
    for line in iter_text_lines(sections, show_mask=show_mask, value_as_string=value_as_string):
        stream.write(line)
        stream.write("\n")
