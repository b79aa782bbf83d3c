from __future__ import annotations

from typing import Callable, Iterable

from mimemagic.core.decoder import decode_bytes
from mimemagic.core.types import Content, Section

Encoder = Callable[[Iterable[Section]], bytes]


def _awkward_sections() -> list[Section]:
    return [
        Section(
            filetype="application/x-awkward",
            priority=80,
            contents=[
                Content(offset=0, value=b"\n\n\n"),
                Content(offset=4, value=b"a+1~2&b", indent=1, range_length=12),
                Content(offset=8, value=b"\x00\n", mask=b"\xff\n", word_size=2),
                Content(offset=1024, value=b"[9:x/y]\n>0=", indent=2, word_size=4, range_length=3),
            ],
        ),
        Section(
            filetype="image/png",
            priority=50,
            contents=[Content(offset=0, value=b"\x89PNG\r\n\x1a\n")],
        ),
        Section(
            filetype="text/x-empty-pattern",
            priority=0,
            contents=[Content(offset=4294967295, value=b"")],
        ),
    ]


def test_round_trip_reproduces_model(encode_magic: Encoder) -> None:
    sections = _awkward_sections()

    decoded = decode_bytes(encode_magic(sections))

    assert decoded == sections


def test_round_trip_with_long_value(encode_magic: Encoder) -> None:
    value = bytes(range(256)) * 3
    mask = bytes(reversed(value))
    sections = [
        Section(
            filetype="application/x-long",
            priority=20,
            contents=[Content(offset=12, value=value, mask=mask, range_length=2)],
        )
    ]

    decoded = decode_bytes(encode_magic(sections))

    assert decoded[0].contents[0].value == value
    assert decoded[0].contents[0].mask == mask
    assert decoded == sections


def test_round_trip_preserves_rule_order(encode_magic: Encoder) -> None:
    rules = [Content(offset=index, value=bytes([index]), indent=index % 3) for index in range(20)]
    sections = [Section(filetype="application/x-tree", priority=40, contents=rules)]

    decoded = decode_bytes(encode_magic(sections))

    assert [rule.offset for rule in decoded[0].contents] == list(range(20))
    assert [rule.indent for rule in decoded[0].contents] == [index % 3 for index in range(20)]
