from __future__ import annotations

import dataclasses

import pytest

from mimemagic.core.types import Content, Section, default_mask


def test_content_defaults() -> None:
    rule = Content(offset=3, value=b"abc")

    assert rule.indent == 0
    assert rule.range_length == 1
    assert rule.word_size == 1
    assert rule.mask == default_mask(3) == b"\xff\xff\xff"
    assert rule.has_default_mask


def test_content_mask_must_match_value_length() -> None:
    with pytest.raises(ValueError, match="mask length 1"):
        Content(offset=0, value=b"ab", mask=b"\xff")


def test_content_is_immutable() -> None:
    rule = Content(offset=0, value=b"a")

    with pytest.raises(dataclasses.FrozenInstanceError):
        rule.offset = 4  # type: ignore[misc]


def test_content_normalises_bytearray_payloads() -> None:
    rule = Content(offset=0, value=bytearray(b"ab"), mask=bytearray(b"\x0f\xf0"))

    assert isinstance(rule.value, bytes)
    assert isinstance(rule.mask, bytes)
    assert not rule.has_default_mask


def test_content_to_dict_uses_hex() -> None:
    rule = Content(offset=8, value=b"PK", mask=b"\xff\x00", indent=1, range_length=4, word_size=2)

    assert rule.to_dict() == {
        "indent": 1,
        "offset": 8,
        "value": "504b",
        "mask": "ff00",
        "range_length": 4,
        "word_size": 2,
    }


def test_section_to_dict_and_media_type() -> None:
    section = Section(
        filetype="application/zip",
        priority=40,
        contents=[Content(offset=0, value=b"PK")],
    )

    payload = section.to_dict()

    assert section.media_type == "application"
    assert payload["filetype"] == "application/zip"
    assert payload["priority"] == 40
    assert payload["contents"][0]["mask"] == "ffff"


def test_sections_do_not_share_content_lists() -> None:
    first = Section(filetype="a/b", priority=1)
    second = Section(filetype="c/d", priority=2)

    first.contents.append(Content(offset=0, value=b"x"))

    assert second.contents == []
