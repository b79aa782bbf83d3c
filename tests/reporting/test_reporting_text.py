from __future__ import annotations

import io

from mimemagic.core.types import Content, Section
from mimemagic.reporting.text import format_bytes, render_text, write_text


def _sections() -> list[Section]:
    return [
        Section(
            filetype="text/x-script",
            priority=50,
            contents=[
                Content(offset=0, value=b"#!\n"),
                Content(offset=2, value=b"sh", mask=b"\xff\xdf", indent=1, range_length=16, word_size=2),
            ],
        ),
        Section(filetype="image/png", priority=50, contents=[Content(offset=0, value=b"\x89PNG")]),
    ]


def test_format_bytes() -> None:
    assert format_bytes(b"\x00\xffA") == "00 ff 41"
    assert format_bytes(b"") == ""


def test_render_text_default_listing() -> None:
    output = render_text(_sections())

    assert output.splitlines() == [
        "Filetype: text/x-script",
        "Priority: 50",
        " ~~~~~~~ ",
        "Value: 23 21 0a",
        "Indent: 0",
        "Offset: 0",
        " ~~~~~~~ ",
        "Value: 73 68",
        "Indent: 1",
        "Offset: 2",
        "Range: 16",
        "Word size: 2",
        " ------- ",
        "Filetype: image/png",
        "Priority: 50",
        "Value: 89 50 4e 47",
        "Indent: 0",
        "Offset: 0",
        " ------- ",
    ]


def test_render_text_with_mask_and_strings() -> None:
    output = render_text(_sections(), show_mask=True, value_as_string=True)
    lines = output.splitlines()

    assert 'Value: "#!"' in lines
    assert 'Value: "sh"' in lines
    assert "Mask:  ff df" in lines
    assert "Mask:  ff ff ff" in lines
    assert 'Value: "\\u0089PNG"' in lines


def test_write_text_matches_render() -> None:
    stream = io.StringIO()

    write_text(_sections(), stream, show_mask=True)

    assert stream.getvalue() == render_text(_sections(), show_mask=True)
