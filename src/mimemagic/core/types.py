"""Decoded magic database records.

Example
-------
>>> rule = Content(offset=0, value=b"%PDF-")
>>> rule.mask.hex()
'ffffffffff'
>>> section = Section(filetype="application/pdf", priority=50, contents=[rule])
>>> section.to_dict()["contents"][0]["value"]
'255044462d'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def default_mask(length: int) -> bytes:
    """Return an exact-match mask of ``length`` bytes."""

    return b"\xff" * length


@dataclass(frozen=True)
class Content:
    """One byte-pattern rule of a section.

    ``mask`` defaults to all ``0xFF`` (exact match) and always has the same
    length as ``value``. ``indent`` is the rule's nesting depth; how nested
    rules combine is left to the matching engine.
    """

    offset: int
    value: bytes
    mask: Optional[bytes] = None
    indent: int = 0
    range_length: int = 1
    word_size: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))
        if self.mask is None:
            object.__setattr__(self, "mask", default_mask(len(self.value)))
        else:
            object.__setattr__(self, "mask", bytes(self.mask))
        if len(self.mask) != len(self.value):
            raise ValueError(
                f"mask length {len(self.mask)} does not match value length {len(self.value)}"
            )

    @property
    def has_default_mask(self) -> bool:
        return self.mask == default_mask(len(self.value))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indent": self.indent,
            "offset": self.offset,
            "value": self.value.hex(),
            "mask": self.mask.hex(),
            "range_length": self.range_length,
            "word_size": self.word_size,
        }


@dataclass
class Section:
    """Detection rules for one MIME type, highest priority first in the file."""

    filetype: str
    priority: int
    contents: List[Content] = field(default_factory=list)

    @property
    def media_type(self) -> str:
        return self.filetype.split("/", 1)[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filetype": self.filetype,
            "priority": self.priority,
            "contents": [content.to_dict() for content in self.contents],
        }
