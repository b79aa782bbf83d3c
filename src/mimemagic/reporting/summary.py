"""Aggregate statistics over a decoded database."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping, MutableMapping

from ..core.types import Section


def summarise_sections(sections: Iterable[Section]) -> Mapping[str, object]:
    """Return totals plus priority and media type breakdowns for ``sections``."""

    total_sections = 0
    total_rules = 0
    max_indent = 0
    priority_counts: Counter[int] = Counter()
    media_counts: Counter[str] = Counter()
    masked_rules = 0
    ranged_rules = 0

    for section in sections:
        total_sections += 1
        priority_counts[section.priority] += 1
        media_counts[section.media_type] += 1
        for content in section.contents:
            total_rules += 1
            max_indent = max(max_indent, content.indent)
            if not content.has_default_mask:
                masked_rules += 1
            if content.range_length > 1:
                ranged_rules += 1

    priorities: MutableMapping[str, int] = {
        str(priority): count for priority, count in sorted(priority_counts.items(), reverse=True)
    }
    return {
        "total_sections": total_sections,
        "total_rules": total_rules,
        "masked_rules": masked_rules,
        "ranged_rules": ranged_rules,
        "max_indent": max_indent,
        "priorities": priorities,
        "media_types": dict(sorted(media_counts.items())),
    }
