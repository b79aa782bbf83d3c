"""Newline-delimited JSON helpers for decoded sections.

Each section becomes one ``{"type": "section", "payload": ...}`` record so
large databases can be streamed without building a single document. Byte
fields are emitted as lowercase hex strings.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, Mapping, TextIO

from ..core.types import Section

__all__ = ["iter_json_records", "render_json_lines", "write_json_lines"]


def _prepare_record(kind: str, payload: Mapping[str, Any]) -> dict[str, Any]:
    return {"type": kind, "payload": dict(payload)}


def iter_json_records(
    sections: Iterable[Section],
    *,
    extra_metadata: Mapping[str, object] | None = None,
) -> Iterator[dict[str, Any]]:
    """Yield JSON-compatible records for ``sections`` in database order."""

    run_metadata = dict(extra_metadata or {})
    for index, section in enumerate(sections):
        payload = section.to_dict()
        payload["order"] = index
        if run_metadata:
            payload["run_metadata"] = dict(run_metadata)
        yield _prepare_record("section", payload)


def render_json_lines(
    sections: Iterable[Section],
    *,
    extra_metadata: Mapping[str, object] | None = None,
    sort_keys: bool = True,
) -> str:
    """Return newline-delimited JSON for ``sections``."""

    lines = [
        json.dumps(record, ensure_ascii=False, sort_keys=sort_keys)
        for record in iter_json_records(sections, extra_metadata=extra_metadata)
    ]
    return "\n".join(lines)


def write_json_lines(
    sections: Iterable[Section],
    stream: TextIO,
    *,
    extra_metadata: Mapping[str, object] | None = None,
    sort_keys: bool = True,
) -> None:
    for record in iter_json_records(sections, extra_metadata=extra_metadata):
        stream.write(json.dumps(record, ensure_ascii=False, sort_keys=sort_keys))
        stream.write("\n")
