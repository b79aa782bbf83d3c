"""Reporting adapters for decoded magic databases.

These helpers only consume :class:`mimemagic.core.types.Section` lists; the
decoder never imports them.
"""

from .json_lines import iter_json_records, render_json_lines, write_json_lines
from .summary import summarise_sections
from .text import format_bytes, iter_text_lines, render_text, write_text

__all__ = [
    "iter_json_records",
    "render_json_lines",
    "write_json_lines",
    "summarise_sections",
    "format_bytes",
    "iter_text_lines",
    "render_text",
    "write_text",
]
