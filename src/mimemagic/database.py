"""Locate and open the system magic database.

Resolution order:

1. ``MIMEMAGIC_DATABASE`` when set (``~`` and ``$VARS`` are expanded).
2. ``$XDG_DATA_HOME/mime/magic`` (``~/.local/share`` when unset).
3. ``<dir>/mime/magic`` for each entry of ``$XDG_DATA_DIRS``
   (``/usr/local/share:/usr/share`` when unset).

The first existing file wins. An explicit ``path`` argument bypasses the
search entirely.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from .core.decoder import MagicDecoder
from .core.errors import wrap_io_error
from .core.types import Section

logger = logging.getLogger(__name__)

DATABASE_ENV = "MIMEMAGIC_DATABASE"
DEFAULT_DATA_DIRS = ("/usr/local/share", "/usr/share")
_RELATIVE_DATABASE = Path("mime") / "magic"


def _expand(value: str) -> Path:
    return Path(os.path.expandvars(value)).expanduser()


def candidate_paths(environ: Optional[Mapping[str, str]] = None) -> List[Path]:
    """Return database locations in lookup order."""

    env = os.environ if environ is None else environ
    override = env.get(DATABASE_ENV)
    if override:
        return [_expand(override)]

    candidates: List[Path] = []
    data_home = env.get("XDG_DATA_HOME")
    if data_home:
        candidates.append(_expand(data_home) / _RELATIVE_DATABASE)
    else:
        candidates.append(Path(os.path.expanduser("~")) / ".local" / "share" / _RELATIVE_DATABASE)

    data_dirs = env.get("XDG_DATA_DIRS") or os.pathsep.join(DEFAULT_DATA_DIRS)
    for entry in data_dirs.split(os.pathsep):
        if entry:
            candidates.append(_expand(entry) / _RELATIVE_DATABASE)
    return candidates


def locate_database(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Return the database file to read.

    Raises:
        FileNotFoundError: ``path`` does not exist, or no candidate location
            holds a database.
    """

    if path is not None:
        resolved = Path(path).expanduser()
        if not resolved.is_file():
            raise FileNotFoundError(f"Magic database does not exist: {resolved}")
        return resolved

    searched = candidate_paths(environ)
    for candidate in searched:
        if candidate.is_file():
            logger.debug("Using magic database %s", candidate)
            return candidate
    joined = ", ".join(str(candidate) for candidate in searched)
    raise FileNotFoundError(f"No magic database found (searched: {joined})")


def open_database(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> MagicDecoder:
    """Open the database and validate its signature.

    The file is closed again when the signature check fails, so callers only
    own the handle once a decoder is returned.
    """

    location = locate_database(path, environ=environ)
    try:
        handle = location.open("rb")
    except OSError as exc:
        raise wrap_io_error(str(location), exc) from exc

    decoder = MagicDecoder(handle, source=str(location))
    try:
        decoder.check_signature()
    except Exception:
        decoder.close()
        raise
    return decoder


def read_sections(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> List[Section]:
    """Convenience wrapper that opens, decodes and closes the database."""

    with open_database(path, environ=environ) as decoder:
        return decoder.decode()
