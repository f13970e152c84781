"""Filesystem-safe names for rendered decks."""

from __future__ import annotations

import re
from pathlib import Path

PPTX_EXTENSION = ".pptx"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9 -]")


def sanitize_title(title: str) -> str:
    """Replace unsafe characters with ``_`` and lowercase the result."""

    stem = _UNSAFE_CHARS.sub("_", title).lower()
    # An empty stem would leave a bare extension.
    return stem or "_"


def derive_filename(title: str) -> str:
    return f"{sanitize_title(title)}{PPTX_EXTENSION}"


def unique_output_path(directory: Path, filename: str) -> Path:
    """Return ``directory / filename``, suffixed ``-2``, ``-3``... if taken."""

    directory = Path(directory)
    candidate = directory / filename
    if not candidate.exists():
        return candidate

    stem, suffix = candidate.stem, candidate.suffix
    counter = 2
    while True:
        candidate = directory / f"{stem}-{counter}{suffix}"
        if not candidate.exists():
            return candidate
        counter += 1
