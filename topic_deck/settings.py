"""Theme constants and environment driven batch defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_SLIDE_COUNT = "TOPIC_DECK_SLIDE_COUNT"
ENV_FILE_COUNT = "TOPIC_DECK_FILE_COUNT"
ENV_OUTPUT_DIR = "TOPIC_DECK_OUTPUT_DIR"


@dataclass(frozen=True, slots=True)
class DeckTheme:
    """Fixed look of a generated deck (16:9 canvas, sizes in inches/points)."""

    slide_width_in: float = 10.0
    slide_height_in: float = 5.625

    cover_fill: str = "003366"
    content_fill: str = "F4F4F4"

    title_slide_color: str = "FFFFFF"
    slide_title_color: str = "003366"
    body_color: str = "333333"

    title_slide_font_pt: int = 48
    slide_title_font_pt: int = 36
    body_font_pt: int = 24

    bullet_char: str = "•"


@dataclass(frozen=True, slots=True)
class BatchDefaults:
    """Default batch parameters, overridable from the environment or ``.env``."""

    slide_count: int = 3
    file_count: int = 1
    output_dir: Path = Path("output")

    @classmethod
    def from_env(cls, *, dotenv_path: Optional[Path] = None) -> "BatchDefaults":
        load_dotenv(dotenv_path)
        defaults = cls()
        return cls(
            slide_count=_int_from_env(ENV_SLIDE_COUNT, defaults.slide_count),
            file_count=_int_from_env(ENV_FILE_COUNT, defaults.file_count),
            output_dir=Path(os.getenv(ENV_OUTPUT_DIR) or defaults.output_dir),
        )


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value
