"""Data models for presentation outlines and rendered decks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidOutline

LOGGER = logging.getLogger(__name__)

# Raw image bytes or a ``data:image/...;base64,`` URI.
ImageReference = Union[bytes, str]

OUTLINE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "presentationTitle": {
            "type": "string",
            "description": "The main title of the presentation.",
        },
        "slides": {
            "type": "array",
            "description": "The presentation slides in reading order.",
            "items": {
                "type": "object",
                "properties": {
                    "title": {
                        "type": "string",
                        "description": "The title of the slide.",
                    },
                    "points": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Bullet points for the slide body.",
                    },
                },
                "required": ["title", "points"],
            },
        },
    },
    "required": ["presentationTitle", "slides"],
}


class OutlineSlide(BaseModel):
    """A single content slide: a title and its bullet points."""

    model_config = ConfigDict(frozen=True)

    title: str
    points: List[str]


class Outline(BaseModel):
    """Validated presentation outline used as render input."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(validation_alias=AliasChoices("presentationTitle", "title"))
    slides: List[OutlineSlide]

    @classmethod
    def from_payload(cls, payload: Any) -> "Outline":
        """Validate a JSON-shaped payload returned by the generation service."""

        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            raise InvalidOutline(
                f"Outline payload must be an object, got {type(payload).__name__}"
            )
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise InvalidOutline(_describe_validation_error(exc), original_error=exc) from exc

    def to_payload(self) -> Dict[str, Any]:
        return {
            "presentationTitle": self.title,
            "slides": [
                {"title": slide.title, "points": list(slide.points)}
                for slide in self.slides
            ],
        }


def normalize_outline(outline: Outline, requested_count: int) -> Outline:
    """Return ``outline`` with at most ``requested_count`` slides.

    Extra slides are dropped from the tail. Shorter outlines pass through
    unchanged; missing slides are not padded.
    """

    if requested_count < 0:
        raise ValueError(f"requested_count must be >= 0, got {requested_count}")

    available = len(outline.slides)
    if available <= requested_count:
        if available < requested_count:
            LOGGER.debug(
                "Outline has %d slides, fewer than the %d requested", available, requested_count
            )
        return outline

    LOGGER.debug("Truncating outline from %d to %d slides", available, requested_count)
    return outline.model_copy(update={"slides": list(outline.slides[:requested_count])})


@dataclass(frozen=True, slots=True)
class RenderRequest:
    """Everything the renderer needs for one deck."""

    outline: Outline
    cover_image: Optional[ImageReference] = None
    content_image: Optional[ImageReference] = None


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    """A packaged ``.pptx`` deck and the name it should be saved under."""

    content: bytes
    filename: str
    title: str
    slide_count: int

    def write_to(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.content)
        return path


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "(root)"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "Outline does not match the schema: " + "; ".join(problems)
