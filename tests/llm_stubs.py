"""Helper stubs standing in for the outline generation service in tests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple


def outline_payload(title: str, slide_count: int, *, points_per_slide: int = 2) -> Dict[str, Any]:
    """Build a JSON-shaped outline as the generation service would return it."""

    return {
        "presentationTitle": title,
        "slides": [
            {
                "title": f"Slide {index}",
                "points": [f"Point {index}.{point}" for point in range(1, points_per_slide + 1)],
            }
            for index in range(1, slide_count + 1)
        ],
    }


class ScriptedOutlineGenerator:
    """``generate(topic, slide_count)`` stub returning scripted payloads.

    An entry in ``script`` that is an exception instance is raised instead of
    returned.
    """

    def __init__(self, script: Iterable[Any]) -> None:
        self.script = list(script)
        self.calls: List[Tuple[str, int]] = []

    def __call__(self, topic: str, slide_count: int) -> Any:
        self.calls.append((topic, slide_count))
        if not self.script:
            raise AssertionError("No scripted outline left for generate() call")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@dataclass
class StubStructuredResponse:
    text: str = ""
    parsed_output: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    model_used: str = "stub-structured"


class StubStructuredOutputLLM:
    """LLM client stub exposing ``generate_structured_output``."""

    def __init__(
        self,
        *,
        payload: Optional[Dict[str, Any]] = None,
        text: Optional[str] = None,
        error: Optional[str] = None,
        exception: Optional[Exception] = None,
    ) -> None:
        self.payload = payload
        self.text = text
        self.error = error
        self.exception = exception
        self.requests: List[Any] = []

    def generate_structured_output(self, request: Any) -> StubStructuredResponse:
        self.requests.append(request)
        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            return StubStructuredResponse(error=self.error)
        if self.text is not None:
            return StubStructuredResponse(text=self.text)
        return StubStructuredResponse(
            text=json.dumps(self.payload, ensure_ascii=False),
            parsed_output=self.payload,
        )


__all__ = [
    "outline_payload",
    "ScriptedOutlineGenerator",
    "StubStructuredResponse",
    "StubStructuredOutputLLM",
]
