"""Adapter that turns a structured-output LLM client into an outline source."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .exceptions import GenerationFailed, InvalidOutline, TopicDeckError
from .outline_models import OUTLINE_SCHEMA, Outline, normalize_outline

LOGGER = logging.getLogger(__name__)


@dataclass
class OutlineRequest:
    """Structured output request handed to the LLM client."""

    prompt: str = ""
    schema: Dict[str, Any] = field(default_factory=lambda: dict(OUTLINE_SCHEMA))
    schema_name: str = "presentation_outline"
    model_name: Optional[str] = None
    instructions: Optional[str] = None


class StructuredOutlineSource:
    """Callable ``generate(topic, slide_count)`` backed by an LLM client.

    ``llm_client`` is any object exposing ``generate_structured_output(request)``
    and returning a response with ``parsed_output``, ``text`` and ``error``
    attributes. The transport itself lives in the client.
    """

    def __init__(
        self,
        llm_client,
        *,
        model_name: Optional[str] = None,
        language: Optional[str] = None,
    ) -> None:
        if llm_client is None:
            raise ValueError("llm_client is required to generate outlines")
        self.llm_client = llm_client
        self.model_name = model_name
        self.language = language

    def __call__(self, topic: str, slide_count: int) -> Outline:
        return self.generate_outline(topic, slide_count)

    def generate_outline(self, topic: str, slide_count: int) -> Outline:
        request = self.build_request(topic, slide_count)
        try:
            response = self.llm_client.generate_structured_output(request)
        except TopicDeckError:
            raise
        except Exception as exc:
            raise GenerationFailed(
                f"Outline generation request failed: {exc}", original_error=exc
            ) from exc

        error = getattr(response, "error", None)
        if error:
            raise GenerationFailed(f"Outline generation returned an error: {error}")

        payload = _extract_parsed_output(response)
        outline = Outline.from_payload(payload)
        return normalize_outline(outline, slide_count)

    def build_request(self, topic: str, slide_count: int) -> OutlineRequest:
        sections = [
            f'Create a presentation outline for the topic: "{topic}".',
            f"Return one presentation title and exactly {slide_count} slides,"
            " each with a short title and a list of bullet points.",
        ]
        if self.language:
            sections.append(f"Write every title and bullet point in {self.language}.")
        return OutlineRequest(
            prompt="\n".join(sections),
            model_name=self.model_name,
            instructions="Respond with JSON only.",
        )


def _extract_parsed_output(response) -> Any:
    if response is None:
        raise InvalidOutline("Outline generation returned no response")
    parsed = getattr(response, "parsed_output", None)
    if parsed:
        return parsed
    text = getattr(response, "text", "") or ""
    if not text.strip():
        raise InvalidOutline("Outline generation returned an empty payload")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        LOGGER.debug("Failed to parse outline structured output: %s", text)
        raise InvalidOutline(f"Outline payload is not valid JSON: {exc}", original_error=exc) from exc
