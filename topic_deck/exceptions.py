"""Error taxonomy for the outline-to-deck pipeline."""

from __future__ import annotations

from typing import Optional


class TopicDeckError(Exception):
    """Base exception for all pipeline errors."""

    error_type = "general"

    def __init__(
        self,
        message: str,
        *,
        iteration: Optional[int] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.iteration = iteration
        self.original_error = original_error

    def with_iteration(self, iteration: int) -> "TopicDeckError":
        """Tag the error with the 1-based batch iteration it happened in."""

        self.iteration = iteration
        return self

    def __str__(self) -> str:
        prefix = f"[iteration {self.iteration}] " if self.iteration is not None else ""
        return f"{prefix}{self.__class__.__name__}: {self.message}"


class EmptyTopicError(TopicDeckError):
    """The topic was empty after trimming whitespace."""

    error_type = "empty_topic"


class GenerationFailed(TopicDeckError):
    """The outline generation collaborator failed."""

    error_type = "generation_failed"


class InvalidOutline(TopicDeckError):
    """Outline data does not match the outline schema."""

    error_type = "invalid_outline"


class ImageDecodeError(TopicDeckError):
    """A caller supplied background image could not be decoded."""

    error_type = "image_decode"

    def __init__(
        self,
        message: str,
        *,
        role: str = "",
        iteration: Optional[int] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, iteration=iteration, original_error=original_error)
        self.role = role
