"""Sequential batch driver: generate, normalize, render, repeat."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from .exceptions import EmptyTopicError, GenerationFailed, TopicDeckError
from .filenames import unique_output_path
from .outline_models import (
    ImageReference,
    Outline,
    RenderedDocument,
    RenderRequest,
    normalize_outline,
)
from .pptx_renderer import OutlineDeckRenderer
from .settings import BatchDefaults

LOGGER = logging.getLogger(__name__)

# generate(topic, slide_count) -> Outline or JSON-shaped mapping
OutlineGenerator = Callable[[str, int], Any]
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True, slots=True)
class BatchConfig:
    """Input parameters for one batch run."""

    topic: str
    slide_count: int
    file_count: int
    cover_image: Optional[ImageReference] = None
    content_image: Optional[ImageReference] = None

    def validate(self) -> None:
        if not self.topic or not self.topic.strip():
            raise EmptyTopicError("Presentation topic must not be empty")
        if self.slide_count < 0:
            raise ValueError(f"slide_count must be >= 0, got {self.slide_count}")
        if self.file_count < 0:
            raise ValueError(f"file_count must be >= 0, got {self.file_count}")


@dataclass(frozen=True, slots=True)
class IterationOutcome:
    """Result of a single batch iteration: a document or an error."""

    iteration: int
    document: Optional[RenderedDocument] = None
    error: Optional[TopicDeckError] = None


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Documents produced so far and the error that stopped the batch, if any."""

    file_count: int
    documents: Tuple[RenderedDocument, ...] = ()
    error: Optional[TopicDeckError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def produced_count(self) -> int:
        return len(self.documents)

    @property
    def failed_iteration(self) -> Optional[int]:
        return self.error.iteration if self.error is not None else None

    def accumulate(self, outcome: IterationOutcome) -> "BatchResult":
        if outcome.error is not None:
            return replace(self, error=outcome.error)
        return replace(self, documents=self.documents + (outcome.document,))

    def raise_for_error(self) -> Tuple[RenderedDocument, ...]:
        """Return the documents, or raise the error that stopped the batch."""

        if self.error is not None:
            raise self.error
        return self.documents


def run_batch(
    config: BatchConfig,
    generate: OutlineGenerator,
    *,
    renderer: Optional[OutlineDeckRenderer] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchResult:
    """Produce ``config.file_count`` decks one after another.

    The first failing iteration stops the batch; documents produced before
    it are kept in the returned :class:`BatchResult`.
    """

    config.validate()
    renderer = renderer or OutlineDeckRenderer()

    result = BatchResult(file_count=config.file_count)
    for outcome in _iterate(config, generate, renderer, on_progress):
        result = result.accumulate(outcome)
        if not result.succeeded:
            LOGGER.warning(
                "Batch stopped at iteration %d of %d: %s",
                outcome.iteration,
                config.file_count,
                result.error,
            )
            break
    else:
        LOGGER.info("Batch finished: %d of %d decks produced", result.produced_count, config.file_count)
    return result


def run_batch_for_topic(
    topic: str,
    slide_count: int,
    file_count: int,
    cover_image: Optional[ImageReference],
    content_image: Optional[ImageReference],
    generate: OutlineGenerator,
    *,
    renderer: Optional[OutlineDeckRenderer] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchResult:
    config = BatchConfig(
        topic=topic,
        slide_count=slide_count,
        file_count=file_count,
        cover_image=cover_image,
        content_image=content_image,
    )
    return run_batch(config, generate, renderer=renderer, on_progress=on_progress)


def write_documents(
    documents: Iterable[RenderedDocument], directory: Optional[Path] = None
) -> List[Path]:
    """Write ``documents`` into ``directory`` without overwriting existing files.

    ``directory`` defaults to the configured output directory
    (``TOPIC_DECK_OUTPUT_DIR`` or ``output``).
    """

    if directory is None:
        directory = BatchDefaults.from_env().output_dir
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for document in documents:
        path = document.write_to(unique_output_path(directory, document.filename))
        LOGGER.info("Wrote %s (%d slides)", path, document.slide_count)
        written.append(path)
    return written


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------

def _iterate(
    config: BatchConfig,
    generate: OutlineGenerator,
    renderer: OutlineDeckRenderer,
    on_progress: Optional[ProgressCallback],
) -> Iterator[IterationOutcome]:
    # Lazy so that stopping the fold never starts another generation call.
    for index in range(1, config.file_count + 1):
        yield _run_iteration(index, config, generate, renderer, on_progress)


def _run_iteration(
    index: int,
    config: BatchConfig,
    generate: OutlineGenerator,
    renderer: OutlineDeckRenderer,
    on_progress: Optional[ProgressCallback],
) -> IterationOutcome:
    if on_progress is not None:
        # Progress reporting never changes the outcome of an iteration.
        try:
            on_progress(index, config.file_count)
        except Exception as exc:
            LOGGER.warning("Progress callback failed at iteration %d: %s", index, exc)
    LOGGER.info("Generating outline %d of %d for topic '%s'", index, config.file_count, config.topic)

    try:
        payload = generate(config.topic, config.slide_count)
    except TopicDeckError as exc:
        return IterationOutcome(index, error=exc.with_iteration(index))
    except Exception as exc:
        error = GenerationFailed(
            f"Outline generation failed: {exc}", iteration=index, original_error=exc
        )
        error.__cause__ = exc
        return IterationOutcome(index, error=error)

    try:
        outline = normalize_outline(Outline.from_payload(payload), config.slide_count)
        document = renderer.render(
            RenderRequest(
                outline=outline,
                cover_image=config.cover_image,
                content_image=config.content_image,
            )
        )
    except TopicDeckError as exc:
        return IterationOutcome(index, error=exc.with_iteration(index))

    LOGGER.info("Rendered '%s' as %s", document.title, document.filename)
    return IterationOutcome(index, document=document)
