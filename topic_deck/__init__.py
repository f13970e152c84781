"""Turn structured presentation outlines into downloadable PPTX decks."""

from .batch import (
    BatchConfig,
    BatchResult,
    IterationOutcome,
    run_batch,
    run_batch_for_topic,
    write_documents,
)
from .exceptions import (
    EmptyTopicError,
    GenerationFailed,
    ImageDecodeError,
    InvalidOutline,
    TopicDeckError,
)
from .filenames import PPTX_EXTENSION, derive_filename, sanitize_title
from .images import decode_image_reference
from .outline_models import (
    OUTLINE_SCHEMA,
    Outline,
    OutlineSlide,
    RenderedDocument,
    RenderRequest,
    normalize_outline,
)
from .outline_source import OutlineRequest, StructuredOutlineSource
from .pptx_renderer import OutlineDeckRenderer, render_outline
from .settings import BatchDefaults, DeckTheme

__version__ = "0.1.0"

__all__ = [
    "BatchConfig",
    "BatchResult",
    "IterationOutcome",
    "run_batch",
    "run_batch_for_topic",
    "write_documents",
    "TopicDeckError",
    "EmptyTopicError",
    "GenerationFailed",
    "InvalidOutline",
    "ImageDecodeError",
    "PPTX_EXTENSION",
    "derive_filename",
    "sanitize_title",
    "decode_image_reference",
    "OUTLINE_SCHEMA",
    "Outline",
    "OutlineSlide",
    "RenderRequest",
    "RenderedDocument",
    "normalize_outline",
    "OutlineRequest",
    "StructuredOutlineSource",
    "OutlineDeckRenderer",
    "render_outline",
    "BatchDefaults",
    "DeckTheme",
]
