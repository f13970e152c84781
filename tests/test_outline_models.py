import pytest

from topic_deck.exceptions import InvalidOutline
from topic_deck.outline_models import (
    OUTLINE_SCHEMA,
    Outline,
    OutlineSlide,
    normalize_outline,
)

from tests.llm_stubs import outline_payload


def test_from_payload_reads_wire_field_names():
    outline = Outline.from_payload(outline_payload("Sejarah AI", 2))

    assert outline.title == "Sejarah AI"
    assert [slide.title for slide in outline.slides] == ["Slide 1", "Slide 2"]
    assert outline.slides[0].points == ["Point 1.1", "Point 1.2"]


def test_from_payload_returns_existing_outline_unchanged(sample_outline):
    assert Outline.from_payload(sample_outline) is sample_outline


def test_to_payload_round_trips_through_from_payload(sample_outline):
    assert Outline.from_payload(sample_outline.to_payload()) == sample_outline


def test_empty_slide_title_and_points_are_accepted():
    outline = Outline.from_payload(
        {"presentationTitle": "", "slides": [{"title": "", "points": []}]}
    )
    assert outline.slides[0] == OutlineSlide(title="", points=[])


@pytest.mark.parametrize(
    "payload",
    [
        {"slides": []},
        {"presentationTitle": "T"},
        {"presentationTitle": "T", "slides": "not a list"},
        {"presentationTitle": "T", "slides": ["just a string"]},
        {"presentationTitle": "T", "slides": [{"title": "A"}]},
        {"presentationTitle": "T", "slides": [{"title": "A", "points": [1, 2]}]},
        {"presentationTitle": 42, "slides": []},
    ],
)
def test_from_payload_rejects_schema_violations(payload):
    with pytest.raises(InvalidOutline) as excinfo:
        Outline.from_payload(payload)
    assert "schema" in excinfo.value.message
    assert excinfo.value.original_error is not None


@pytest.mark.parametrize("payload", [None, "text", ["a", "b"], 3])
def test_from_payload_rejects_non_objects(payload):
    with pytest.raises(InvalidOutline):
        Outline.from_payload(payload)


def test_schema_requires_title_and_slides():
    assert OUTLINE_SCHEMA["required"] == ["presentationTitle", "slides"]
    assert OUTLINE_SCHEMA["properties"]["slides"]["items"]["required"] == ["title", "points"]


@pytest.mark.parametrize("available", [0, 1, 3, 5])
@pytest.mark.parametrize("requested", [0, 1, 3, 4, 10])
def test_normalize_returns_prefix_of_min_length(available, requested):
    outline = Outline.from_payload(outline_payload("T", available))

    normalized = normalize_outline(outline, requested)

    assert len(normalized.slides) == min(available, requested)
    assert normalized.slides == outline.slides[: len(normalized.slides)]
    assert normalized.title == outline.title


def test_normalize_truncates_five_slides_to_three():
    outline = Outline.from_payload(outline_payload("Sejarah AI", 5))

    normalized = normalize_outline(outline, 3)

    assert [slide.title for slide in normalized.slides] == ["Slide 1", "Slide 2", "Slide 3"]
    assert len(outline.slides) == 5


def test_normalize_passes_short_outline_through(sample_outline):
    assert normalize_outline(sample_outline, 10) is sample_outline


def test_normalize_rejects_negative_count(sample_outline):
    with pytest.raises(ValueError):
        normalize_outline(sample_outline, -1)
