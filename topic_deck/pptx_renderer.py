"""Render :class:`Outline` objects into 16:9 PPTX binaries."""

from __future__ import annotations

import io
import logging
from typing import Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Emu, Inches, Pt

from .exceptions import ImageDecodeError, InvalidOutline
from .filenames import derive_filename
from .images import decode_image_reference
from .outline_models import (
    ImageReference,
    Outline,
    OutlineSlide,
    RenderedDocument,
    RenderRequest,
)
from .settings import DeckTheme

LOGGER = logging.getLogger(__name__)

TITLE_SHAPE_NAME = "Presentation Title"
SLIDE_TITLE_SHAPE_NAME = "Slide Title"
BODY_SHAPE_NAME = "Slide Body"

# Text block geometry, in inches or fractions of the canvas.
_LEFT_IN = 0.5
_WIDTH_FRACTION = 0.9
_TITLE_SLIDE_TOP_IN = 2.5
_TITLE_SLIDE_HEIGHT_IN = 2.0
_SLIDE_TITLE_TOP_IN = 0.5
_SLIDE_TITLE_HEIGHT_IN = 0.75
_BODY_TOP_IN = 1.5
_BODY_HEIGHT_FRACTION = 0.75

_BULLET_INDENT = Emu(342900)

_FILL_TAGS = frozenset(
    qn(tag)
    for tag in ("a:noFill", "a:solidFill", "a:gradFill", "a:blipFill", "a:pattFill", "a:grpFill")
)


class OutlineDeckRenderer:
    """Render outlines into PPTX binaries with optional image backgrounds."""

    def __init__(self, theme: Optional[DeckTheme] = None) -> None:
        self.theme = theme or DeckTheme()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render(self, request: RenderRequest) -> RenderedDocument:
        """Return the packaged deck for ``request``: a title slide plus one slide per outline entry."""

        outline = Outline.from_payload(request.outline)
        if not isinstance(outline.slides, (list, tuple)):
            raise InvalidOutline(
                f"Outline slides must be a sequence, got {type(outline.slides).__name__}"
            )

        cover_image = decode_image_reference(request.cover_image, role="cover")
        content_image = decode_image_reference(request.content_image, role="content")

        presentation = Presentation()
        presentation.slide_width = Inches(self.theme.slide_width_in)
        presentation.slide_height = Inches(self.theme.slide_height_in)
        layout = _blank_layout(presentation)

        self._add_title_slide(presentation, layout, outline.title, cover_image)
        for slide_content in outline.slides:
            self._add_content_slide(presentation, layout, slide_content, content_image)

        buffer = io.BytesIO()
        presentation.save(buffer)
        slide_count = len(presentation.slides)
        LOGGER.debug("Rendered '%s' into %d slides", outline.title, slide_count)
        return RenderedDocument(
            content=buffer.getvalue(),
            filename=derive_filename(outline.title),
            title=outline.title,
            slide_count=slide_count,
        )

    # ------------------------------------------------------------------
    # Slide builders
    # ------------------------------------------------------------------
    def _add_title_slide(self, presentation, layout, title: str, image: Optional[bytes]) -> None:
        theme = self.theme
        slide = presentation.slides.add_slide(layout)
        _apply_background(slide, image, theme.cover_fill, role="cover")

        box = slide.shapes.add_textbox(
            Inches(_LEFT_IN),
            Inches(_TITLE_SLIDE_TOP_IN),
            self._content_width(presentation),
            Inches(_TITLE_SLIDE_HEIGHT_IN),
        )
        box.name = TITLE_SHAPE_NAME
        frame = box.text_frame
        frame.word_wrap = True
        frame.vertical_anchor = MSO_ANCHOR.MIDDLE

        paragraph = frame.paragraphs[0]
        paragraph.text = title
        paragraph.alignment = PP_ALIGN.CENTER
        _style_runs(paragraph, theme.title_slide_font_pt, theme.title_slide_color, bold=True)

    def _add_content_slide(
        self, presentation, layout, content: OutlineSlide, image: Optional[bytes]
    ) -> None:
        theme = self.theme
        slide = presentation.slides.add_slide(layout)
        _apply_background(slide, image, theme.content_fill, role="content")
        width = self._content_width(presentation)

        title_box = slide.shapes.add_textbox(
            Inches(_LEFT_IN),
            Inches(_SLIDE_TITLE_TOP_IN),
            width,
            Inches(_SLIDE_TITLE_HEIGHT_IN),
        )
        title_box.name = SLIDE_TITLE_SHAPE_NAME
        title_frame = title_box.text_frame
        title_frame.word_wrap = True
        title_frame.vertical_anchor = MSO_ANCHOR.MIDDLE
        title_paragraph = title_frame.paragraphs[0]
        title_paragraph.text = content.title
        _style_runs(title_paragraph, theme.slide_title_font_pt, theme.slide_title_color, bold=True)

        body_box = slide.shapes.add_textbox(
            Inches(_LEFT_IN),
            Inches(_BODY_TOP_IN),
            width,
            Emu(int(presentation.slide_height * _BODY_HEIGHT_FRACTION)),
        )
        body_box.name = BODY_SHAPE_NAME
        body_frame = body_box.text_frame
        body_frame.word_wrap = True
        body_frame.vertical_anchor = MSO_ANCHOR.TOP

        for index, point in enumerate(content.points):
            paragraph = body_frame.paragraphs[0] if index == 0 else body_frame.add_paragraph()
            paragraph.text = point
            _apply_bullet(paragraph, theme.bullet_char)
            _style_runs(paragraph, theme.body_font_pt, theme.body_color)

    def _content_width(self, presentation) -> Emu:
        return Emu(int(presentation.slide_width * _WIDTH_FRACTION))


def render_outline(
    outline: Outline,
    cover_image: Optional[ImageReference] = None,
    content_image: Optional[ImageReference] = None,
    *,
    theme: Optional[DeckTheme] = None,
) -> RenderedDocument:
    """Convenience wrapper around :meth:`OutlineDeckRenderer.render`."""

    request = RenderRequest(outline=outline, cover_image=cover_image, content_image=content_image)
    return OutlineDeckRenderer(theme).render(request)


# ----------------------------------------------------------------------
# Helper functions
# ----------------------------------------------------------------------

def _blank_layout(presentation):
    layout = presentation.slide_layouts.get_by_name("Blank")
    if layout is None:
        layout = presentation.slide_layouts[len(presentation.slide_layouts) - 1]
    return layout


def _apply_background(slide, image: Optional[bytes], fill_hex: str, *, role: str) -> None:
    if image is None:
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = RGBColor.from_string(fill_hex)
        return

    # Identical blobs share one image part across the package.
    try:
        _, r_id = slide.part.get_or_add_image_part(io.BytesIO(image))
    except ValueError as exc:
        raise ImageDecodeError(
            f"{role} image cannot be embedded: {exc}", role=role, original_error=exc
        ) from exc
    bg_pr = slide._element.cSld.get_or_add_bgPr()
    for child in list(bg_pr):
        if child.tag in _FILL_TAGS:
            bg_pr.remove(child)
    bg_pr.insert(0, _picture_fill(r_id))


def _picture_fill(r_id: str):
    blip_fill = OxmlElement("a:blipFill")
    blip_fill.set("dpi", "0")
    blip_fill.set("rotWithShape", "1")
    blip = OxmlElement("a:blip")
    blip.set(qn("r:embed"), r_id)
    blip_fill.append(blip)
    stretch = OxmlElement("a:stretch")
    stretch.append(OxmlElement("a:fillRect"))
    blip_fill.append(stretch)
    return blip_fill


def _apply_bullet(paragraph, bullet_char: str) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_pr.set("marL", str(_BULLET_INDENT))
    p_pr.set("indent", str(-_BULLET_INDENT))
    size = OxmlElement("a:buSzPct")
    size.set("val", "100000")
    char = OxmlElement("a:buChar")
    char.set("char", bullet_char)
    p_pr.insert(0, size)
    p_pr.insert(1, char)


def _style_runs(paragraph, size_pt: int, color_hex: str, *, bold: bool = False) -> None:
    for run in paragraph.runs:
        font = run.font
        font.size = Pt(size_pt)
        font.bold = bold
        font.color.rgb = RGBColor.from_string(color_hex)
