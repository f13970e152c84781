import base64
import io

import pytest

from topic_deck import Outline, OutlineSlide


def _png_bytes(color) -> bytes:
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (16, 9), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture(scope="session")
def cover_png() -> bytes:
    return _png_bytes((200, 30, 30))


@pytest.fixture(scope="session")
def content_png() -> bytes:
    return _png_bytes((30, 200, 30))


@pytest.fixture(scope="session")
def cover_data_uri(cover_png) -> str:
    return "data:image/png;base64," + base64.b64encode(cover_png).decode("ascii")


@pytest.fixture
def sample_outline() -> Outline:
    return Outline(
        title="Sejarah AI",
        slides=[
            OutlineSlide(title="Awal Mula", points=["Turing 1950", "Dartmouth 1956"]),
            OutlineSlide(title="Musim Dingin AI", points=["Pendanaan turun"]),
            OutlineSlide(title="Era Modern", points=[]),
        ],
    )
