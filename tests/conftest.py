import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import doc_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from doc_toolkit.core.models import Document, PageGeometry


def make_striped_image(height: int, width: int = 380) -> Image.Image:
    """RGB image whose every row has a distinct colour (row index encoded)."""
    if height == 0:
        return Image.new("RGB", (width, 0), "white")
    data = bytearray()
    for y in range(height):
        data += bytes((y % 256, (y // 256) % 256, 7)) * width
    return Image.frombytes("RGB", (width, height), bytes(data))


# Common test fixtures
@pytest.fixture
def striped_image():
    """Factory for row-striped raster images."""
    return make_striped_image


@pytest.fixture
def a4_geometry():
    """A4 geometry with page-number footers (20mm reserve)."""
    return PageGeometry.a4(include_footer_labels=True)


@pytest.fixture
def sample_documents():
    """Three saved documents."""
    return [
        Document(id=1000, content="<p>First</p>"),
        Document(id=1001, content="<p>Second</p>"),
        Document(id=1002, content="<p>Third</p>"),
    ]


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple capture image on disk."""
    img = Image.new("RGB", (380, 200), color="white")
    img_path = tmp_path / "capture.png"
    img.save(img_path)
    return img_path
