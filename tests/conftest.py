"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
from io import BytesIO

from fastapi.testclient import TestClient
from PIL import Image
import pytest

from converter.main import app


def build_image(fmt: str = "PNG", mode: str = "RGB", size: tuple[int, int] = (32, 24)) -> bytes:
    """Create a small gradient image in memory and return its encoded bytes."""
    img = Image.new(mode, size)
    if mode in ("RGB", "RGBA"):
        pixels = img.load()
        for x in range(size[0]):
            for y in range(size[1]):
                color = (x * 8 % 256, y * 10 % 256, (x + y) * 4 % 256)
                pixels[x, y] = color + (128,) if mode == "RGBA" else color
    buf = BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    return build_image


@pytest.fixture
def png_bytes() -> bytes:
    return build_image("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return build_image("JPEG")


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client for the converter API; server errors come back as responses."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
