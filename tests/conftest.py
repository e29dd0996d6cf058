from __future__ import annotations

import fitz
import numpy as np
import pytest

from pdf_autocrop.exceptions import RenderError
from pdf_autocrop.raster import Raster


def white(width: int, height: int) -> np.ndarray:
    return np.full((height, width, 3), 255, dtype=np.uint8)


def with_black_box(width: int, height: int, top: int, left: int, bottom: int, right: int) -> np.ndarray:
    """White RGB array with a black box covering rows top..bottom and columns left..right."""
    pixels = white(width, height)
    pixels[top : bottom + 1, left : right + 1] = 0
    return pixels


class FakePage:
    def __init__(self, width: int, height: int, pixels: np.ndarray | None = None, fail: bool = False):
        self.width = width
        self.height = height
        self.pixels = pixels if pixels is not None else white(width, height)
        self.fail = fail
        self.bounds = None


class FakeBackend:
    """In-memory document backend; a document is a list of FakePage."""

    def __init__(self):
        self.rendered: list[tuple[int, int]] = []
        self.written: list[tuple[list[FakePage], str]] = []
        self.closed = False

    def load_document(self, path):
        raise NotImplementedError

    def page_count(self, document):
        return len(document)

    def get_page(self, document, index):
        return document[index]

    def page_media_size(self, page):
        return float(page.width), float(page.height)

    def render_to_raster(self, page, width, height):
        self.rendered.append((width, height))
        if page.fail:
            raise RenderError(None, "broken page")
        return Raster(page.pixels)

    def set_page_bounds(self, page, bounds):
        page.bounds = bounds

    def write_document(self, document, path):
        self.written.append((document, str(path)))

    def close_document(self, document):
        self.closed = True


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def boxed_pdf(tmp_path):
    """Two-page PDF, 200x100 pages, each with a black box at x 30-130, y 20-60 (top-left origin)."""
    path = tmp_path / "boxed.pdf"
    doc = fitz.open()
    for _ in range(2):
        page = doc.new_page(width=200, height=100)
        page.draw_rect(fitz.Rect(30, 20, 130, 60), color=None, fill=(0, 0, 0))
    doc.save(str(path))
    doc.close()
    return path
