"""Document backends: loading, rendering and rewriting page bounds."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

import fitz  # PyMuPDF
import numpy as np

from .exceptions import InvalidBoundsError, LoadError, RenderError, WriteError
from .models import WHITE, PageBounds
from .raster import Raster

logger = logging.getLogger(__name__)


class DocumentBackend(Protocol):
    """Operations the cropper needs from a document/rendering library."""

    def load_document(self, path: str | Path) -> Any: ...

    def page_count(self, document: Any) -> int: ...

    def get_page(self, document: Any, index: int) -> Any: ...

    def render_to_raster(self, page: Any, width: int, height: int) -> Raster: ...

    def page_media_size(self, page: Any) -> tuple[float, float]: ...

    def set_page_bounds(self, page: Any, bounds: PageBounds) -> None: ...

    def write_document(self, document: Any, path: str | Path) -> None: ...

    def close_document(self, document: Any) -> None: ...


class PyMuPDFBackend:
    """Backend built on PyMuPDF.

    Pages are rendered over their visible area (``page.rect``) and the new
    bounds replace the page's ``/MediaBox`` (any ``/CropBox`` is dropped).
    """

    def __init__(self, blank_color: tuple[int, int, int] = WHITE):
        self.blank_color = blank_color

    def load_document(self, path: str | Path) -> fitz.Document:
        try:
            doc = fitz.open(str(path))
        except Exception as e:
            raise LoadError(str(path), str(e)) from e

        if not doc.is_pdf:
            doc.close()
            raise LoadError(str(path), "not a PDF document")
        if doc.needs_pass:
            doc.close()
            raise LoadError(str(path), "document is encrypted")
        return doc

    def page_count(self, document: fitz.Document) -> int:
        return document.page_count

    def get_page(self, document: fitz.Document, index: int) -> fitz.Page:
        return document.load_page(index)

    def page_media_size(self, page: fitz.Page) -> tuple[float, float]:
        rect = page.rect
        return rect.width, rect.height

    def render_to_raster(self, page: fitz.Page, width: int, height: int) -> Raster:
        """Render the page to an RGB raster of exactly ``width x height`` pixels."""
        rect = page.rect
        if width <= 0 or height <= 0 or rect.is_empty:
            raise RenderError(page.number, f"invalid render size {width}x{height}")

        matrix = fitz.Matrix(width / rect.width, height / rect.height)
        try:
            pix = page.get_pixmap(matrix=matrix, colorspace=fitz.csRGB, alpha=False)
        except Exception as e:
            raise RenderError(page.number, str(e)) from e

        pixels = np.frombuffer(pix.samples, dtype=np.uint8).reshape(pix.height, pix.width, pix.n)
        pixels = _fit_to_size(pixels, width, height, self.blank_color)
        try:
            return Raster(pixels, self.blank_color)
        except ValueError as e:
            raise RenderError(page.number, str(e)) from e

    def set_page_bounds(self, page: fitz.Page, bounds: PageBounds) -> None:
        """Write the bounds as the page's new media box.

        ``bounds`` are relative to the bottom-left corner of the visible
        (rotated) area. They are flipped to PyMuPDF's top-left page space,
        derotated, shifted by the crop box position and finally flipped into
        PDF user space. ``set_mediabox`` drops the old ``/CropBox``, so the
        visible area becomes the new media box.

        Raises:
            InvalidBoundsError: PyMuPDF rejected the box (zero area)
        """
        # Same whole-unit height the page was rendered at, not page.rect.height.
        height = int(page.rect.height)
        x0, y0, x1, y1 = bounds.as_corners()

        rect = fitz.Rect(x0, height - y1, x1, height - y0).normalize()
        rect = rect * page.derotation_matrix

        cropbox = page.cropbox
        mediabox = page.mediabox
        left = cropbox.x0 + rect.x0
        right = cropbox.x0 + rect.x1
        top = cropbox.y0 + rect.y0
        bottom = cropbox.y0 + rect.y1
        box = fitz.Rect(left, mediabox.y1 - bottom, right, mediabox.y1 - top)

        try:
            page.set_mediabox(box)
        except ValueError as e:
            raise InvalidBoundsError(page.number, str(box)) from e
        logger.debug("Page %d media box set to %s", page.number + 1, box)

    def write_document(self, document: fitz.Document, path: str | Path) -> None:
        """Save the document; saving over the opened source goes through a temp file."""
        path = Path(path)
        try:
            if document.name and Path(document.name).resolve() == path.resolve():
                _save_replacing(document, path)
            else:
                document.save(str(path), garbage=3, deflate=True)
        except Exception as e:
            raise WriteError(str(path), str(e)) from e

    def close_document(self, document: fitz.Document) -> None:
        if not document.is_closed:
            document.close()


def _fit_to_size(
    pixels: np.ndarray, width: int, height: int, fill: tuple[int, int, int]
) -> np.ndarray:
    """Trim or pad a rendered array so it is exactly ``height x width``.

    PyMuPDF rounds the pixmap size, which can be one pixel off the request.
    """
    pixels = pixels[:height, :width]
    pad_h = height - pixels.shape[0]
    pad_w = width - pixels.shape[1]
    if pad_h or pad_w:
        padded = np.empty((height, width, pixels.shape[2]), dtype=pixels.dtype)
        padded[:, :] = fill[: pixels.shape[2]]
        padded[: pixels.shape[0], : pixels.shape[1]] = pixels
        pixels = padded
    return pixels


def _save_replacing(document: fitz.Document, path: Path) -> None:
    """Save to a sibling temp file and move it over ``path``.

    The existing file is untouched until the new one is complete.
    """
    fd, tmp_name = tempfile.mkstemp(suffix=".pdf", prefix=f".{path.stem}-", dir=path.parent)
    os.close(fd)
    try:
        document.save(tmp_name, garbage=3, deflate=True)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
