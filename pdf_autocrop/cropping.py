"""Crop every page of a document to its content."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .detection import compute_page_bounds
from .exceptions import InvalidBoundsError, RenderError
from .models import CropConfig, Margins, PageResult, PageStatus

if TYPE_CHECKING:
    from .backend import DocumentBackend
    from .visualizer import DebugVisualizer

logger = logging.getLogger(__name__)


def crop_page(
    backend: DocumentBackend,
    page: Any,
    margins: Margins,
    index: int = 0,
    visualizer: DebugVisualizer | None = None,
) -> PageResult:
    """Crop one page in place.

    The page is rendered at one pixel per page unit, its content box is
    detected and padded, and the result is written back as the page bounds.
    A page that cannot be rendered, or whose bounds the document rejects,
    is left untouched and reported as skipped.
    """
    width, height = backend.page_media_size(page)
    try:
        raster = backend.render_to_raster(page, int(width), int(height))
    except RenderError as e:
        logger.warning("Skipping page %d: %s", index + 1, e)
        return PageResult(index, PageStatus.SKIPPED, reason=str(e))

    if visualizer:
        visualizer.begin_page(index)
    bounds = compute_page_bounds(raster, margins, visualizer=visualizer)
    try:
        backend.set_page_bounds(page, bounds)
    except InvalidBoundsError as e:
        logger.warning("Skipping page %d: %s", index + 1, e)
        return PageResult(index, PageStatus.SKIPPED, bounds=bounds, reason=str(e))
    logger.debug(
        "Page %d: %dx%d -> x=%s y=%s w=%s h=%s",
        index + 1, raster.width, raster.height,
        bounds.x, bounds.y, bounds.width, bounds.height,
    )
    return PageResult(index, PageStatus.CROPPED, bounds=bounds)


def crop_document(
    backend: DocumentBackend,
    document: Any,
    margins: Margins,
    visualizer: DebugVisualizer | None = None,
) -> list[PageResult]:
    """Crop all pages of a loaded document, in page order."""
    results = []
    for index in range(backend.page_count(document)):
        page = backend.get_page(document, index)
        results.append(crop_page(backend, page, margins, index=index, visualizer=visualizer))
    return results


def crop_file(
    input_path: str | Path,
    output_path: str | Path,
    config: CropConfig | None = None,
    backend: DocumentBackend | None = None,
    visualizer: DebugVisualizer | None = None,
) -> list[PageResult]:
    """Load a PDF, crop every page and save the result.

    Raises:
        LoadError: The input could not be opened as a PDF
        WriteError: The output could not be saved
    """
    config = config or CropConfig()
    config.validate()
    if backend is None:
        from .backend import PyMuPDFBackend

        backend = PyMuPDFBackend(blank_color=config.blank_color)

    document = backend.load_document(input_path)
    try:
        results = crop_document(backend, document, config.margins, visualizer=visualizer)
        backend.write_document(document, output_path)
    finally:
        backend.close_document(document)

    cropped = sum(1 for r in results if r.cropped)
    logger.info(
        "Cropped %d of %d pages, saved to %s", cropped, len(results), output_path
    )
    return results
