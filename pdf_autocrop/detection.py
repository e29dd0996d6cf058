"""Content bounding box detection and crop rectangle computation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import ContentRect, Margins, PageBounds

if TYPE_CHECKING:
    from .raster import Raster
    from .visualizer import DebugVisualizer


def detect_content_rect(raster: Raster) -> ContentRect:
    """Find the smallest rectangle that contains every non-blank pixel.

    Scans inward from each edge and stops at the first row or column that
    holds any non-blank pixel. Rows are checked across the full raster width
    and columns across the full raster height. A cursor never moves past its
    opposite cursor, so an all-blank raster collapses to a rectangle with
    ``top == bottom`` and ``left == right``.

    Args:
        raster: Rendered page

    Returns:
        Detected content rectangle in raster coordinates
    """
    top = 0
    bottom = raster.height - 1
    left = 0
    right = raster.width - 1

    while top < bottom and raster.row_is_blank(top):
        top += 1

    while top < bottom and raster.row_is_blank(bottom):
        bottom -= 1

    while left < right and raster.column_is_blank(left):
        left += 1

    while left < right and raster.column_is_blank(right):
        right -= 1

    return ContentRect(top=top, left=left, bottom=bottom, right=right)


def apply_margins(rect: ContentRect, margins: Margins, width: int, height: int) -> ContentRect:
    """Grow the rectangle by the margins, clamped to a ``width x height`` raster.

    Sides with a zero margin keep their detected value. An inverted rectangle
    is passed through as is.
    """
    top, left, bottom, right = rect.as_tuple()

    if margins.top > 0:
        top = max(0, top - margins.top)
    if margins.left > 0:
        left = max(0, left - margins.left)
    if margins.bottom > 0:
        bottom = min(height - 1, bottom + margins.bottom)
    if margins.right > 0:
        right = min(width - 1, right + margins.right)

    return ContentRect(top=top, left=left, bottom=bottom, right=right)


def to_page_bounds(rect: ContentRect, height: int) -> PageBounds:
    """Convert a raster rectangle to page coordinates (origin bottom-left).

    The vertical offset is anchored at the rectangle's bottom row:
    ``y = height - bottom``. Degenerate rectangles produce zero or negative
    sizes instead of an error.
    """
    return PageBounds(
        x=rect.left,
        y=height - rect.bottom,
        width=rect.right - rect.left,
        height=rect.bottom - rect.top,
    )


def compute_page_bounds(
    raster: Raster,
    margins: Margins,
    visualizer: DebugVisualizer | None = None,
) -> PageBounds:
    """Detect content, pad it and return the new page bounds.

    Args:
        raster: Page rendered at one pixel per page unit
        margins: Padding to add back around the detected content
        visualizer: Optional debug visualizer to save intermediate images

    Returns:
        Page bounds in page coordinates
    """
    detected = detect_content_rect(raster)
    padded = apply_margins(detected, margins, raster.width, raster.height)

    if visualizer:
        visualizer.save_content_rect(raster, detected, padded)

    return to_page_bounds(padded, raster.height)
