"""Crop PDF pages to their visible content."""

__version__ = "0.1.0"


def __getattr__(name):
    """Lazy import to avoid loading PyMuPDF until a backend is needed."""
    if name in ("crop_document", "crop_file", "crop_page"):
        from .cropping import crop_document, crop_file, crop_page
        return {"crop_document": crop_document, "crop_file": crop_file, "crop_page": crop_page}[name]
    if name in ("apply_margins", "compute_page_bounds", "detect_content_rect", "to_page_bounds"):
        from .detection import apply_margins, compute_page_bounds, detect_content_rect, to_page_bounds
        return {
            "apply_margins": apply_margins,
            "compute_page_bounds": compute_page_bounds,
            "detect_content_rect": detect_content_rect,
            "to_page_bounds": to_page_bounds,
        }[name]
    if name in ("ContentRect", "CropConfig", "Margins", "PageBounds", "PageResult", "PageStatus"):
        from .models import ContentRect, CropConfig, Margins, PageBounds, PageResult, PageStatus
        return {
            "ContentRect": ContentRect,
            "CropConfig": CropConfig,
            "Margins": Margins,
            "PageBounds": PageBounds,
            "PageResult": PageResult,
            "PageStatus": PageStatus,
        }[name]
    if name == "Raster":
        from .raster import Raster
        return Raster
    if name == "PyMuPDFBackend":
        from .backend import PyMuPDFBackend
        return PyMuPDFBackend
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "crop_page",
    "crop_document",
    "crop_file",
    "detect_content_rect",
    "apply_margins",
    "to_page_bounds",
    "compute_page_bounds",
    "Margins",
    "ContentRect",
    "PageBounds",
    "PageResult",
    "PageStatus",
    "CropConfig",
    "Raster",
    "PyMuPDFBackend",
]
