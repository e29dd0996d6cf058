"""Custom exceptions for PDF auto-cropping."""


class AutoCropError(Exception):
    """Base exception for auto-crop errors."""

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        self.user_message = user_message or message


class LoadError(AutoCropError):
    """Failed to open or parse the input document."""

    def __init__(self, path: str, detail: str = ""):
        msg = f"Could not load document: {path}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(
            msg,
            "Could not open PDF file. The file may be missing, corrupted or not a PDF.",
        )
        self.path = path


class RenderError(AutoCropError):
    """A single page could not be rasterized."""

    def __init__(self, index: int | None = None, detail: str = ""):
        where = f"page {index + 1}" if index is not None else "page"
        msg = f"Could not render {where}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg, f"Could not render {where}. It was left uncropped.")
        self.index = index


class WriteError(AutoCropError):
    """The output document could not be saved."""

    def __init__(self, path: str, detail: str = ""):
        msg = f"Could not write document: {path}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(
            msg,
            "Could not save the cropped PDF. Check that the output location is writable.",
        )
        self.path = path


class InvalidBoundsError(AutoCropError):
    """The document refused the computed page bounds (e.g. zero area)."""

    def __init__(self, index: int | None = None, detail: str = ""):
        where = f"page {index + 1}" if index is not None else "page"
        msg = f"Invalid bounds for {where}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg, f"No visible content found on {where}. It was left uncropped.")
        self.index = index
