"""Data models for PDF auto-cropping."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Sequence

WHITE = (255, 255, 255)


@dataclass(frozen=True)
class Margins:
    """Extra padding added back around the detected content (top, left, bottom, right).

    Values are in raster pixels, which equal page units at the 1:1 render scale.
    """

    top: int = 0
    left: int = 0
    bottom: int = 0
    right: int = 0

    def __post_init__(self) -> None:
        for name, value in zip(("top", "left", "bottom", "right"), self.as_tuple()):
            if value < 0:
                raise ValueError(f"margin {name} must be >= 0, got {value}")

    @classmethod
    def zero(cls) -> Margins:
        return cls(0, 0, 0, 0)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> Margins:
        """Build margins from up to four values, missing trailing sides are 0."""
        values = [int(v) for v in values]
        if len(values) > 4:
            raise ValueError(f"At most four margins expected, got {len(values)}")
        values += [0] * (4 - len(values))
        return cls(*values)

    @classmethod
    def parse(cls, value: str) -> Margins:
        """Parse margin string into Margins object.

        Supports formats:
            - Single value: "10" -> all sides 10
            - Two values: "10,20" -> vertical 10, horizontal 20
            - Three or four values: "10,20,30,40" -> top, left, bottom, right
              (a missing right margin is 0)

        Separators: , : / ; or whitespace
        """
        parts = [p for p in re.split(r"[,:;/\s]+", value.strip()) if p]
        try:
            numbers = [int(p) for p in parts]
        except ValueError:
            raise ValueError(f"Invalid margin format: {value}") from None

        if len(numbers) == 1:
            return cls(numbers[0], numbers[0], numbers[0], numbers[0])
        elif len(numbers) == 2:
            # vertical, horizontal
            return cls(numbers[0], numbers[1], numbers[0], numbers[1])
        elif len(numbers) in (3, 4):
            return cls.from_sequence(numbers)
        else:
            raise ValueError(f"Invalid margin format: {value}")

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return margins as (top, left, bottom, right) tuple."""
        return (self.top, self.left, self.bottom, self.right)

    @property
    def is_zero(self) -> bool:
        return not any(self.as_tuple())


@dataclass(frozen=True)
class ContentRect:
    """Axis-aligned rectangle in raster coordinates (origin top-left, rows grow down)."""

    top: int
    left: int
    bottom: int
    right: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def is_degenerate(self) -> bool:
        """True when the rectangle has zero or inverted extent."""
        return self.top >= self.bottom or self.left >= self.right

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return rectangle as (top, left, bottom, right) tuple."""
        return (self.top, self.left, self.bottom, self.right)


@dataclass(frozen=True)
class PageBounds:
    """Visible page rectangle in page coordinates (origin bottom-left, y grows up).

    Width and height can be zero or negative when the content rectangle was
    degenerate; the page writer decides what to do with those.
    """

    x: float
    y: float
    width: float
    height: float

    def as_corners(self) -> tuple[float, float, float, float]:
        """Return (x0, y0, x1, y1)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class PageStatus(Enum):
    """Outcome of cropping a single page."""

    CROPPED = "cropped"
    SKIPPED = "skipped"


@dataclass
class PageResult:
    """Per-page result of a crop run."""

    index: int
    status: PageStatus
    bounds: PageBounds | None = None
    reason: str | None = None

    @property
    def cropped(self) -> bool:
        return self.status is PageStatus.CROPPED


@dataclass
class CropConfig:
    """Runtime configuration for cropping: margins and the blank reference color."""

    margins: Margins = field(default_factory=Margins.zero)
    blank_color: tuple[int, int, int] = WHITE

    def validate(self) -> None:
        """Validate the configuration."""
        if len(self.blank_color) != 3:
            raise ValueError(f"blank_color must have 3 channels, got {len(self.blank_color)}")
        for channel in self.blank_color:
            if not (0 <= channel <= 255):
                raise ValueError(f"blank_color channels must be 0-255, got {channel}")

    def with_margins(self, margins: Margins) -> CropConfig:
        return CropConfig(margins=margins, blank_color=self.blank_color)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["blank_color"] = list(self.blank_color)
        return data

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CropConfig:
        """Create CropConfig from dictionary.

        ``margins`` may be a mapping with any of top/left/bottom/right, a list
        of up to four values, or a margin string such as ``"10,20"``.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Crop config must be a JSON object, got {type(data).__name__}")

        config = cls()

        try:
            if "margins" in data:
                m = data["margins"]
                if isinstance(m, dict):
                    config.margins = Margins(**{k: int(v) for k, v in m.items()})
                elif isinstance(m, str):
                    config.margins = Margins.parse(m)
                else:
                    config.margins = Margins.from_sequence(m)

            if "blank_color" in data:
                config.blank_color = tuple(int(c) for c in data["blank_color"])
        except TypeError as e:
            raise ValueError(f"Invalid crop config: {e}") from e

        config.validate()
        return config

    @classmethod
    def from_json(cls, json_str: str) -> CropConfig:
        """Parse CropConfig from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_file(cls, path: str | Path) -> CropConfig:
        """Load CropConfig from JSON file."""
        with open(path) as f:
            return cls.from_json(f.read())
