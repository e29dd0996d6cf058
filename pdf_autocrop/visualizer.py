"""Debug visualization utilities for content detection."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import cv2
import numpy as np

if TYPE_CHECKING:
    from .models import ContentRect
    from .raster import Raster


class DebugVisualizer:
    """Saves a debug image of the detected and padded content box for each page."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        if self.output_dir.exists():
            # Backup existing debug dir before cleaning
            backup_dir = self.output_dir.with_suffix(".bak")
            if backup_dir.exists():
                shutil.rmtree(backup_dir)
            self.output_dir.rename(backup_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.step = 0
        self.page_index: int | None = None

    def begin_page(self, index: int) -> None:
        self.page_index = index

    def _save(self, name: str, img: np.ndarray) -> Path:
        self.step += 1
        if self.page_index is not None:
            name = f"page{self.page_index + 1:03d}_{name}"
        path = self.output_dir / f"{self.step:02d}_{name}.png"
        cv2.imwrite(str(path), img)
        return path

    def save_content_rect(self, raster: Raster, detected: ContentRect, padded: ContentRect) -> Path:
        """Save the raster with the detected (red) and padded (green) rectangles.

        Args:
            raster: Rendered page
            detected: Rectangle found by the edge scans
            padded: Rectangle after margins were applied
        """
        vis = raster.to_bgr()

        cv2.rectangle(vis, (detected.left, detected.top), (detected.right, detected.bottom), (0, 0, 255), 1)
        cv2.rectangle(vis, (padded.left, padded.top), (padded.right, padded.bottom), (0, 255, 0), 1)

        label = f"T={padded.top} L={padded.left} B={padded.bottom} R={padded.right}"
        if padded.is_degenerate:
            label += " (degenerate)"
        cv2.putText(vis, label, (5, 15), cv2.FONT_HERSHEY_SIMPLEX, 0.4, (255, 0, 0), 1)

        return self._save("content", vis)
