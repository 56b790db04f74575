"""
Schema for one image job and its outcome.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .graphics.text import PANEL_PADDING

SCRIPTS = ("latin", "devanagari")


@dataclass
class RenderJob:
    """
    Parameters for one output image. One job → one canvas → one PNG.
    script "latin" uses the fixed 90% panel width; other scripts fit the panel to the lines.
    """

    width: int
    height: int
    gradient_type: str = "Spiral"
    palette_mode: str = "palette"   # palette | random | analogous | pastel
    color_count: int | None = 3   # None: 2-5 colors drawn per image
    brand_text: str = ""
    thought_text: str = ""
    script: str = "latin"           # latin | devanagari
    quotes: bool = False
    font_size: int = 44
    brand_font_size: int = 28
    max_width_ratio: float = 0.9
    output_path: Path | None = None

    @property
    def max_text_width(self) -> float:
        """Wrap width; never so wide that the panel padding would be clipped by the canvas."""
        return max(1.0, min(self.width * self.max_width_ratio, self.width - 2 * PANEL_PADDING))

    @property
    def fit_panel_to_lines(self) -> bool:
        return self.script != "latin"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging."""
        return {
            "width": self.width,
            "height": self.height,
            "gradient_type": self.gradient_type,
            "palette_mode": self.palette_mode,
            "color_count": self.color_count,
            "script": self.script,
            "quotes": self.quotes,
            "brand_text": self.brand_text,
            "thought_chars": len(self.thought_text or ""),
            "output_path": str(self.output_path) if self.output_path else None,
        }


@dataclass
class RenderResult:
    """Outcome of one job: written PNG, palette used, public URL when published, error if any."""

    job: RenderJob
    path: Path | None = None
    palette: tuple[str, ...] = ()
    url: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "path": str(self.path) if self.path else None,
            "palette": list(self.palette),
            "url": self.url,
            "error": self.error,
        }
