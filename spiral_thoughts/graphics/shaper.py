"""
Text shaping contract: measured advance and tight ink bounds for a string in a font, plus drawing.
Layout decisions are built on these measurements; glyph rendering stays in the shaper.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ShapedText:
    """Shaped string: advance width and ink bbox (left, top, right, bottom) relative to the draw origin."""
    text: str
    advance: float
    bbox: tuple[float, float, float, float]

    @property
    def width(self) -> float:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> float:
        return self.bbox[3] - self.bbox[1]

    @property
    def center_x(self) -> float:
        return (self.bbox[0] + self.bbox[2]) / 2


class TextShaper(ABC):
    """Shapes and draws text. Anchors follow Pillow's two-letter anchor codes ("la", "ls", ...)."""

    @abstractmethod
    def shape(self, text: str, font: Any, *, anchor: str = "la") -> ShapedText:
        """Shape `text` in `font`; bbox is relative to an origin placed with `anchor`."""
        ...

    @abstractmethod
    def draw(
        self,
        draw: Any,
        xy: tuple[float, float],
        text: str,
        font: Any,
        fill: tuple[int, int, int, int],
        *,
        anchor: str = "la",
    ) -> None:
        """Draw shaped `text` at origin `xy` onto a Pillow ImageDraw."""
        ...

    def measure(self, text: str, font: Any) -> float:
        """Shaped advance width, used for wrap decisions."""
        return self.shape(text, font).advance


class PillowShaper(TextShaper):
    """Pillow FreeType shaping (Raqm when the font was loaded with the Raqm layout engine)."""

    def shape(self, text: str, font: Any, *, anchor: str = "la") -> ShapedText:
        advance = float(font.getlength(text))
        left, top, right, bottom = font.getbbox(text, anchor=anchor)
        return ShapedText(text, advance, (float(left), float(top), float(right), float(bottom)))

    def draw(self, draw, xy, text, font, fill, *, anchor: str = "la") -> None:
        draw.text(xy, text, font=font, fill=fill, anchor=anchor)
