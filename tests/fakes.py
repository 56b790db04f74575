"""
Deterministic stand-ins for the shaping and publishing collaborators used across tests.
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from spiral_thoughts.graphics.fonts import FontSet
from spiral_thoughts.graphics.shaper import ShapedText, TextShaper

QUOTE_CHARS = ("“", "”")


def font_size(font) -> float:
    """Fake fonts are plain numbers; real FreeType fonts carry .size."""
    return float(getattr(font, "size", font))


class FakeShaper(TextShaper):
    """
    Every character advances half the font size. Ink spans 0.25..1.25 × size below a
    top-left origin ("la") or 0.75 above / 0.25 below a baseline origin ("ls").
    Quote marks are short raised glyphs like in real fonts.
    Draw calls are recorded and painted as filled rectangles over the ink box.
    """

    def __init__(self, char_ratio: float = 0.5, left_bearing: float = 0.0):
        self.char_ratio = char_ratio
        self.left_bearing = left_bearing
        self.calls: list[dict] = []

    def shape(self, text, font, *, anchor="la"):
        size = font_size(font)
        advance = len(text) * size * self.char_ratio
        if text in QUOTE_CHARS:
            bbox = (0.0, 0.05 * size, 0.4 * size, 0.35 * size)
        elif anchor == "ls":
            bbox = (self.left_bearing, -0.75 * size, advance + self.left_bearing, 0.25 * size)
        else:
            bbox = (self.left_bearing, 0.25 * size, advance + self.left_bearing, 1.25 * size)
        return ShapedText(text, advance, bbox)

    def draw(self, draw, xy, text, font, fill, *, anchor="la"):
        self.calls.append({"text": text, "xy": xy, "fill": fill, "font": font, "anchor": anchor})
        l, t, r, b = self.shape(text, font, anchor=anchor).bbox
        x, y = xy
        draw.rectangle([x + l, y + t, x + r, y + b], fill=fill)


def fake_fonts(body: int = 44, brand: int = 28) -> FontSet:
    quote = int(round(body * 2.15))
    return FontSet(body=body, brand=brand, quote=quote, body_size=body, brand_size=brand, quote_size=quote)


class FakePublisher:
    """Records uploads; the calls numbered in `fail_calls` (1-based) raise `error` instead."""

    def __init__(self, fail_calls: tuple[int, ...] = (), error: Exception | None = None):
        self.fail_calls = set(fail_calls)
        self.error = error
        self.calls = 0
        self.saved: list[tuple[Path, str]] = []

    def save_image(self, image_path, thought):
        self.calls += 1
        if self.calls in self.fail_calls:
            raise self.error
        self.saved.append((Path(image_path), thought))
        return f"https://drive.google.com/uc?id=fake{self.calls}"
