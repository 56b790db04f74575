"""
Text layout: greedy word wrap on shaped widths, paragraph block geometry, brand label placement.
One engine for both paragraph styles; `quotes=True` adds oversized opening/closing quote glyphs.
"""
from dataclasses import dataclass
from typing import Any

from .shaper import ShapedText, TextShaper

LINE_SPACING = 1.6
PANEL_PADDING = 20
BRAND_BASELINE = 1.2
OPEN_QUOTE = "“"
CLOSE_QUOTE = "”"


@dataclass
class TextLine:
    """One displayable line with its shaped measurements and, once laid out, its draw origin."""
    text: str
    advance: float
    bbox: tuple[float, float, float, float]
    x: float = 0.0
    y: float = 0.0
    anchor: str = "la"

    @classmethod
    def from_shaped(cls, shaped: ShapedText, *, anchor: str = "la") -> "TextLine":
        return cls(shaped.text, shaped.advance, shaped.bbox, anchor=anchor)

    @property
    def width(self) -> float:
        return self.bbox[2] - self.bbox[0]

    def ink_box(self) -> tuple[float, float, float, float]:
        """Glyph bounds on the canvas for the current origin."""
        l, t, r, b = self.bbox
        return (self.x + l, self.y + t, self.x + r, self.y + b)


@dataclass
class LayoutBlock:
    """Rounded panel geometry plus the positioned lines (and quote glyphs) it frames."""
    x: float
    y: float
    width: float
    height: float
    lines: list[TextLine]
    line_spacing: float
    opening_quote: TextLine | None = None
    closing_quote: TextLine | None = None
    padding: float = PANEL_PADDING

    @property
    def box(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def glyphs(self) -> list[TextLine]:
        """Everything drawn inside the panel: quote glyphs first, then body lines."""
        out = [q for q in (self.opening_quote,) if q is not None]
        out.extend(self.lines)
        if self.closing_quote is not None:
            out.append(self.closing_quote)
        return out

    def contains(self, box: tuple[float, float, float, float], *, padding: float = 0.0) -> bool:
        l, t, r, b = box
        return (
            l >= self.x + padding
            and t >= self.y + padding
            and r <= self.x + self.width - padding
            and b <= self.y + self.height - padding
        )


def wrap_text(text: str, font: Any, shaper: TextShaper, max_width: float) -> list[TextLine]:
    """
    Greedy line fill on shaped advance widths. Words are split on single spaces; a word wider
    than max_width is never broken and becomes its own line. Empty input yields [].
    """
    words = [w for w in (text or "").split(" ") if w.strip()]
    lines: list[TextLine] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if shaper.measure(candidate, font) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(TextLine.from_shaped(shaper.shape(current, font)))
        current = word
    if current:
        lines.append(TextLine.from_shaped(shaper.shape(current, font)))
    return lines


def block_height(line_count: int, font_size: float, quote_allowance: float = 0.0) -> float:
    """Panel height: line slots + optional quote allowance + padding on both sides."""
    return line_count * font_size * LINE_SPACING + quote_allowance + 2 * PANEL_PADDING


def layout_paragraph(
    lines: list[TextLine],
    canvas_width: int,
    canvas_height: int,
    font_size: float,
    shaper: TextShaper,
    *,
    max_width: float,
    fit_to_lines: bool = False,
    quotes: bool = False,
    quote_font: Any = None,
) -> LayoutBlock | None:
    """
    Position wrapped lines inside a centered panel.
    fit_to_lines: panel width follows the widest measured line; otherwise the fixed max_width cap.
    quotes: reserve room above the text for an opening quote glyph and hang a closing quote
    off the trailing edge of the last line.
    Returns None when there is nothing to draw.
    """
    if not lines:
        return None
    spacing = font_size * LINE_SPACING
    pad = PANEL_PADDING
    widest = max(line.width for line in lines)
    # The fixed cap leaves room for the padding inside the canvas
    cap = max(0.0, min(max_width, canvas_width - 2 * pad))
    content_w = widest if fit_to_lines else max(cap, widest)

    opening = closing = None
    allowance = 0.0
    # Ink that pokes above the first slot or below the last one still has to sit inside the panel
    head = max(0.0, -lines[0].bbox[1])
    tail = max(0.0, lines[-1].bbox[3] - spacing)
    if quotes:
        if quote_font is None:
            raise ValueError("quote_font is required when quotes=True")
        opening = TextLine.from_shaped(shaper.shape(OPEN_QUOTE, quote_font))
        closing = TextLine.from_shaped(shaper.shape(CLOSE_QUOTE, quote_font))
        allowance = (opening.bbox[3] - opening.bbox[1]) + pad
        gap = pad / 2
        # Panel stays centered, so the closing quote's overhang is needed on both sides
        content_w = max(content_w, opening.width, lines[-1].width + 2 * (gap + closing.width))
        # Closing quote hangs from the last line's ink top
        closing_height = closing.bbox[3] - closing.bbox[1]
        tail = max(tail, lines[-1].bbox[1] + closing_height - spacing)

    width = min(content_w + 2 * pad, canvas_width)
    height = block_height(len(lines), font_size, allowance) + head + tail
    x = (canvas_width - width) / 2
    y = (canvas_height - height) / 2
    center_x = canvas_width / 2

    text_top = y + pad + allowance + head
    for i, line in enumerate(lines):
        l, _, r, _ = line.bbox
        line.x = center_x - (l + r) / 2
        line.y = text_top + i * spacing

    if opening is not None and closing is not None:
        ol, ot, orr, _ = opening.bbox
        opening.x = center_x - (ol + orr) / 2
        opening.y = y + pad - ot
        last = lines[-1]
        _, ly0, lx1, _ = last.ink_box()
        cl, ct, _, _ = closing.bbox
        closing.x = lx1 + pad / 2 - cl
        closing.y = ly0 - ct

    return LayoutBlock(
        x=x,
        y=y,
        width=width,
        height=height,
        lines=lines,
        line_spacing=spacing,
        opening_quote=opening,
        closing_quote=closing,
    )


def layout_brand(
    text: str,
    font: Any,
    shaper: TextShaper,
    canvas_width: int,
    canvas_height: int,
    font_size: float,
) -> TextLine | None:
    """Single centered line whose baseline sits 1.2 × font size above the bottom edge."""
    if not text or not text.strip():
        return None
    line = TextLine.from_shaped(shaper.shape(text, font, anchor="ls"), anchor="ls")
    l, _, r, _ = line.bbox
    line.x = canvas_width / 2 - (l + r) / 2
    line.y = canvas_height - BRAND_BASELINE * font_size
    return line
