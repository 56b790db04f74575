"""
Compositor: gradient base → translucent rounded panel → shadow/foreground text passes → brand label.
Draw order matters: the panel precedes the text it frames and each shadow precedes its glyphs.
Alpha colors are blended into the opaque RGB canvas.
"""
from typing import TYPE_CHECKING, Any

from PIL import Image, ImageDraw

from .shaper import TextShaper
from .text import LayoutBlock, TextLine

if TYPE_CHECKING:
    import numpy as np

    from .fonts import FontSet

PANEL_FILL = (0, 0, 0, 100)
PANEL_RADIUS = 20
SHADOW_FILL = (0, 0, 0, 120)
TEXT_FILL = (255, 255, 255, 240)
SHADOW_OFFSET = 2


def draw_panel(draw: ImageDraw.ImageDraw, block: LayoutBlock) -> None:
    x0, y0, x1, y1 = block.box
    draw.rounded_rectangle(
        [int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1))],
        radius=PANEL_RADIUS,
        fill=PANEL_FILL,
    )


def draw_shadowed(draw: ImageDraw.ImageDraw, line: TextLine, font: Any, shaper: TextShaper) -> None:
    """Shadow copy offset by (+2, +2), then the foreground copy."""
    shaper.draw(
        draw,
        (line.x + SHADOW_OFFSET, line.y + SHADOW_OFFSET),
        line.text,
        font,
        SHADOW_FILL,
        anchor=line.anchor,
    )
    shaper.draw(draw, (line.x, line.y), line.text, font, TEXT_FILL, anchor=line.anchor)


def compose(
    gradient: "np.ndarray",
    block: LayoutBlock | None,
    brand: TextLine | None,
    fonts: "FontSet",
    shaper: TextShaper,
) -> Image.Image:
    """Build the final opaque RGB image. Missing block or brand are simply not drawn."""
    image = Image.fromarray(gradient, "RGB")
    draw = ImageDraw.Draw(image, "RGBA")

    if block is not None:
        draw_panel(draw, block)
        if block.opening_quote is not None:
            draw_shadowed(draw, block.opening_quote, fonts.quote, shaper)
        for line in block.lines:
            draw_shadowed(draw, line, fonts.body, shaper)
        if block.closing_quote is not None:
            draw_shadowed(draw, block.closing_quote, fonts.quote, shaper)

    if brand is not None:
        draw_shadowed(draw, brand, fonts.brand, shaper)
    return image
