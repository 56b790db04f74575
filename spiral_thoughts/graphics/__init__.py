"""
Graphics: font lookup, text shaping, paragraph layout, composition.
"""
from .compositor import compose
from .fonts import FontSet, load_fonts, resolve_font
from .shaper import PillowShaper, ShapedText, TextShaper
from .text import LayoutBlock, TextLine, layout_brand, layout_paragraph, wrap_text

__all__ = [
    "compose",
    "FontSet",
    "load_fonts",
    "resolve_font",
    "PillowShaper",
    "ShapedText",
    "TextShaper",
    "LayoutBlock",
    "TextLine",
    "layout_brand",
    "layout_paragraph",
    "wrap_text",
]
