# Procedural image engine: palettes and gradient fields, our algorithms and data only

from .palette import Color, Palette, PaletteSource, build_preset_table, hsl_to_rgb, PALETTE_MODES
from .renderer import (
    GRADIENT_TYPES,
    gradient_color,
    is_supported,
    normalize_gradient_type,
    render_gradient,
    render_spiral,
    spiral_t,
)

__all__ = [
    "Color",
    "Palette",
    "PaletteSource",
    "build_preset_table",
    "hsl_to_rgb",
    "PALETTE_MODES",
    "GRADIENT_TYPES",
    "gradient_color",
    "is_supported",
    "normalize_gradient_type",
    "render_gradient",
    "render_spiral",
    "spiral_t",
]
