# Palette data: curated presets only; random/analogous/pastel palettes are synthesized.
from .palettes import PALETTE_HEX

__all__ = ["PALETTE_HEX"]
