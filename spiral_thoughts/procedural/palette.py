"""
Palette sources: curated presets, random RGB, analogous hue rotation, soft pastels.
Every palette is an ordered tuple of Color; order defines the interpolation segments.
"""
import random
from typing import NamedTuple

from .data.palettes import PALETTE_HEX

PALETTE_MODES = ("palette", "random", "analogous", "pastel")

ANALOGOUS_HUE_STEP = 20.0
ANALOGOUS_SATURATION = 0.6
ANALOGOUS_LIGHTNESS = 0.7
PASTEL_MIN = 180
# Color count range when none is configured
MIN_COLORS, MAX_COLORS = 2, 5


class Color(NamedTuple):
    """8-bit RGB color with optional alpha (defaults to opaque)."""
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse #rrggbb or #rrggbbaa."""
        s = value.strip().lstrip("#")
        if len(s) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        r, g, b = int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)
        a = int(s[6:8], 16) if len(s) == 8 else 255
        return cls(r, g, b, a)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


Palette = tuple[Color, ...]


def build_preset_table(hex_table=PALETTE_HEX) -> tuple[Palette, ...]:
    """Parse the hex preset table once into an immutable tuple of palettes."""
    return tuple(tuple(Color.from_hex(h) for h in preset) for preset in hex_table)


def hsl_to_rgb(h: float, s: float, l: float) -> Color:
    """
    Sector-based HSL → RGB. h in degrees [0, 360), s and l in [0, 1].
    Channels are truncated, not rounded.
    """
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs(((h / 60) % 2) - 1))
    m = l - c / 2
    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    return Color(int((r + m) * 255), int((g + m) * 255), int((b + m) * 255))


class PaletteSource:
    """
    Supplies palettes from one shared random source.
    The preset table is built once by the caller and only read here.
    """

    def __init__(self, presets: tuple[Palette, ...], rng: random.Random):
        if not presets:
            raise ValueError("PaletteSource needs at least one preset palette")
        self._presets = presets
        self._rng = rng

    @property
    def presets(self) -> tuple[Palette, ...]:
        return self._presets

    def fixed_palette(self) -> Palette:
        """Uniform pick from the curated presets."""
        return self._presets[self._rng.randrange(len(self._presets))]

    def random_rgb(self, count: int) -> Palette:
        rng = self._rng
        return tuple(
            Color(rng.randrange(256), rng.randrange(256), rng.randrange(256))
            for _ in range(count)
        )

    def analogous(self, count: int, base_hue: float | None = None) -> Palette:
        """Hues base + i·20° at fixed saturation/lightness."""
        if base_hue is None:
            base_hue = self._rng.uniform(0, 360)
        return tuple(
            hsl_to_rgb(
                (base_hue + i * ANALOGOUS_HUE_STEP) % 360,
                ANALOGOUS_SATURATION,
                ANALOGOUS_LIGHTNESS,
            )
            for i in range(count)
        )

    def soft_pastel(self, count: int) -> Palette:
        rng = self._rng
        return tuple(
            Color(rng.randint(PASTEL_MIN, 255), rng.randint(PASTEL_MIN, 255), rng.randint(PASTEL_MIN, 255))
            for _ in range(count)
        )

    def palette(self, mode: str, count: int | None = 3) -> Palette:
        """
        Dispatch by palette mode name (see PALETTE_MODES). A count of None draws 2-5 colors
        from the shared source for the synthesized modes.
        """
        if mode == "palette":
            return self.fixed_palette()
        if count is None:
            count = self._rng.randint(MIN_COLORS, MAX_COLORS)
        if count <= 0:
            raise ValueError(f"color count must be positive, got {count}")
        if mode == "random":
            return self.random_rgb(count)
        if mode == "analogous":
            return self.analogous(count)
        if mode == "pastel":
            return self.soft_pastel(count)
        raise ValueError(f"Unknown palette mode: {mode!r} (expected one of {', '.join(PALETTE_MODES)})")
