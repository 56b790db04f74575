"""
Procedural gradient renderer: palette + canvas size → pixels. Our algorithms only.
Ten gradient types are declared; only the spiral field is implemented.
"""
import math
from typing import Callable, Sequence

import numpy as np

from .palette import Color

GRADIENT_TYPES: tuple[str, ...] = (
    "Linear",
    "Radial",
    "Conic",
    "Diamond",
    "Angular",
    "Mesh",
    "Bilinear",
    "Sweep",
    "Spiral",
    "Noise",
)

TWO_PI = 2 * math.pi


def normalize_gradient_type(name: str) -> str:
    """Canonical (capitalized) gradient type name. Raises ValueError if undeclared."""
    for declared in GRADIENT_TYPES:
        if declared.lower() == (name or "").strip().lower():
            return declared
    raise ValueError(f"Unknown gradient type: {name!r}")


def spiral_t(dx: float, dy: float, max_radius: float) -> float:
    """Gradient parameter for one offset from the canvas center, in [0, 1)."""
    distance = math.sqrt(dx * dx + dy * dy)
    angle = math.atan2(dy, dx)
    if angle < 0:
        angle += TWO_PI
    angle_t = angle / TWO_PI
    dist_t = min(distance / max_radius, 1.0)
    return (angle_t + dist_t) % 1.0


def gradient_color(palette: Sequence[Color], t: float) -> Color:
    """
    Multi-stop interpolation over the palette; the last segment blends back to the first color.
    Channels are truncated toward zero.
    """
    if len(palette) == 1:
        return palette[0]
    t = t % 1.0
    n = len(palette)
    segment = 1.0 / n
    index = min(int(t / segment), n - 1)
    nxt = (index + 1) % n
    local = (t - index * segment) / segment
    c0, c1 = palette[index], palette[nxt]
    return Color(
        int(min(max(c0.r + (c1.r - c0.r) * local, 0), 255)),
        int(min(max(c0.g + (c1.g - c0.g) * local, 0), 255)),
        int(min(max(c0.b + (c1.b - c0.b) * local, 0), 255)),
    )


def spiral_field(width: int, height: int) -> np.ndarray:
    """Per-pixel gradient parameter (H, W) float64 for the spiral: angle + distance, wrapped."""
    cx, cy = width / 2, height / 2
    max_radius = min(width, height) * 0.5
    x = np.arange(width, dtype=np.float64) - cx
    y = np.arange(height, dtype=np.float64) - cy
    dx, dy = np.meshgrid(x, y)
    distance = np.sqrt(dx * dx + dy * dy)
    angle = np.arctan2(dy, dx)
    angle = np.where(angle < 0, angle + TWO_PI, angle)
    angle_t = angle / TWO_PI
    dist_t = np.minimum(distance / max_radius, 1.0)
    return np.mod(angle_t + dist_t, 1.0)


def colorize(t: np.ndarray, palette: Sequence[Color]) -> np.ndarray:
    """Map a field of t values to RGB uint8 using the same math as gradient_color."""
    colors = np.array([c.rgb for c in palette], dtype=np.float64)
    n = len(palette)
    if n == 1:
        out = np.empty(t.shape + (3,), dtype=np.uint8)
        out[...] = colors[0].astype(np.uint8)
        return out
    t = np.mod(t, 1.0)
    segment = 1.0 / n
    index = np.minimum((t / segment).astype(np.int64), n - 1)
    nxt = (index + 1) % n
    local = (t - index * segment) / segment
    c0 = colors[index]
    c1 = colors[nxt]
    out = np.clip(c0 + (c1 - c0) * local[..., None], 0, 255)
    return np.trunc(out).astype(np.uint8)


def render_spiral(width: int, height: int, palette: Sequence[Color]) -> np.ndarray:
    """Generate one RGB canvas (H, W, 3) uint8 filled with the spiral gradient."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas size must be positive, got {width}x{height}")
    if not palette:
        raise ValueError("Palette must contain at least one color")
    return colorize(spiral_field(width, height), palette)


_RENDERERS: dict[str, Callable[[int, int, Sequence[Color]], np.ndarray]] = {
    "Spiral": render_spiral,
}


def is_supported(gradient_type: str) -> bool:
    try:
        return normalize_gradient_type(gradient_type) in _RENDERERS
    except ValueError:
        return False


def render_gradient(gradient_type: str, width: int, height: int, palette: Sequence[Color]) -> np.ndarray:
    """Render the named gradient type. Raises ValueError for types without an implementation."""
    name = normalize_gradient_type(gradient_type)
    fn = _RENDERERS.get(name)
    if fn is None:
        raise ValueError(f"Gradient type {name} is declared but not implemented (supported: {', '.join(_RENDERERS)})")
    return fn(width, height, palette)
