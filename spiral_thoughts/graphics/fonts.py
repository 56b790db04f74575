"""
Font lookup: a requested font file, else a system fallback, else Pillow's default.
resolve_font always returns a usable font; callers never check file existence.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from PIL import ImageFont, features

logger = logging.getLogger(__name__)

# Quote glyphs are drawn at this multiple of the body size
QUOTE_SCALE = 2.15

_LATIN_FALLBACKS: dict[bool, tuple[str, ...]] = {
    False: (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "DejaVuSans.ttf",
        "arial.ttf",
    ),
    True: (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "DejaVuSans-Bold.ttf",
        "arialbd.ttf",
    ),
}

# Tried before the Latin fonts so non-Latin text never lands on a font without its glyphs
_SCRIPT_FALLBACKS: dict[str, dict[bool, tuple[str, ...]]] = {
    "devanagari": {
        False: (
            "/usr/share/fonts/truetype/noto/NotoSansDevanagari-Regular.ttf",
            "/usr/share/fonts/opentype/noto/NotoSansDevanagari-Regular.ttf",
            "/usr/share/fonts/truetype/lohit-devanagari/Lohit-Devanagari.ttf",
            "NotoSansDevanagari-Regular.ttf",
            "Mangal.ttf",
        ),
        True: (
            "/usr/share/fonts/truetype/noto/NotoSansDevanagari-Bold.ttf",
            "/usr/share/fonts/opentype/noto/NotoSansDevanagari-Bold.ttf",
            "NotoSansDevanagari-Bold.ttf",
            "mangalb.ttf",
        ),
    },
}


def fallback_fonts(script: str = "latin", bold: bool = False) -> tuple[str, ...]:
    """Fallback candidates in lookup order: script-specific, then Latin."""
    by_weight = _SCRIPT_FALLBACKS.get(script, {})
    candidates = by_weight.get(bold, ()) + by_weight.get(False, ()) + _LATIN_FALLBACKS[bold]
    return tuple(dict.fromkeys(candidates))


def _layout_engine():
    """Raqm shapes complex scripts (Devanagari conjuncts, matras); basic layout otherwise."""
    if features.check_feature("raqm"):
        return ImageFont.Layout.RAQM
    return ImageFont.Layout.BASIC


@lru_cache(maxsize=64)
def resolve_font(path: str | None, size: int, *, bold: bool = False, script: str = "latin"):
    """Load `path` at `size`; fall back to a system font for the script, then Pillow's default font."""
    size = max(1, int(size))
    engine = _layout_engine()
    if path:
        p = Path(path)
        if p.is_file():
            try:
                return ImageFont.truetype(str(p), size, layout_engine=engine)
            except OSError as e:
                logger.warning("Could not load font %s: %s; using fallback", p, e)
        else:
            logger.warning("Font file not found: %s; using fallback", p)
    for candidate in fallback_fonts(script, bold):
        try:
            return ImageFont.truetype(candidate, size, layout_engine=engine)
        except OSError:
            continue
    logger.warning("No TrueType fallback font available; using Pillow default at size %s", size)
    return ImageFont.load_default(size=size)


@dataclass(frozen=True)
class FontSet:
    """Fonts for one job: body text, bold brand label, oversized quote glyphs."""
    body: object
    brand: object
    quote: object
    body_size: int
    brand_size: int
    quote_size: int


def load_fonts(
    fonts_config: dict,
    script: str,
    body_size: int,
    brand_size: int,
    *,
    project_root: Path | None = None,
) -> FontSet:
    """
    Pick regular/bold font files for the script ("latin" or "devanagari") and load them.
    Relative paths resolve against project_root.
    """
    key = "devanagari" if script == "devanagari" else "latin"
    regular = _abs_font_path(fonts_config.get(key), project_root)
    bold = _abs_font_path(fonts_config.get(f"{key}_bold") or fonts_config.get(key), project_root)
    quote_size = int(round(body_size * QUOTE_SCALE))
    return FontSet(
        body=resolve_font(regular, body_size, script=key),
        brand=resolve_font(bold, brand_size, bold=True, script=key),
        quote=resolve_font(_abs_font_path(fonts_config.get("latin"), project_root), quote_size),
        body_size=body_size,
        brand_size=brand_size,
        quote_size=quote_size,
    )


def _abs_font_path(path: str | None, project_root: Path | None) -> str | None:
    if not path:
        return None
    p = Path(path)
    if not p.is_absolute() and project_root is not None:
        p = project_root / p
    return str(p)
