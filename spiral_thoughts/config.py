"""
Load and expose app config (YAML). Used by the pipeline and CLI for output, text, fonts, publishing.
"""
from pathlib import Path
from typing import Any

import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        return _defaults()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return _merge(_defaults(), data)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Section-wise merge: nested dicts are merged one level deep, other values replaced."""
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = {**out[key], **value}
        else:
            out[key] = value
    return out


_SIZE_PRESETS: dict[str, tuple[int, int]] = {
    "landscape": (1200, 800),
    "square": (1080, 1080),
    "portrait": (1080, 1350),
    "story": (1080, 1920),
}


def _defaults() -> dict[str, Any]:
    return {
        "output": {
            "dir": "GeneratedImages",
            "width": 1200,
            "height": 800,
            "preset": None,
            "count": 30,
            "gradient_type": "Spiral",
            "palette_mode": "palette",
            "color_count": 3,
            "seed": None,
        },
        "text": {
            "thought": "",
            "brand": "",
            "script": "latin",
            "quotes": False,
            "font_size": 44,
            "brand_font_size": 28,
            "max_width_ratio": 0.9,
        },
        "fonts": {
            "latin": "fonts/NotoSans-Regular.ttf",
            "latin_bold": "fonts/NotoSans-Bold.ttf",
            "devanagari": "fonts/NotoSansDevanagari-Regular.ttf",
            "devanagari_bold": "fonts/NotoSansDevanagari-Bold.ttf",
        },
        "publish": {
            "enabled": False,
            "brand": "DevWithSwap",
            "client_secret": "credentials.json",
            "folder_id": None,
        },
        "brands": {},
        "logging": {"level": "INFO"},
    }


def resolve_output_config(config: dict[str, Any]) -> dict[str, Any]:
    """Resolve output config: a size preset overrides width/height if set."""
    out = dict(config.get("output", {}))
    preset = out.get("preset")
    if preset and preset in _SIZE_PRESETS:
        w, h = _SIZE_PRESETS[preset]
        out["width"] = w
        out["height"] = h
    return out


def get_output_dir(config: dict[str, Any]) -> Path:
    """Resolve output directory (relative to project root if needed)."""
    out = config.get("output", {})
    d = out.get("dir", "GeneratedImages")
    p = Path(d)
    if not p.is_absolute():
        p = _project_root() / p
    return p


def get_brand(config: dict[str, Any], name: str) -> dict[str, str]:
    """Spreadsheet id and sheet name for a brand. Raises ValueError for an unknown brand."""
    brands = config.get("brands") or {}
    entry = brands.get(name)
    if not entry or not entry.get("spreadsheet_id"):
        known = ", ".join(sorted(brands)) or "none configured"
        raise ValueError(f"Invalid brand type: {name!r} (known: {known})")
    return {
        "name": name,
        "spreadsheet_id": str(entry["spreadsheet_id"]),
        "sheet_name": str(entry.get("sheet_name") or name),
    }


def resolve_project_path(path: str | Path) -> Path:
    """Absolute paths pass through; relative ones resolve against the project root."""
    p = Path(path)
    if not p.is_absolute():
        p = _project_root() / p
    return p
