"""
Pipeline: one job → one PNG. A batch runs jobs sequentially with one shared random source;
each job's I/O failure is logged and recorded on its result without stopping the batch.
"""
import logging
import time
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from PIL import Image

from .config import get_output_dir, load_config, resolve_output_config, resolve_project_path
from .errors import UploadError
from .graphics import (
    FontSet,
    PillowShaper,
    TextShaper,
    compose,
    layout_brand,
    layout_paragraph,
    load_fonts,
    wrap_text,
)
from .procedural import (
    PALETTE_MODES,
    Palette,
    PaletteSource,
    build_preset_table,
    is_supported,
    normalize_gradient_type,
    render_gradient,
)
from .random_utils import shared_random
from .schema import SCRIPTS, RenderJob, RenderResult
from .workflow_utils import log_structured, request_shutdown

logger = logging.getLogger(__name__)


def validate_job(job: RenderJob) -> None:
    """Reject a job configuration before any rendering. Raises ValueError."""
    if job.width <= 0 or job.height <= 0:
        raise ValueError(f"Canvas size must be positive, got {job.width}x{job.height}")
    name = normalize_gradient_type(job.gradient_type)
    if not is_supported(name):
        raise ValueError(f"Gradient type {name} is not implemented; only Spiral is supported")
    if job.palette_mode not in PALETTE_MODES:
        raise ValueError(f"Unknown palette mode: {job.palette_mode!r} (expected one of {', '.join(PALETTE_MODES)})")
    if job.palette_mode != "palette" and job.color_count is not None and job.color_count <= 0:
        raise ValueError(f"color_count must be positive, got {job.color_count}")
    if job.script not in SCRIPTS:
        raise ValueError(f"Unknown script: {job.script!r} (expected one of {', '.join(SCRIPTS)})")
    if job.font_size <= 0 or job.brand_font_size <= 0:
        raise ValueError("Font sizes must be positive")
    if not 0 < job.max_width_ratio <= 1:
        raise ValueError(f"max_width_ratio must be in (0, 1], got {job.max_width_ratio}")


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def build_jobs(config: dict[str, Any], count: int | None = None) -> list[RenderJob]:
    """Jobs from config (output + text sections). Validated here so bad config fails at startup."""
    out = resolve_output_config(config)
    text = config.get("text", {})
    n = int(count if count is not None else out.get("count", 1))
    if n <= 0:
        raise ValueError(f"Image count must be positive, got {n}")
    job = RenderJob(
        width=int(out.get("width", 1200)),
        height=int(out.get("height", 800)),
        gradient_type=str(out.get("gradient_type") or "Spiral"),
        palette_mode=str(out.get("palette_mode") or "palette"),
        color_count=_optional_int(out.get("color_count", 3)),
        brand_text=str(text.get("brand") or ""),
        thought_text=str(text.get("thought") or ""),
        script=str(text.get("script") or "latin").lower(),
        quotes=bool(text.get("quotes", False)),
        font_size=int(text.get("font_size") or 44),
        brand_font_size=int(text.get("brand_font_size") or 28),
        max_width_ratio=float(text.get("max_width_ratio") or 0.9),
    )
    validate_job(job)
    job.gradient_type = normalize_gradient_type(job.gradient_type)
    return [replace(job) for _ in range(n)]


def resolve_fonts_config(config: dict[str, Any]) -> dict[str, str]:
    """Font paths from config, made absolute against the project root."""
    return {k: str(resolve_project_path(v)) for k, v in (config.get("fonts") or {}).items() if v}


def render_job(
    job: RenderJob,
    palette_source: PaletteSource,
    shaper: TextShaper,
    *,
    fonts: FontSet | None = None,
    fonts_config: dict[str, str] | None = None,
) -> tuple[Image.Image, Palette]:
    """Palette → gradient → layout → composition. Returns the opaque RGB image and its palette."""
    palette = palette_source.palette(job.palette_mode, job.color_count)
    gradient = render_gradient(job.gradient_type, job.width, job.height, palette)
    if fonts is None:
        fonts = load_fonts(fonts_config or {}, job.script, job.font_size, job.brand_font_size)

    lines = wrap_text(job.thought_text, fonts.body, shaper, job.max_text_width)
    block = layout_paragraph(
        lines,
        job.width,
        job.height,
        fonts.body_size,
        shaper,
        max_width=job.max_text_width,
        fit_to_lines=job.fit_panel_to_lines,
        quotes=job.quotes,
        quote_font=fonts.quote,
    )
    brand = layout_brand(job.brand_text, fonts.brand, shaper, job.width, job.height, fonts.brand_size)
    return compose(gradient, block, brand, fonts, shaper), palette


def save_png(image: Image.Image, path: Path) -> Path:
    """Lossless, single-frame, opaque PNG."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.convert("RGB").save(path, format="PNG")
    return path


def output_filename(job: RenderJob, now: datetime | None = None) -> str:
    """gradient_<Type>_<mode>_<W>x<H>_<YYYYmmddHHMMSS>.png"""
    now = now or datetime.now()
    return (
        f"gradient_{normalize_gradient_type(job.gradient_type)}_{job.palette_mode}"
        f"_{job.width}x{job.height}_{now.strftime('%Y%m%d%H%M%S')}.png"
    )


def next_output_path(out_dir: Path, job: RenderJob, now: datetime | None = None) -> Path:
    """Timestamped path; a numeric suffix keeps jobs within the same second from overwriting."""
    base = Path(out_dir) / output_filename(job, now)
    if not base.exists():
        return base
    n = 2
    while True:
        candidate = base.with_name(f"{base.stem}_{n}{base.suffix}")
        if not candidate.exists():
            return candidate
        n += 1


def generate_batch(
    jobs: list[RenderJob],
    *,
    config: dict[str, Any] | None = None,
    seed: int | None = None,
    shaper: TextShaper | None = None,
    palette_source: PaletteSource | None = None,
    publisher: Any = None,
    out_dir: Path | None = None,
) -> list[RenderResult]:
    """
    Render jobs one after another. All jobs are validated first (ValueError before any output).
    Stops early, after the current image, when SIGTERM/SIGINT was received.
    """
    if config is None:
        config = load_config()
    for job in jobs:
        validate_job(job)

    out_dir = Path(out_dir) if out_dir is not None else get_output_dir(config)
    out_dir.mkdir(parents=True, exist_ok=True)
    if palette_source is None:
        if seed is None:
            seed = config.get("output", {}).get("seed")
        rng, seed = shared_random(seed)
        palette_source = PaletteSource(build_preset_table(), rng)
    shaper = shaper or PillowShaper()
    fonts_config = resolve_fonts_config(config)

    timer = time.perf_counter()
    results: list[RenderResult] = []
    total = len(jobs)
    for i, job in enumerate(jobs, start=1):
        if request_shutdown():
            logger.warning("Shutdown requested; stopping after %s of %s images", i - 1, total)
            break
        result = RenderResult(job=job)
        try:
            image, palette = render_job(job, palette_source, shaper, fonts_config=fonts_config)
            result.palette = tuple(c.to_hex() for c in palette)
            path = Path(job.output_path) if job.output_path else next_output_path(out_dir, job)
            result.path = save_png(image, path)
            if publisher is not None:
                result.url = publisher.save_image(result.path, job.thought_text)
        except (OSError, UploadError) as e:
            logger.error("Image %s/%s failed: %s", i, total, e, exc_info=True)
            result.error = str(e)
        log_structured("error" if result.error else "info", event="image", index=i, total=total, **result.to_dict())
        results.append(result)

    elapsed = time.perf_counter() - timer
    ok = sum(1 for r in results if r.ok)
    logger.info("Generated %s/%s %s images in %.2fs (seed=%s)", ok, total, jobs[0].gradient_type if jobs else "-", elapsed, seed)
    return results
