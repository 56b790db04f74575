"""
spiral_thoughts: spiral-gradient quote images with shaped, wrapped text and an optional
Google Drive/Sheets publishing step.
"""
from .pipeline import build_jobs, generate_batch, render_job, save_png
from .schema import RenderJob, RenderResult

__all__ = [
    "build_jobs",
    "generate_batch",
    "render_job",
    "save_png",
    "RenderJob",
    "RenderResult",
]

__version__ = "0.1.0"
