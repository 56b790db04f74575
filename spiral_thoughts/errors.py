"""
Errors shared by the pipeline and the publishing step. Free of Google client imports so the
render path does not load them.
"""
from pathlib import Path


class UploadError(Exception):
    """Drive upload or sheet append failed for one image."""
    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path
