"""
Workflow utilities: logging setup, structured per-job log lines, graceful shutdown between jobs.
"""
import json
import logging
import signal
from typing import Any

logger = logging.getLogger(__name__)

_shutdown_requested = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging once for CLI runs."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def request_shutdown() -> bool:
    """Check if shutdown was requested (e.g. SIGTERM)."""
    return _shutdown_requested


def _set_shutdown_requested(*_args: Any) -> None:
    global _shutdown_requested
    _shutdown_requested = True


def reset_shutdown() -> None:
    global _shutdown_requested
    _shutdown_requested = False


def setup_graceful_shutdown() -> None:
    """Register SIGTERM/SIGINT handlers so a batch stops after the current image."""
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            signal.signal(sig, _set_shutdown_requested)
        except (AttributeError, ValueError):
            pass  # Windows or not on the main thread


def log_structured(level: str, **kwargs: Any) -> None:
    """Emit one JSON log line (per-job results, batch summary)."""
    record = {"level": level, **kwargs}
    line = json.dumps(record, ensure_ascii=False, default=str)
    if level == "error":
        logger.error("%s", line)
    elif level == "warning":
        logger.warning("%s", line)
    else:
        logger.info("%s", line)
