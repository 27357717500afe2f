"""
noesisgen Logging Utilities - Session-Based Run Logging

Overview:
---------
Centralised logging configuration for schema loading and code generation.
Every CLI run gets its own timestamped log file tagged with a short session
identifier, so warnings emitted while transforming a data set can be traced
back to the run that produced a given generated file.

Log Location:
-------------
- Default: ~/.noesisgen/logs/
- Each CLI run creates a timestamped log file with session ID
- A symlink 'noesisgen.log' always points to the latest session
- Can be overridden via NOESISGEN_LOG_DIR environment variable

Log Levels:
-----------
- DEBUG: Per-property classification, per-file parse details
- INFO: Loaded structures, written files, run summaries
- WARNING: Data-shape problems degraded to defaults
- ERROR: Unknown property types, unknown structures, failed data sets

Usage:
------
    from noesisgen.utils.logging import get_logger, setup_logging

    # Call once at startup (CLI entry point)
    log_file = setup_logging(level="DEBUG")

    # Get logger in any module
    logger = get_logger(__name__)
    logger.warning("Expected array for collection property ...")
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..schema.registry import Registry

# ============================================================================
# Constants
# ============================================================================

ROOT_LOGGER_NAME = "noesisgen"
DEFAULT_LOG_DIR = Path.home() / ".noesisgen" / "logs"
DEFAULT_LOG_LEVEL = "INFO"
SYMLINK_NAME = "noesisgen.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# File records carry line numbers
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s:%(lineno)d | %(message)s"

_log_file_path: Optional[Path] = None
_session_id: Optional[str] = None


# ============================================================================
# Session ID Filter / Formatter
# ============================================================================

class SessionIdFilter(logging.Filter):
    """Add session_id to all log records."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = self.session_id  # type: ignore[attr-defined]
        return True


class SessionFormatter(logging.Formatter):
    """Formatter that adds session_id, defaulting to 'N/A' if not present."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id or "N/A"  # type: ignore[attr-defined]
        return super().format(record)


# ============================================================================
# Setup Functions
# ============================================================================

def generate_session_id() -> str:
    """Generate a short unique session ID (6 characters)."""
    return uuid.uuid4().hex[:6]


def get_log_directory() -> Path:
    """Get the log directory, respecting NOESISGEN_LOG_DIR environment variable."""
    env_log_dir = os.getenv("NOESISGEN_LOG_DIR")
    if env_log_dir:
        return Path(env_log_dir)
    return DEFAULT_LOG_DIR


def generate_log_filename(session_id: str) -> str:
    """Generate a timestamped log filename with session ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"noesisgen_{timestamp}_{session_id}.log"


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    console_output: bool = False,
) -> Path:
    """
    Initialise noesisgen logging with a session file and optional console output.

    Parameters
    ----------
    level : str, optional
        Log level: DEBUG, INFO, WARNING, ERROR. Defaults to INFO.
        Can also be set via NOESISGEN_LOG_LEVEL environment variable.
    log_dir : Path, optional
        Directory for log files. Defaults to ~/.noesisgen/logs/
    console_output : bool
        If True, also log to stderr (the CLI's ``--verbose``).

    Returns
    -------
    Path
        Path to the log file being written to.
    """
    global _log_file_path, _session_id

    # A second call (several CLI invocations in one process) starts a new session
    _close_handlers()

    level = (level or os.getenv("NOESISGEN_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    log_level = getattr(logging, level, logging.INFO)
    log_dir = log_dir or get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)

    _session_id = generate_session_id()
    _log_file_path = log_dir / generate_log_filename(_session_id)

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(log_level)
    package_logger.addFilter(SessionIdFilter(_session_id))
    package_logger.addHandler(
        _make_handler(logging.FileHandler(_log_file_path, encoding="utf-8"), log_level, FILE_LOG_FORMAT)
    )
    if console_output:
        package_logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), log_level, LOG_FORMAT))
    package_logger.propagate = False

    _point_latest_symlink(log_dir, _log_file_path)

    package_logger.info(f"noesisgen session {_session_id} started (level {level})")
    package_logger.info(f"  Log file: {_log_file_path}")
    return _log_file_path


def _make_handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(SessionFormatter(fmt, LOG_DATE_FORMAT))
    return handler


def _point_latest_symlink(log_dir: Path, log_file: Path) -> None:
    link = log_dir / SYMLINK_NAME
    try:
        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(log_file.name)
    except OSError:
        # Symlinks may be unavailable (e.g. Windows without admin)
        pass


def _close_handlers() -> None:
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        handler.close()
        package_logger.removeHandler(handler)
    for f in package_logger.filters[:]:
        package_logger.removeFilter(f)


def shutdown_logging() -> None:
    """Close session handlers and hand records back to the root logger."""
    global _log_file_path, _session_id

    _close_handlers()
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)

    _log_file_path = None
    _session_id = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Loggers always live under the ``noesisgen`` namespace. Handlers are only
    attached by :func:`setup_logging`, so library callers see plain records.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_current_log_file() -> Optional[Path]:
    """Return the path to the current log file, if logging is initialised."""
    return _log_file_path


def get_session_id() -> Optional[str]:
    """Return the current session ID, if logging is initialised."""
    return _session_id


# ============================================================================
# Structured Logging Helpers
# ============================================================================

def log_registry_summary(logger: logging.Logger, registry: "Registry") -> None:
    """Log the size and names of a loaded registry."""
    logger.info(f"Loaded {len(registry)} structures.")
    for structure in registry:
        logger.debug(f"  {structure.kind:<8} {structure.name}")


def log_run_summary(logger: logging.Logger, summary: dict) -> None:
    """Log a data-set batch summary."""
    logger.info("-" * 60)
    logger.info("DATA SETS COMPLETE")
    logger.info(f"  Total: {summary.get('total', 0)}")
    logger.info(f"  Succeeded: {summary.get('succeeded', 0)}")
    logger.info(f"  Failed: {summary.get('failed', 0)}")
    for entry in summary.get("errors", []):
        logger.info(f"    {entry['file']}: {entry['error']}")
    logger.info("-" * 60)
