"""
noesisgen Utilities Package - Cross-Cutting Helpers

Logging setup shared by the CLI and the generation pipeline. Kept free of
heavier imports so any module can pull in its logger at load time.
"""

from .logging import (
    setup_logging,
    shutdown_logging,
    get_logger,
    get_current_log_file,
    get_session_id,
    log_registry_summary,
    log_run_summary,
)

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "get_current_log_file",
    "get_session_id",
    "log_registry_summary",
    "log_run_summary",
]
