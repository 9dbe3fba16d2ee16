"""Observability - structured logging."""

from .logger import LogContext, configure_from_config, configure_logging, get_log_level

__all__ = [
    "configure_logging",
    "configure_from_config",
    "get_log_level",
    "LogContext",
]
