"""Structured logging setup.

reqorder logs through structlog on top of the standard logging module, so
the verbosity levels below apply to both:

- INFO (20): run summaries and, when verbose, each activated target
- VERBOSE (15): per-target decisions
- DEBUG (10): per-pass resolution detail, placeholder synthesis
- TRACE (5): everything
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

from ..config import LoggingConfig

TRACE = 5
VERBOSE = 15

for _level, _name in ((TRACE, "TRACE"), (VERBOSE, "VERBOSE")):
    logging.addLevelName(_level, _name)

LOG_LEVELS = {
    name: logging.getLevelName(name)
    for name in ("TRACE", "DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL")
}


class LogContext:
    """
    Bind key-value pairs to every event logged inside a with block.

    Values live in structlog's context variables and are merged into each
    event by the merge_contextvars processor. Leaving the block restores
    whatever was bound before, including values shadowed by a nested block.

    Usage:
        with LogContext(run_id="1a2b3c4d"):
            logger.info("Resolving targets")
    """

    def __init__(self, **values: Any) -> None:
        self.values = values
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = dict(structlog.contextvars.bind_contextvars(**self.values))
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
        self._tokens = {}


def get_log_level(level: str) -> int:
    """Numeric level for a level name; unknown names mean INFO."""
    return LOG_LEVELS.get(level.upper(), logging.INFO)


def _build_handlers(log_file: str | Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """
    Route structlog events through stdlib logging.

    Args:
        level: Level name, see LOG_LEVELS
        json_logs: Render events as JSON lines instead of console text
        log_file: Also write events to this file, creating its directory
    """
    numeric_level = get_log_level(level)

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=_build_handlers(log_file),
        force=True,
    )

    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_config(config: LoggingConfig, verbose: bool = False) -> None:
    """
    Configure logging from the logging section of the configuration.

    With verbose set, a level above INFO is lowered to INFO so the
    "Activating target" events are shown.
    """
    level = config.level
    if verbose and get_log_level(level) > logging.INFO:
        level = "INFO"
    configure_logging(level=level, json_logs=config.format == "json", log_file=config.file)
