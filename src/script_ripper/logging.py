from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

_LOGGING_CONFIGURED = False


def _wrapper_class(debug: bool) -> type[structlog.typing.FilteringBoundLogger]:
    return structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO)


def setup_logging(filename: str | Path | None = None, *, debug: bool = False) -> structlog.BoundLogger:
    """Set up structured logging for the script_ripper module.

    Logs never go to stdout, which carries the pandoc AST when running as a filter.

    Args:
        filename: Optional path to a log file. If None, logs are written to stderr.
        debug: Emit debug events as well as info and above.

    Returns:
        A structlog logger instance configured for the script_ripper module.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if not _LOGGING_CONFIGURED or filename:
        handlers: list[logging.Handler] = []
        if filename:
            handlers.append(logging.FileHandler(str(filename), encoding="utf-8"))
        else:
            handlers.append(logging.StreamHandler(sys.stderr))

        logging.basicConfig(
            level=logging.DEBUG,
            handlers=handlers,
            format="%(message)s",
            force=bool(filename),
        )
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=_wrapper_class(debug),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            # Not cached so that set_debug() applies to module-level loggers.
            cache_logger_on_first_use=False,
        )
        _LOGGING_CONFIGURED = True
    elif debug:
        set_debug(enabled=True)

    return structlog.get_logger("script_ripper")


def set_debug(*, enabled: bool) -> None:
    """Switch debug events on or off for every script_ripper logger."""
    structlog.configure(wrapper_class=_wrapper_class(enabled))


logger = setup_logging()
