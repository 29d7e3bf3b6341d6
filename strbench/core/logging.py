"""Structured logging for strbench.

Library modules log through ``logging.getLogger(__name__)``. This module
routes those records through structlog, which renders them as coloured
console lines for interactive use or as JSON when stderr is redirected.

Logs are written to stderr because stdout is reserved for the report.

Example usage:
    import logging

    from strbench.core.logging import configure_logging

    configure_logging(level="INFO", module_levels={"strbench.performance": "DEBUG"})
    logger = logging.getLogger(__name__)
    logger.info("Benchmarking %s", "reduce str")
"""

import logging
import platform
import sys
from collections.abc import Mapping
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from strbench import __version__

# Loggers whose level was set by configure_logging, restored by reset_logging
_overridden_loggers: set[str] = set()


def add_run_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp every event with the strbench and interpreter versions."""
    event_dict.setdefault("strbench_version", __version__)
    event_dict.setdefault("python", platform.python_version())
    return event_dict


def _to_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    return numeric


def _processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_run_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _make_handler(
    handler: logging.Handler, json_output: bool, colors: bool
) -> logging.Handler:
    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_processors(),
        )
    )
    return handler


def configure_logging(
    level: str | int = logging.WARNING,
    json_output: bool | None = None,
    log_file: str | Path | None = None,
    module_levels: Mapping[str, str | int] | None = None,
) -> None:
    """Configure structured logging for a strbench run.

    Args:
        level: Root log level name or number.
        json_output: Render JSON instead of console lines. None picks JSON
            whenever stderr is not a terminal.
        log_file: Optional file receiving the same records as stderr. The
            file always gets JSON.
        module_levels: Logger name to level overrides, e.g.
            ``{"strbench.performance": "DEBUG"}`` to see batch sizing while
            the rest of the run stays quiet.

    Raises:
        ValueError: If a level name is unknown.
    """
    interactive = sys.stderr.isatty()
    if json_output is None:
        json_output = not interactive

    structlog.configure(
        processors=_processors()
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(_to_level(level))

    root.addHandler(
        _make_handler(logging.StreamHandler(sys.stderr), json_output, interactive)
    )
    if log_file:
        root.addHandler(
            _make_handler(logging.FileHandler(log_file), json_output=True, colors=False)
        )

    for name, module_level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(module_level))
        _overridden_loggers.add(name)


def reset_logging() -> None:
    """Undo configure_logging. Used between tests."""
    structlog.reset_defaults()

    for name in _overridden_loggers:
        logging.getLogger(name).setLevel(logging.NOTSET)
    _overridden_loggers.clear()

    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
