"""structlog configuration for mdlinks.

Records from ``logging.getLogger(__name__)`` in library modules go through
a structlog ``ProcessorFormatter`` on one stderr handler:

- console (default): ``ConsoleRenderer``, colored when stderr is a TTY
- JSON (``--log-json``): one object per line; exceptions from failed
  document loads are rendered as structured tracebacks

Parser libraries are held at their own levels so ``--verbose`` only
raises mdlinks' own output.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers and the level they are held at.
_LIBRARY_LEVELS: dict[str, int] = {
    "bs4": logging.ERROR,
    "marko": logging.WARNING,
    "ruamel": logging.WARNING,
}


def _renderer(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route mdlinks logging to stderr through structlog.

    Args:
        verbose: Show mdlinks DEBUG records (skipped drafts, per-document
            counts, load tracebacks). When False, only WARNING+.
        log_json: Render JSON lines instead of console output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("mdlinks").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
