"""
Logging setup for txsender.

Two loggers carry the engine's diagnostics: ``receipts`` (per-receipt logs
and failures from the outcome aggregator) and the ``txsender`` package
tree (retry warnings, transport retries). ``setup_logging`` renders both
through structlog and, when ``NEAR_NO_LOGS`` is set, silences them at the
logging layer as well.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import Settings, settings as default_settings


RECEIPTS_LOGGER = "receipts"
PACKAGE_LOGGER = "txsender"

# Above CRITICAL so nothing from a silenced logger reaches a handler
SILENT = logging.CRITICAL + 10


def _add_network_id(network_id: str) -> structlog.types.Processor:
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("network_id", network_id)
        return event_dict
    return processor


def setup_logging(
    log_level: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    DEBUG renders for the console, every other level renders JSON lines.
    Every event is stamped with the configured ``network_id``.

    Args:
        log_level: Override for ``settings.log_level``
        settings: Settings to read; defaults to the module-level instance
    """
    settings = settings or default_settings
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_network_id(settings.network_id),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if level == logging.DEBUG:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    diagnostics_level = level if settings.emit_logs else SILENT
    for name in (RECEIPTS_LOGGER, PACKAGE_LOGGER):
        logging.getLogger(name).setLevel(diagnostics_level)

    # Transport chatter stays out of receipt diagnostics
    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
