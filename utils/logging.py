"""
structlog setup shared by the API process and the scheduler scripts.
"""
from __future__ import annotations

import logging

import structlog

_CONFIGURED = False


def _level_to_int(level: str | int) -> int:
    """Accept 'INFO' / 'info' / 20 / logging.INFO and return an int level."""
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | int = "INFO", json_logs: bool = False) -> None:
    """Configure stdlib logging + structlog once; later calls are no-ops."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    lvl = _level_to_int(level)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)-7s %(name)s - %(message)s",
    )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(lvl),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True
