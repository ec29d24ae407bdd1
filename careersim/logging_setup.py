"""
Structured logging for the simulate API.

PURPOSE:
- One JSON object per log line on stdout (CloudWatch Insights friendly).
- Request-scoped fields (request_id, correlation_id) bound once in the handler and
  carried by every line the pipeline, simulator and model back-ends emit.
"""

from __future__ import annotations
import logging
import os
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

SERVICE = "CareerSim"


def configure_logging(stream=None):
    """
    Configure structlog + stdlib logging. Repeat calls are no-ops.

    parameters:
    - stream: file-like|None – defaults to stdout; the CLI passes stderr so its
      printed JSON result stays clean.

    returns:
    - lazy structlog logger bound with service and env.

    example line:
    {"event": "simulation.model_reply", "chars": 4180, "fenced": true,
     "request_id": "req-1", "correlation_id": "c-9", "service": "CareerSim",
     "env": "dev", "level": "info", "timestamp": "2026-10-19T13:00:00Z"}
    """
    if structlog.is_configured():
        return get_logger()

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=stream or sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return get_logger()


def get_logger():
    """
    Lazy logger carrying service/env.

    notes:
    - Safe at import time: the proxy resolves the processor chain on first use, so
      module-level loggers pick up configure_logging() even if it runs later.
    """
    return structlog.get_logger(service=SERVICE, env=os.getenv("ENV", "dev"))


def bind_request(request_id: str, correlation_id: str) -> None:
    """Reset request-scoped log fields; Lambda reuses the process across invocations."""
    clear_contextvars()
    bind_contextvars(request_id=request_id, correlation_id=correlation_id)
