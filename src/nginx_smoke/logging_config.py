"""
Nginx Smoke - smoke tests for a running nginx deployment

Copyright (C) 2025 Nginx Smoke Contributors

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

"""Structured logging configuration for the nginx smoke tests."""

import logging
import sys
import uuid
from typing import Any, Dict, Optional

import httpx
import structlog

from . import __version__


def configure_structured_logging(
    log_level: str = "WARNING",
    enable_json: bool = False,
    service_name: str = "nginx-smoke",
    service_version: str = __version__
) -> None:
    """
    Configure structured logging.

    Log lines go to stderr; stdout is reserved for the test report.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_json: Whether to output JSON formatted logs
        service_name: Name of the tool for log context
        service_version: Version of the tool for log context
    """

    processors = [
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service_context(service_name, service_version),
    ]

    if enable_json:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True)
        ])
    else:
        processors.extend([
            structlog.dev.ConsoleRenderer(colors=False)
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
    )

    # httpx logs every request at INFO on its own; ours are richer
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _add_service_context(service_name: str, service_version: str):
    """Add tool context to log records."""
    def processor(logger, method_name, event_dict):
        event_dict.update({
            "service": service_name,
            "version": service_version,
        })
        return event_dict
    return processor


def get_logger(name: str, **context) -> structlog.BoundLogger:
    """
    Get a logger with optional context.

    Args:
        name: Logger name (typically __name__)
        **context: Additional context to bind to the logger

    Returns:
        Bound logger instance
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


async def log_request(request: httpx.Request) -> None:
    """httpx event hook logging each outgoing request."""
    get_logger("nginx_smoke.http").debug(
        "request_sent",
        method=request.method,
        url=str(request.url),
    )


async def log_response(response: httpx.Response) -> None:
    """httpx event hook logging each received response."""
    request = response.request
    get_logger("nginx_smoke.http").debug(
        "response_received",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        http_version=response.http_version,
    )


class ErrorTracker:
    """Track and log unexpected errors with stack traces."""

    def __init__(self, logger: Optional[structlog.BoundLogger] = None):
        self.logger = logger or get_logger(__name__)

    def track_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None
    ) -> str:
        """
        Track an error with full context and stack trace.

        Args:
            error: The exception that occurred
            context: Additional context information
            user_message: User-friendly error message

        Returns:
            Error tracking ID for correlation
        """
        error_id = str(uuid.uuid4())

        error_context = {
            "error_id": error_id,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "user_message": user_message,
        }

        if context:
            error_context.update(context)

        self.logger.error(
            "unexpected_error",
            **error_context,
            exc_info=error
        )

        return error_id


# Global error tracker instance
error_tracker = ErrorTracker()
