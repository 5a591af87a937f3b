"""
Shared logging configuration for the merchant API client.
"""

import sys
import structlog
import logging
import uuid
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional
from contextvars import ContextVar

# Context variables for correlation IDs
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
operation_var: ContextVar[Optional[str]] = ContextVar('operation', default=None)


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structured logging for the client."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _service_context(service_name),
            add_correlation_context,
            add_timestamp,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def _service_context(service_name: str):
    def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict
    return add_service_context


def add_correlation_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add correlation context to log events."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id

    operation = operation_var.get()
    if operation:
        event_dict["operation"] = operation

    return event_dict


def add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add high-precision timestamp to log events."""
    event_dict["timestamp"] = time.time()
    return event_dict


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set request ID in context."""
    if request_id is None:
        request_id = str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def set_operation(operation: Optional[str]) -> None:
    operation_var.set(operation)


@contextmanager
def correlation_scope(operation: Optional[str]) -> Iterator[str]:
    """Bind a request ID and operation for the duration of one call.

    An already bound request ID is reused; both variables are restored on exit.
    """
    request_id = request_id_var.get() or str(uuid.uuid4())
    request_token = request_id_var.set(request_id)
    operation_token = operation_var.set(operation)
    try:
        yield request_id
    finally:
        operation_var.reset(operation_token)
        request_id_var.reset(request_token)


def clear_context():
    """Clear all context variables."""
    request_id_var.set(None)
    operation_var.set(None)


def mask_secret(value: Optional[str], visible: int = 6) -> str:
    """Mask a token or secret for log output, keeping a short prefix."""
    if not value:
        return "***"
    if len(value) <= visible:
        return "***"
    return value[:visible] + "***"


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
