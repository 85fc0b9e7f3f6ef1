"""
Structured logging for ec2map.

Every record is emitted as one line of JSON carrying the EC2 operation
context (service, operation, region, request id) so calls can be traced in
a log aggregator. Credentials are never part of the context.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

_CONTEXT_KEYS = ("request_id", "service", "operation", "region")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry, default=str)


class Ec2Logger:
    """Thin wrapper around :mod:`logging` that attaches EC2 call context."""

    def __init__(self, name: str = "ec2map") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        operation: str | None = None,
        region: str | None = None,
        request_id: str | None = None,
        service: str = "ec2",
        exc_info: bool = False,
    ) -> None:
        """Emit a structured record with EC2 operation context.

        Args:
            level: Logging level (e.g. ``logging.INFO``).
            message: Human-readable message.
            operation: Facade operation (e.g. ``describe_instances``).
            region: Region the client talks to.
            request_id: Correlation ID; generated when omitted.
            service: Vendor service name.
            exc_info: Whether to attach the active exception.
        """
        extra = {
            "service": service,
            "operation": operation,
            "region": region,
            "request_id": request_id or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
ec2_logger = Ec2Logger()
