"""Logging and observability configuration using Pydantic Logfire.

This module provides standardized logging utilities and configuration.
All modules should use Python's standard logging library (logging.getLogger(__name__)),
and Logfire will automatically capture and enrich these logs.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_context(logger, "warning", "Message", record_id="123", kind="invalid_date")
"""

import logging

import logfire

from freshshelf.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment.

    Standard logging records are forwarded to Logfire through its logging handler.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name="freshshelf",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logging.basicConfig(level=settings.log_level.upper(), handlers=[logfire.LogfireLoggingHandler()])

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("inventory_prioritizer.prioritize"):
            # Your service logic here
            pass
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (shop_id, record_id, kind, etc.)

    Usage:
        log_with_context(logger, "info", "Snapshot loaded", shop_id="12", items=40)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)


def log_with_shop_context(
    logger: logging.Logger,
    level: str,
    message: str,
    shop_id: str | None = None,
    **extra: object,
) -> None:
    """Log a message with shop context.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        shop_id: Shop ID to include in context
        **extra: Additional context fields

    Usage:
        log_with_shop_context(logger, "info", "Item added", shop_id="12", product_id="7")
    """
    context = {"shop_id": shop_id, **extra} if shop_id else extra
    log_with_context(logger, level, message, **context)
