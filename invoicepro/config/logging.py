"""
Structured Logging Setup

Every module logs through structlog with an event name as the message
and key-value context, e.g.:

    logger.error("collection_not_found", collection="widgets")

configure_logging() is called once when the package is imported.
Output is JSON, routed through the standard library logging tree so the
host application controls levels and handlers.
"""

import logging

import structlog


def configure_logging(debug: bool = False) -> None:
    """
    Configure structlog for the package.

    Args:
        debug: When True, lower the package logger to DEBUG so
               document reads and writes are traced.
    """
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
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if debug:
        logging.getLogger("invoicepro").setLevel(logging.DEBUG)
