"""
Observability module: structured logging and request-scoped correlation ids.

Usage:
    from workload.observability import get_logger, RequestContext

    logger = get_logger(__name__)

    with RequestContext() as ctx:
        logger.info("Workload computed", extra={"members": 12})
"""

from .context import RequestContext, generate_request_id, get_request_id, set_request_id
from .logging import HumanFormatter, JSONFormatter, configure_logging, get_logger

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "JSONFormatter",
    "HumanFormatter",
    # Context
    "RequestContext",
    "generate_request_id",
    "get_request_id",
    "set_request_id",
]
