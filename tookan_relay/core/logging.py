# tookan_relay/core/logging.py
import logging, sys
from typing import Optional
from uuid import uuid4
import structlog

def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,   # request_id/method/path per request
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            # Shopify labels are French ("Taxes à payer"); keep them readable
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

def bind_request_context(method: str, path: str, request_id: Optional[str] = None) -> str:
    """Reset the log context for a new inbound request; returns the request id."""
    request_id = request_id or uuid4().hex[:16]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)
    return request_id
