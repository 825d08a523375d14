# tookan_relay/api/errors.py
from typing import Optional
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

log = structlog.get_logger(__name__)


class RelayError(Exception):
    """Base error. ``status_code`` stays None when the cause has no HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ShopifyAPIError(RelayError):
    pass


class MalformedPayloadError(RelayError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


async def relay_error_handler(request: Request, exc: RelayError) -> PlainTextResponse:
    status_code = exc.status_code or 500
    log.warning("request_failed", path=request.url.path, status=status_code, error=exc.message)
    return PlainTextResponse(exc.message, status_code=status_code)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
