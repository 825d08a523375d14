# tookan_relay/tookan/client.py
from typing import Optional
import structlog
import requests

from tookan_relay.core.config import Settings
from tookan_relay.metrics.prom import DISPATCH_REQUESTS
from tookan_relay.tookan.routing import DispatchRequest

log = structlog.get_logger(__name__)


class TookanClient:
    """
    Tookan v2 API client. Each call is a single JSON POST with the account
    ``api_key`` merged into the body; there is no retry.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.base = settings.TOOKAN_BASE_URL.rstrip("/")
        self.api_key = settings.TOOKAN_API_KEY
        self.timeout = settings.TOOKAN_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def close(self) -> None:
        self.session.close()

    def post(self, request: DispatchRequest) -> requests.Response:
        body = {"api_key": self.api_key, **request.body}
        return self.session.post(f"{self.base}{request.endpoint}", json=body, timeout=self.timeout)

    def dispatch(self, request: DispatchRequest) -> Optional[requests.Response]:
        """Best-effort delivery: the outcome is logged, never raised."""
        try:
            resp = self.post(request)
        except requests.RequestException as e:
            DISPATCH_REQUESTS.labels(endpoint=request.endpoint, status="error").inc()
            log.error("dispatch_failed", endpoint=request.endpoint, error=str(e))
            return None

        DISPATCH_REQUESTS.labels(endpoint=request.endpoint, status=str(resp.status_code)).inc()
        log.info("dispatch_response",
                 endpoint=request.endpoint,
                 status=resp.status_code,
                 headers=dict(resp.headers),
                 body=resp.text)
        return resp


def dispatch_once(settings: Settings, request: DispatchRequest) -> None:
    """Background task entry: one call on a fresh session, closed afterwards."""
    client = TookanClient(settings)
    try:
        client.dispatch(request)
    finally:
        client.close()
