# tookan_relay/api/routers/webhooks.py
import json
from typing import Any, Dict
import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request, Response
from pydantic import ValidationError

from tookan_relay.api.dependencies import get_settings
from tookan_relay.api.errors import MalformedPayloadError
from tookan_relay.api.forms import parse_form_pairs
from tookan_relay.core.config import Settings
from tookan_relay.metrics.prom import WEBHOOKS_RECEIVED
from tookan_relay.shopify.verification import verify_webhook
from tookan_relay.tookan.client import dispatch_once
from tookan_relay.tookan.routing import WebhookPayload, route_payload

log = structlog.get_logger(__name__)
router = APIRouter()


def _form_to_dict(body: bytes) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    tags = []
    for key, value in parse_form_pairs(body):
        if key in ("tags", "tags[]"):
            tags.append(value)
        else:
            data[key] = value
    data["tags"] = tags
    return data


def parse_webhook_body(body: bytes) -> WebhookPayload:
    """Shopify posts JSON; a form-encoded body is accepted as well."""
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        data = _form_to_dict(body)
    if not isinstance(data, dict):
        raise MalformedPayloadError("Webhook body must be an object")
    try:
        return WebhookPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedPayloadError(f"Invalid webhook payload: {e.error_count()} error(s)") from e


@router.post("/")
async def shopify_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    x_shopify_hmac_sha256: str | None = Header(None),
):
    body = await request.body()
    if not verify_webhook(settings.SHOPIFY_WEBHOOK_SECRET, body, x_shopify_hmac_sha256):
        WEBHOOKS_RECEIVED.labels(outcome="rejected").inc()
        log.warning("webhook_signature_mismatch", body_bytes=len(body))
        return Response(status_code=403)

    WEBHOOKS_RECEIVED.labels(outcome="verified").inc()
    payload = parse_webhook_body(body)
    dispatch = route_payload(payload, settings)
    log.info("webhook_verified",
             topic=request.headers.get("X-Shopify-Topic", "unknown"),
             customer_id=payload.id,
             endpoint=dispatch.endpoint)

    # runs after the 200 is sent; its outcome never changes the reply
    background_tasks.add_task(dispatch_once, settings, dispatch)
    return Response(status_code=200)
