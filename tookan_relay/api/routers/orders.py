# tookan_relay/api/routers/orders.py
import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from tookan_relay.api.dependencies import get_settings
from tookan_relay.api.errors import ShopifyAPIError
from tookan_relay.api.forms import parse_form
from tookan_relay.core.config import Settings
from tookan_relay.metrics.prom import DRAFT_ORDERS, DRAFT_ORDER_LATENCY
from tookan_relay.orders.draft import build_draft_order
from tookan_relay.shopify.client import ShopifyClient

log = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/order")
async def create_order(request: Request, settings: Settings = Depends(get_settings)):
    form = parse_form(await request.body())
    draft = build_draft_order(form, settings.TAX_AMOUNT_FIELD)

    try:
        client = ShopifyClient(settings)
        try:
            with DRAFT_ORDER_LATENCY.time():
                created = await run_in_threadpool(client.create_draft_order, draft)
        finally:
            client.close()
    except ShopifyAPIError as e:
        DRAFT_ORDERS.labels(outcome="failed").inc()
        log.warning("draft_order_failed", variant_id=form.get("id"), status=e.status_code)
        raise

    DRAFT_ORDERS.labels(outcome="created").inc()
    log.info("draft_order_created",
             variant_id=form.get("id"),
             draft_order_id=created.get("draft_order", {}).get("id"))
    return JSONResponse(created)
