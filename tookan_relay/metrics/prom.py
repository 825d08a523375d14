# tookan_relay/metrics/prom.py
from fastapi import APIRouter, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

router = APIRouter()

# --- Webhook metrics ---------------------------------------------------------
if "WEBHOOKS_RECEIVED" not in globals():
    WEBHOOKS_RECEIVED = Counter(
        "shopify_webhooks_received_total",
        "Shopify webhooks received",
        ["outcome"]  # "verified" | "rejected"
    )

if "DISPATCH_REQUESTS" not in globals():
    DISPATCH_REQUESTS = Counter(
        "tookan_dispatch_requests_total",
        "Calls made to the Tookan API",
        ["endpoint", "status"]  # status is the HTTP code or "error"
    )

# --- Draft order metrics -----------------------------------------------------
if "DRAFT_ORDERS" not in globals():
    DRAFT_ORDERS = Counter(
        "shopify_draft_orders_total",
        "Draft orders submitted to Shopify",
        ["outcome"]  # "created" | "failed"
    )

if "DRAFT_ORDER_LATENCY" not in globals():
    DRAFT_ORDER_LATENCY = Histogram(
        "shopify_draft_order_seconds",
        "Latency creating a draft order in Shopify"
    )

@router.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
