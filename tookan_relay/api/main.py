# tookan_relay/api/main.py
from pathlib import Path
from typing import Optional
import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from tookan_relay.core.logging import bind_request_context, setup_logging
from tookan_relay.core.config import Settings
from tookan_relay.api.errors import install_error_handlers
from tookan_relay.api.routers import health, orders, webhooks
from tookan_relay.metrics import prom

log = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Shopify to Tookan Relay")
    app.state.settings = settings
    install_error_handlers(app)

    @app.middleware("http")
    async def log_context(request: Request, call_next):
        request_id = bind_request_context(request.method, request.url.path,
                                          request.headers.get("X-Request-ID"))
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # Routers
    app.include_router(health.router)
    app.include_router(webhooks.router)
    app.include_router(orders.router)
    if settings.PROMETHEUS_ENABLE:
        app.include_router(prom.router)

    # Assets last so API routes win on "/"
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    return app


app = create_app()


def serve() -> None:
    settings: Settings = app.state.settings
    log.info("server_starting", host=settings.API_HOST, port=settings.API_PORT)
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_level=settings.LOG_LEVEL.lower())
