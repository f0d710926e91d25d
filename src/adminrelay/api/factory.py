"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response

from adminrelay.config import Settings, load_settings
from adminrelay.observability.correlation import (
    CORRELATION_ID_HEADER,
    generate_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from adminrelay.whatsapp.graph_client import GraphClient

from .routers import public
from .routes import webhooks_whatsapp


def create_app(
    settings: Settings | None = None,
    graph_client: GraphClient | None = None,
) -> FastAPI:
    """Create the webhook app.

    Args:
        settings: Explicit settings. If None, loaded from the environment.
        graph_client: Graph API gateway. If None, built from settings.

    Returns:
        Configured FastAPI application. Settings and client are exposed on
        ``app.state`` for route handlers.
    """
    if settings is None:
        settings = load_settings()
    if graph_client is None:
        graph_client = GraphClient(settings)

    app = FastAPI(
        title="WhatsApp Admin Relay",
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.graph_client = graph_client

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    app.include_router(public.router)
    app.include_router(webhooks_whatsapp.router)

    return app
