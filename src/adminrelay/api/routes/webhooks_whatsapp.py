"""WhatsApp webhook routes.

- GET  /webhook: Meta subscription handshake
- POST /webhook: inbound events, forwarded to the admin

Events are handled inline. Any failure answers 500 and Meta redelivers the
event according to its own policy.
"""

from typing import Any

from fastapi import APIRouter, Query, Request, Response
from starlette.concurrency import run_in_threadpool

from adminrelay.observability.correlation import get_correlation_id
from adminrelay.observability.logging import get_logger
from adminrelay.observability.redaction import safe_log_context
from adminrelay.whatsapp.dispatcher import handle_event
from adminrelay.whatsapp.graph_client import GraphApiError

router = APIRouter(tags=["webhooks"])

logger = get_logger(__name__)


def _provider_error_context(exc: Exception) -> dict[str, Any]:
    """Extract Graph API error details (code, message) for logging."""
    if not isinstance(exc, GraphApiError):
        return {}
    context: dict[str, Any] = {"status_code": exc.status_code}
    if isinstance(exc.error, dict):
        error = exc.error.get("error")
        if isinstance(error, dict):
            context["provider_code"] = error.get("code")
            context["provider_message"] = error.get("message")
    return context


@router.get("/webhook")
async def webhook_verify(
    request: Request,
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
) -> Response:
    """Webhook verification handshake.

    Meta sends a GET request during webhook setup; we echo hub.challenge when
    hub.mode is "subscribe" and hub.verify_token matches the configured secret.

    Returns:
        200 with hub.challenge as plain text if valid.
        403 otherwise.
    """
    settings = request.app.state.settings

    if hub_mode == "subscribe" and hub_verify_token == settings.verify_token:
        logger.info("webhook verified")
        return Response(status_code=200, content=hub_challenge or "", media_type="text/plain")

    logger.warning(
        "webhook verification failed",
        extra={
            "extra_fields": safe_log_context(
                hub_mode=hub_mode or "missing",
                token_present=hub_verify_token is not None,
            )
        },
    )
    return Response(status_code=403, content="Forbidden", media_type="text/plain")


@router.post("/webhook")
async def webhook_receive(request: Request) -> Response:
    """Receive a WhatsApp Cloud API event.

    Returns:
        200 when the event was handled or carried no message.
        500 when any step (rehost, forward, auto reply, read receipt) failed.
    """
    settings = request.app.state.settings
    client = request.app.state.graph_client

    try:
        payload: Any = await request.json()
    except ValueError:
        logger.warning("invalid json body ignored")
        return Response(status_code=200, content="OK", media_type="text/plain")

    try:
        outcome = await run_in_threadpool(handle_event, payload, settings, client)
    except Exception as exc:
        logger.exception(
            "webhook processing failed",
            extra={
                "extra_fields": safe_log_context(
                    correlationId=get_correlation_id(),
                    error_type=type(exc).__name__,
                    **_provider_error_context(exc),
                )
            },
        )
        return Response(status_code=500, content="Internal Server Error", media_type="text/plain")

    logger.info(
        "webhook processed",
        extra={
            "extra_fields": safe_log_context(
                status=outcome.status,
                kind=outcome.kind,
                template=outcome.template,
            )
        },
    )
    return Response(status_code=200, content="OK", media_type="text/plain")
