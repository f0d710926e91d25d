"""Inbound event dispatch.

Flow for one webhook event, all within the request:
    relay raw value (optional) -> extract first message -> rehost media
    -> forward to admin -> auto reply -> mark read

Every step after extraction is a blocking Graph API call whose order matters:
later calls use the results of earlier ones. Any provider failure propagates
to the caller, so a message whose media can't be rehosted is never forwarded.
"""

from dataclasses import dataclass
from typing import Any, Literal

from adminrelay.config import Settings
from adminrelay.observability.logging import get_logger
from adminrelay.observability.redaction import hash_identifier, safe_log_context

from .forwarding import auto_reply, forward_to_admin, mark_read
from .graph_client import GraphClient
from .media import rehost
from .meta_adapter import (
    InvalidPayloadError,
    extract_first_message,
    get_change_value,
    get_phone_number_id,
    parse_message,
)
from .models import InboundMessage, TemplateInvocation
from .relay import send_to_server
from .templates import MEDIA_KINDS, build_admin_template, is_supported

logger = get_logger(__name__)

OutcomeStatus = Literal["ignored", "forwarded", "unhandled"]


@dataclass(frozen=True)
class EventOutcome:
    """What handle_event did with an event."""

    status: OutcomeStatus
    kind: str | None = None
    template: str | None = None


def _admin_template(
    client: GraphClient,
    message: InboundMessage,
    phone_id: str,
) -> TemplateInvocation:
    media_id = None
    if message.kind in MEDIA_KINDS:
        source_id = message.content.get("id")
        if not source_id:
            raise InvalidPayloadError(f"{message.kind} message has no media id")
        # Documents keep their original name
        filename = message.content.get("filename") if message.kind == "document" else None
        media_id = rehost(client, str(source_id), phone_id, filename=filename)
    return build_admin_template(message, media_id)


def handle_event(
    payload: Any,
    settings: Settings,
    client: GraphClient,
) -> EventOutcome:
    """Process one webhook payload.

    Unsupported message types are not forwarded to the admin, but the sender
    still gets the auto reply and the message is still marked read.

    Raises:
        InvalidPayloadError: A message is present but malformed.
        GraphApiError: Any Graph API call failed.
    """
    value = get_change_value(payload)
    if value is not None and settings.relay_url:
        send_to_server(settings, value)

    raw_message = extract_first_message(payload)
    if raw_message is None:
        logger.debug("event without message ignored")
        return EventOutcome(status="ignored")

    phone_id = get_phone_number_id(payload)
    if not phone_id:
        raise InvalidPayloadError("missing metadata.phone_number_id")

    message = parse_message(raw_message)

    logger.info(
        "inbound message received",
        extra={
            "extra_fields": {
                **safe_log_context(kind=message.kind),
                "from_hash": hash_identifier(message.sender),
            }
        },
    )

    template_name = None
    if is_supported(message.kind):
        invocation = _admin_template(client, message, phone_id)
        forward_to_admin(client, settings, phone_id, invocation)
        template_name = invocation.name
    else:
        logger.warning(
            "unhandled message type",
            extra={"extra_fields": safe_log_context(kind=message.kind)},
        )

    auto_reply(client, settings, phone_id, message)
    mark_read(client, phone_id, message.message_id)

    return EventOutcome(
        status="forwarded" if template_name else "unhandled",
        kind=message.kind,
        template=template_name,
    )
