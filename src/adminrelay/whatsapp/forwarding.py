"""Outbound messages sent while handling an inbound event.

Security: NEVER log recipient numbers or parameter text. Only log hashes,
template names and counts.
"""

from typing import Any

from adminrelay.config import Settings
from adminrelay.observability.logging import get_logger
from adminrelay.observability.redaction import hash_identifier, safe_log_context

from .graph_client import GraphClient
from .models import InboundMessage, TemplateInvocation
from .sanitize import sanitize_components
from .templates import AUTO_REPLY_TEMPLATE

logger = get_logger(__name__)


def forward_to_admin(
    client: GraphClient,
    settings: Settings,
    phone_id: str,
    invocation: TemplateInvocation,
) -> dict[str, Any]:
    """Send a template message to the administrator.

    Text parameters are sanitized before sending, whatever the message type.
    """
    sanitized = invocation.model_copy(
        update={"components": sanitize_components(invocation.components)}
    )

    body = {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": settings.admin_phone_number,
        "type": "template",
        "template": sanitized.to_payload(settings.template_language),
    }

    result = client.send_message(phone_id, body)
    logger.info(
        "forwarded to admin",
        extra={
            "extra_fields": safe_log_context(
                template=sanitized.name,
                component_count=len(sanitized.components),
            )
        },
    )
    return result


def auto_reply(
    client: GraphClient,
    settings: Settings,
    phone_id: str,
    message: InboundMessage,
) -> dict[str, Any]:
    """Acknowledge the sender with the auto_response template, as a reply."""
    body = {
        "messaging_product": "whatsapp",
        "to": message.sender,
        "type": "template",
        "template": TemplateInvocation(name=AUTO_REPLY_TEMPLATE).to_payload(
            settings.template_language
        ),
        "context": {"message_id": message.message_id},
    }

    result = client.send_message(phone_id, body)
    logger.info(
        "auto reply sent",
        extra={"extra_fields": {"to_hash": hash_identifier(message.sender)}},
    )
    return result


def mark_read(client: GraphClient, phone_id: str, message_id: str) -> dict[str, Any]:
    """Send a read receipt for an inbound message."""
    return client.send_message(
        phone_id,
        {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": message_id,
        },
    )
