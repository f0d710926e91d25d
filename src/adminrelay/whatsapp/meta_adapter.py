"""Meta Cloud API adapter: pull the pieces we need out of webhook payloads.

Payload structure:
{
  "object": "whatsapp_business_account",
  "entry": [{
    "changes": [{
      "value": {
        "metadata": {"phone_number_id": "..."},
        "messages": [{"from": "PHONE", "id": "MSG_ID", "type": "text", "text": {"body": "..."}}]
      },
      "field": "messages"
    }]
  }]
}

Only the first entry, first change and first message are considered.
"""

from typing import Any

from .models import InboundMessage


class InvalidPayloadError(Exception):
    """Raised when a message is present but lacks required fields."""

    pass


def get_change_value(payload: Any) -> dict[str, Any] | None:
    """Return ``entry[0].changes[0].value`` or None if the shape doesn't match."""
    try:
        entry = payload.get("entry") or []
        if not entry:
            return None
        changes = entry[0].get("changes") or []
        if not changes:
            return None
        value = changes[0].get("value")
        return value if isinstance(value, dict) else None
    except (AttributeError, IndexError, KeyError, TypeError):
        return None


def get_phone_number_id(payload: Any) -> str | None:
    """Extract the receiving phone_number_id from the payload, if any."""
    value = get_change_value(payload)
    if value is None:
        return None
    metadata = value.get("metadata")
    if not isinstance(metadata, dict):
        return None
    phone_number_id = metadata.get("phone_number_id")
    return str(phone_number_id) if phone_number_id else None


def extract_first_message(payload: Any) -> dict[str, Any] | None:
    """Return the first message dict, or None for status updates and empty events."""
    value = get_change_value(payload)
    if value is None:
        return None
    messages = value.get("messages")
    if not isinstance(messages, list) or not messages:
        return None
    message = messages[0]
    return message if isinstance(message, dict) else None


def parse_message(raw: dict[str, Any]) -> InboundMessage:
    """Build an InboundMessage from a raw message dict.

    Raises:
        InvalidPayloadError: If the message id or sender is missing.
    """
    message_id = raw.get("id")
    if not message_id or not isinstance(message_id, str):
        raise InvalidPayloadError("missing or invalid message id")

    sender = raw.get("from")
    if not sender:
        raise InvalidPayloadError("missing sender phone number")

    return InboundMessage(
        message_id=message_id,
        sender=str(sender),
        kind=str(raw.get("type") or "unknown"),
        raw=raw,
    )
