"""Admin-facing template selection per inbound message type.

Every template must exist (approved) in the WhatsApp Business account with
the same number and order of parameters as built here.
"""

import json

from .models import (
    InboundMessage,
    MediaType,
    TemplateComponent,
    TemplateInvocation,
    TemplateParameter,
)

AUTO_REPLY_TEMPLATE = "auto_response"
STICKER_CAPTION = "Sticker received"

TEMPLATE_BY_KIND: dict[str, str] = {
    "text": "forwarded_response",
    "image": "forwarded_image",
    "video": "forwarded_video",
    "audio": "forwarded_document",
    "document": "forwarded_document",
    "sticker": "forwarded_image",
    "contacts": "forwarded_contacts",
    "location": "forwarded_location",
}

# Inbound kind -> header parameter type used for the rehosted media.
# Stickers are sent as images since templates have no sticker header.
MEDIA_KINDS: dict[str, MediaType] = {
    "image": "image",
    "video": "video",
    "audio": "audio",
    "document": "document",
    "sticker": "image",
}


def is_supported(kind: str) -> bool:
    return kind in TEMPLATE_BY_KIND


def _body(*values: str) -> TemplateComponent:
    return TemplateComponent(
        type="body",
        parameters=[TemplateParameter.of_text(v) for v in values],
    )


def _header(media_type: MediaType, media_id: str) -> TemplateComponent:
    return TemplateComponent(
        type="header",
        parameters=[TemplateParameter.of_media(media_type, media_id)],
    )


def _body_values(message: InboundMessage) -> tuple[str, ...]:
    content = message.content
    kind = message.kind

    if kind == "text":
        return (message.sender, str(content.get("body") or ""))
    if kind in ("image", "video"):
        return (message.sender, str(content.get("caption") or ""))
    if kind == "audio":
        return (message.sender,)
    if kind == "document":
        return (message.sender, str(content.get("filename") or ""))
    if kind == "sticker":
        return (message.sender, STICKER_CAPTION)
    if kind == "contacts":
        contacts = message.raw.get("contacts") or []
        return (message.sender, json.dumps(contacts, indent=2, ensure_ascii=False))
    if kind == "location":
        return (
            message.sender,
            str(content.get("latitude", "")),
            str(content.get("longitude", "")),
        )
    raise ValueError(f"Unsupported message type: {kind}")


def build_admin_template(message: InboundMessage, media_id: str | None = None) -> TemplateInvocation:
    """Build the admin-facing template invocation for `message`.

    Args:
        message: Parsed inbound message.
        media_id: Rehosted media id. Required for media kinds.

    Raises:
        ValueError: If the kind is unsupported or a media kind lacks media_id.
    """
    if not is_supported(message.kind):
        raise ValueError(f"Unsupported message type: {message.kind}")

    components: list[TemplateComponent] = []

    media_type = MEDIA_KINDS.get(message.kind)
    if media_type is not None:
        if not media_id:
            raise ValueError(f"media_id required for {message.kind} messages")
        components.append(_header(media_type, media_id))

    components.append(_body(*_body_values(message)))

    return TemplateInvocation(name=TEMPLATE_BY_KIND[message.kind], components=components)
