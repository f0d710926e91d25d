"""Media re-hosting: download an inbound attachment and upload it again.

Inbound media ids can't be referenced in messages sent from our number, so
each attachment is fetched and re-uploaded under the receiving phone number.
"""

from adminrelay.observability.logging import get_logger
from adminrelay.observability.redaction import safe_log_context

from .graph_client import GraphClient

logger = get_logger(__name__)

# Subtypes whose natural extension differs from the subtype itself
_EXTENSION_OVERRIDES = {
    "jpeg": "jpg",
    "mpeg": "mp3",
    "quicktime": "mov",
    "plain": "txt",
    "vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "msword": "doc",
    "vnd.ms-excel": "xls",
    "vnd.ms-powerpoint": "ppt",
    "octet-stream": "bin",
}


def extension_for_mime(mime_type: str) -> str:
    """Derive a filename extension from a MIME type.

    >>> extension_for_mime("audio/ogg; codecs=opus")
    'ogg'
    """
    base = mime_type.split(";", 1)[0].strip().lower()
    _, _, subtype = base.partition("/")
    if not subtype:
        return "bin"
    return _EXTENSION_OVERRIDES.get(subtype, subtype.split("+", 1)[0])


def rehost(
    client: GraphClient,
    media_id: str,
    phone_id: str,
    filename: str | None = None,
) -> str:
    """Re-host a media object and return its new id.

    Calls, in order: fetch metadata, download bytes, upload. Any failure
    propagates, so nothing is forwarded for this message.
    """
    info = client.get_media(media_id)
    content = client.download_media(info.url)

    upload_name = filename or f"file.{extension_for_mime(info.mime_type)}"
    new_media_id = client.upload_media(phone_id, content, info.mime_type, upload_name)

    logger.info(
        "media rehosted",
        extra={
            "extra_fields": safe_log_context(
                mime_type=info.mime_type,
                size_bytes=len(content),
            )
        },
    )
    return new_media_id
