"""WhatsApp message models."""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, model_serializer

MediaType = Literal["image", "video", "audio", "document"]


@dataclass(frozen=True)
class InboundMessage:
    """First message of an inbound webhook event.

    `sender` and the type-specific content are PII: use them to build outbound
    messages, never log them.
    """

    message_id: str
    sender: str
    kind: str  # e.g. "text", "image", "contacts"
    raw: dict[str, Any] = field(repr=False, compare=False)

    @property
    def content(self) -> dict[str, Any]:
        """Type-specific payload (e.g. ``raw["image"]``), empty if absent."""
        value = self.raw.get(self.kind)
        return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class MediaInfo:
    """Resolved media metadata. The URL is short-lived and requires the bearer token."""

    url: str
    mime_type: str


class TemplateParameter(BaseModel):
    """A single template placeholder value: text or a media reference."""

    type: Literal["text", "image", "video", "audio", "document"]
    text: str | None = None
    media_id: str | None = None

    @classmethod
    def of_text(cls, text: str) -> "TemplateParameter":
        return cls(type="text", text=text)

    @classmethod
    def of_media(cls, media_type: MediaType, media_id: str) -> "TemplateParameter":
        return cls(type=media_type, media_id=media_id)

    @model_serializer
    def to_cloud_api(self) -> dict[str, Any]:
        if self.type == "text":
            return {"type": "text", "text": self.text or ""}
        return {"type": self.type, self.type: {"id": self.media_id}}


class TemplateComponent(BaseModel):
    type: Literal["header", "body"]
    parameters: list[TemplateParameter]


class TemplateInvocation(BaseModel):
    """Named template plus ordered components.

    Parameter count and types must match the template approved on the
    provider side, otherwise the send is rejected.
    """

    name: str
    components: list[TemplateComponent] = []

    def to_payload(self, language: str) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "language": {"code": language}}
        if self.components:
            payload["components"] = [c.model_dump() for c in self.components]
        return payload
