"""Shared test helpers (not fixtures) for adminrelay tests.

Importable from both conftest.py and individual test modules.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

from adminrelay.whatsapp.graph_client import GraphApiError
from adminrelay.whatsapp.models import MediaInfo

ADMIN_PHONE = "265888699977"
PHONE_ID = "999"


class FakeGraphClient:
    """Records Graph API calls in order instead of hitting the network."""

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []
        self.media = MediaInfo(url="https://lookaside.example/media/abc", mime_type="image/jpeg")
        self.content = b"\x89PNG-bytes"
        self.uploaded_id = "rehosted-1"
        self.fail_on: str | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_on == name:
            raise GraphApiError(
                f"{name} failed: HTTP 500",
                status_code=500,
                error={"error": {"code": 131000, "message": "Something went wrong"}},
            )

    def send_message(self, phone_id: str, body: dict) -> dict:
        self._record("send_message", phone_id, body)
        return {"messages": [{"id": "wamid.out"}]}

    def get_media(self, media_id: str) -> MediaInfo:
        self._record("get_media", media_id)
        return self.media

    def download_media(self, url: str) -> bytes:
        self._record("download_media", url)
        return self.content

    def upload_media(self, phone_id: str, content: bytes, mime_type: str, filename: str) -> str:
        self._record("upload_media", phone_id, content, mime_type, filename)
        return self.uploaded_id

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    @property
    def sent_bodies(self) -> list[dict]:
        return [args[1] for name, args in self.calls if name == "send_message"]


def make_payload(message: dict | None, phone_number_id: str = PHONE_ID) -> dict:
    """Build a Cloud API webhook payload around a single message."""
    value: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "metadata": {
            "display_phone_number": "15550001111",
            "phone_number_id": phone_number_id,
        },
    }
    if message is not None:
        value["contacts"] = [{"profile": {"name": "Test User"}, "wa_id": message.get("from")}]
        value["messages"] = [message]
    return {
        "object": "whatsapp_business_account",
        "entry": [{"id": "WABA_ID", "changes": [{"value": value, "field": "messages"}]}],
    }


def make_response(json_body: Any = None, status_code: int = 200, content: bytes = b"") -> MagicMock:
    """Fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_body
    response.content = content
    response.text = "" if json_body is None else str(json_body)
    return response
