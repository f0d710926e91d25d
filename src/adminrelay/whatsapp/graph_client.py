"""WhatsApp Cloud API (Graph API) gateway.

Security: NEVER log recipient numbers, message text or media URLs.
Only log hashes, ids and sizes.
"""

from typing import Any

import requests

from adminrelay.config import Settings
from adminrelay.observability.logging import get_logger
from adminrelay.observability.redaction import safe_log_context

from .models import MediaInfo

logger = get_logger(__name__)


class GraphApiError(Exception):
    """Raised when a Graph API call fails (transport error or non-2xx)."""

    def __init__(self, message: str, status_code: int | None = None, error: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.error = error


def _error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class GraphClient:
    """Thin wrapper over the Graph API endpoints this service needs.

    Each method issues exactly one HTTP request. No retries: a failure raises
    GraphApiError and the caller decides what to do.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self._settings = settings
        self._session = session or requests.Session()

    @property
    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._settings.graph_api_token}"}

    def _request(self, method: str, url: str, operation: str, **kwargs: Any) -> requests.Response:
        try:
            response = self._session.request(
                method,
                url,
                headers=self._auth_headers,
                timeout=self._settings.http_timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.error(
                "graph api request failed",
                extra={
                    "extra_fields": safe_log_context(
                        operation=operation, error_type=type(e).__name__
                    )
                },
            )
            raise GraphApiError(f"{operation} failed: {type(e).__name__}") from e

        if not response.ok:
            error = _error_body(response)
            logger.error(
                "graph api returned error",
                extra={
                    "extra_fields": safe_log_context(
                        operation=operation, status_code=response.status_code
                    )
                },
            )
            raise GraphApiError(
                f"{operation} failed: HTTP {response.status_code}",
                status_code=response.status_code,
                error=error,
            )

        return response

    def send_message(self, phone_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST /{phone_id}/messages. Used for template sends and read receipts."""
        url = f"{self._settings.graph_url}/{phone_id}/messages"
        response = self._request("POST", url, "send_message", json=body)
        return response.json()

    def get_media(self, media_id: str) -> MediaInfo:
        """GET /{media_id}: resolve a media id to a download URL and MIME type."""
        url = f"{self._settings.graph_url}/{media_id}"
        data = self._request("GET", url, "get_media").json()

        media_url = data.get("url")
        if not media_url:
            raise GraphApiError("get_media failed: response has no url", error=data)

        return MediaInfo(
            url=media_url,
            mime_type=data.get("mime_type") or "application/octet-stream",
        )

    def download_media(self, url: str) -> bytes:
        """GET the raw bytes behind a media URL returned by get_media."""
        return self._request("GET", url, "download_media").content

    def upload_media(
        self,
        phone_id: str,
        content: bytes,
        mime_type: str,
        filename: str,
    ) -> str:
        """POST /{phone_id}/media as multipart form. Returns the new media id."""
        url = f"{self._settings.graph_url}/{phone_id}/media"
        data = self._request(
            "POST",
            url,
            "upload_media",
            files={"file": (filename, content, mime_type)},
            data={"messaging_product": "whatsapp"},
        ).json()

        media_id = data.get("id")
        if not media_id:
            raise GraphApiError("upload_media failed: response has no id", error=data)

        return str(media_id)
