"""Downstream relay of raw webhook change values.

Fire-and-forget: failures are logged and never abort webhook handling.
"""

from typing import Any

import requests

from adminrelay.config import Settings
from adminrelay.observability.logging import get_logger
from adminrelay.observability.redaction import safe_log_context

logger = get_logger(__name__)


def send_to_server(
    settings: Settings,
    value: dict[str, Any],
    session: requests.Session | None = None,
) -> bool:
    """POST the raw change `value` to the configured relay URL.

    Returns:
        True if the relay answered 2xx, False if disabled or on any failure.
    """
    if not settings.relay_url:
        return False

    http = session or requests
    try:
        response = http.post(
            settings.relay_url,
            json=value,
            headers={"Content-Type": "application/json"},
            timeout=settings.http_timeout,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(
            "downstream relay failed",
            extra={"extra_fields": safe_log_context(error_type=type(e).__name__)},
        )
        return False

    logger.info(
        "downstream relay delivered",
        extra={"extra_fields": safe_log_context(status_code=response.status_code)},
    )
    return True
