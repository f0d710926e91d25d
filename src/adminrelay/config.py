"""Runtime configuration.

Settings are read from the environment once at startup and passed explicitly
to every component that needs them.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_PORT = 3001
DEFAULT_ADMIN_PHONE_NUMBER = "265888699977"
DEFAULT_GRAPH_API_VERSION = "v18.0"
DEFAULT_GRAPH_BASE_URL = "https://graph.facebook.com"
DEFAULT_HTTP_TIMEOUT = 30.0


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or malformed."""

    pass


@dataclass(frozen=True)
class Settings:
    """Immutable service configuration."""

    verify_token: str
    graph_api_token: str
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    admin_phone_number: str = DEFAULT_ADMIN_PHONE_NUMBER
    graph_api_version: str = DEFAULT_GRAPH_API_VERSION
    graph_base_url: str = DEFAULT_GRAPH_BASE_URL
    template_language: str = "en"
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    relay_url: str = ""

    @property
    def graph_url(self) -> str:
        """Versioned Graph API root, without trailing slash."""
        return f"{self.graph_base_url.rstrip('/')}/{self.graph_api_version}"


def _parse_number(environ: Mapping[str, str], name: str, default: float, cast):
    raw = environ.get(name, "")
    if not raw:
        return cast(default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Required env vars:
    - WEBHOOK_VERIFY_TOKEN: shared secret for the webhook handshake
    - GRAPH_API_TOKEN: bearer token for the WhatsApp Cloud API

    Optional:
    - PORT, HOST
    - ADMIN_PHONE_NUMBER
    - GRAPH_API_VERSION (default: v18.0), GRAPH_BASE_URL
    - TEMPLATE_LANGUAGE (default: en)
    - GRAPH_HTTP_TIMEOUT (seconds)
    - RELAY_URL: downstream endpoint receiving raw change values

    Raises:
        ConfigError: If required variables are missing or numbers are malformed.
    """
    env = os.environ if environ is None else environ

    verify_token = env.get("WEBHOOK_VERIFY_TOKEN", "")
    graph_api_token = env.get("GRAPH_API_TOKEN", "")

    missing = [
        name
        for name, value in (
            ("WEBHOOK_VERIFY_TOKEN", verify_token),
            ("GRAPH_API_TOKEN", graph_api_token),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing config: {', '.join(missing)} required")

    return Settings(
        verify_token=verify_token,
        graph_api_token=graph_api_token,
        port=_parse_number(env, "PORT", DEFAULT_PORT, int),
        host=env.get("HOST", "0.0.0.0"),
        admin_phone_number=env.get("ADMIN_PHONE_NUMBER", DEFAULT_ADMIN_PHONE_NUMBER),
        graph_api_version=env.get("GRAPH_API_VERSION", DEFAULT_GRAPH_API_VERSION),
        graph_base_url=env.get("GRAPH_BASE_URL", DEFAULT_GRAPH_BASE_URL),
        template_language=env.get("TEMPLATE_LANGUAGE", "en"),
        http_timeout=_parse_number(env, "GRAPH_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
        relay_url=env.get("RELAY_URL", ""),
    )
