"""Per-request correlation IDs, carried through a context variable."""

import uuid
from contextvars import ContextVar, Token

CORRELATION_ID_HEADER = "X-Correlation-ID"

_correlation_id: ContextVar[str] = ContextVar("adminrelay_correlation_id", default="")


def generate_correlation_id() -> str:
    return uuid.uuid4().hex


def get_correlation_id() -> str:
    """Correlation ID of the request being handled, or empty string."""
    return _correlation_id.get()


def set_correlation_id(cid: str) -> Token[str]:
    return _correlation_id.set(cid)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
