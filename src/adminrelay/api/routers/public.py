"""Liveness routes."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

LIVENESS_TEXT = "WhatsApp Webhook Running"


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return LIVENESS_TEXT


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
