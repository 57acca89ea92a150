"""API routes for groupbot."""

from .health import router as health_router
from .webhooks import create_webhook_router

__all__ = ["create_webhook_router", "health_router"]
