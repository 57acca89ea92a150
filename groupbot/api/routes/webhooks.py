"""
GroupMe callback route.

GroupMe POSTs every group message to the bot's callback URL. The route only
parses JSON and delegates to ``CallbackController``.
"""

from fastapi import APIRouter, HTTPException, Request

from groupbot.api.controllers import CallbackController
from groupbot.core.logging.logger import get_logger


def create_webhook_router(controller: CallbackController) -> APIRouter:
    """
    Create the webhook router delegating to ``controller``.

    Args:
        controller: CallbackController wired to the bot's processor

    Returns:
        APIRouter with ``POST /webhook/groupme``
    """
    router = APIRouter(
        prefix="/webhook",
        tags=["Webhooks"],
        responses={
            400: {"description": "Bad Request - Invalid callback payload"},
            500: {"description": "Internal Server Error"},
        },
    )

    @router.post("/groupme")
    async def groupme_callback(request: Request):
        """Accept a GroupMe bot callback; processing continues in the background."""
        try:
            payload = await request.json()
        except Exception as e:
            logger = get_logger(__name__)
            logger.error(f"Failed to parse callback payload: {e}")
            raise HTTPException(status_code=400, detail="Invalid JSON payload") from e

        return await controller.handle_callback(payload)

    @router.get("/groupme/status")
    async def callback_status():
        """Background processing counters, for debugging."""
        return {"status": "active", "controller_status": controller.get_health_status()}

    return router
