"""
Callback controller.

Routes handle HTTP concerns (JSON parsing, responses); the controller
validates the GroupMe payload and hands it to the ``CallbackProcessor`` in a
background task so the HTTP response goes out immediately. GroupMe does not
wait long for bot callbacks.
"""

import asyncio
from typing import Any

from fastapi import HTTPException
from pydantic import ValidationError

from groupbot.core.events import CallbackProcessor
from groupbot.core.logging.context import get_context_info, set_request_context
from groupbot.core.logging.logger import get_logger
from groupbot.schemas.callback import GroupMeCallback


class CallbackController:
    """
    Accepts GroupMe callbacks and processes them in the background.

    Anything escaping background processing is logged and swallowed, so a
    failing callback never terminates the server.
    """

    def __init__(self, processor: CallbackProcessor | None = None):
        self.processor = processor
        self.logger = get_logger(__name__)
        self._tasks: set[asyncio.Task] = set()
        self.processed = 0
        self.failed = 0

    async def handle_callback(self, payload: dict[str, Any]) -> dict[str, str]:
        """
        Validate and queue one callback.

        Raises:
            HTTPException: 400 when the payload is not a GroupMe message
            HTTPException: 503 before the bot finished starting
        """
        if self.processor is None:
            raise HTTPException(status_code=503, detail="Bot is starting up")
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Callback must be a JSON object")
        try:
            callback = GroupMeCallback.model_validate(payload)
        except ValidationError as e:
            self.logger.error(f"Invalid GroupMe callback: {e}")
            raise HTTPException(status_code=400, detail="Invalid callback payload") from e

        task = asyncio.create_task(self._process_async(callback))
        # Hold a reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        self.logger.debug(f"✅ Callback queued for background processing: {callback.id}")
        return {"status": "accepted"}

    async def _process_async(self, callback: GroupMeCallback) -> None:
        set_request_context(group_id=callback.group_id, user_id=callback.user_id or None)
        logger = get_logger(__name__)
        try:
            logger.debug(f"🔍 Context: {get_context_info()}")
            await self.processor.process(callback)
            self.processed += 1
        except Exception as e:
            self.failed += 1
            logger.error(f"❌ Error processing callback: {e}", exc_info=True)

    async def drain(self) -> None:
        """Wait for every queued callback to finish (shutdown and tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def get_health_status(self) -> dict[str, int]:
        return {
            "pending": len(self._tasks),
            "processed": self.processed,
            "failed": self.failed,
        }
