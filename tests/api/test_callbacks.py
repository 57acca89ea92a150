"""Tests for the callback pipeline: processor, controller and HTTP route."""

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, HTTPException

from groupbot.api.controllers import CallbackController
from groupbot.api.routes import create_webhook_router, health_router
from groupbot.commands import CommandDispatcher
from groupbot.core.events import CallbackProcessor
from groupbot.schemas.callback import GroupMeCallback


def callback(text="hello", user_id="u9", sender_type="user", attachments=None) -> dict:
    return {
        "id": "m1",
        "group_id": "g1",
        "name": "Someone",
        "text": text,
        "sender_id": user_id,
        "sender_type": sender_type,
        "user_id": user_id,
        "attachments": attachments or [],
    }


@pytest.fixture
def processor(services) -> CallbackProcessor:
    return CallbackProcessor(services, CommandDispatcher(services))


@pytest.fixture
def controller(processor) -> CallbackController:
    return CallbackController(processor)


class TestCallbackProcessor:
    @pytest.mark.asyncio
    async def test_bot_messages_are_ignored(self, processor, services, messenger):
        result = await processor.process(
            GroupMeCallback.model_validate(callback("/ping", sender_type="bot"))
        )

        assert result["ignored"]
        assert services.ledger.snapshot() == {"u1": 5}
        assert services.history.last_text == ""
        assert messenger.posts == []

    @pytest.mark.asyncio
    async def test_text_message_earns_and_is_remembered(self, processor, services):
        result = await processor.process(GroupMeCallback.model_validate(callback("hi all")))

        assert result["signal"] == "TEXT_MESSAGE_SENT"
        assert services.ledger.balance("u9") == 2
        assert services.history.last_text == "hi all"

    @pytest.mark.asyncio
    async def test_command_earns_and_dispatches(self, processor, services, messenger):
        result = await processor.process(GroupMeCallback.model_validate(callback("/ping")))

        assert result["command"] == "ping"
        assert services.ledger.balance("u9") == 1
        assert services.history.last_text == ""
        assert messenger.texts == ["Pong!"]

    @pytest.mark.asyncio
    async def test_media_earns_most(self, processor, services):
        payload = callback(
            "look", attachments=[{"type": "image", "url": "https://i.groupme.com/z.png"}]
        )
        await processor.process(GroupMeCallback.model_validate(payload))

        assert services.ledger.balance("u9") == 3

    @pytest.mark.asyncio
    async def test_earning_happens_before_the_command(self, processor, messenger):
        await processor.process(GroupMeCallback.model_validate(callback("/bal", "u1")))
        assert messenger.texts == ["Alice's current balance is 6 points."]


class TestCallbackController:
    @pytest.mark.asyncio
    async def test_accepts_and_processes_in_background(self, controller, services):
        response = await controller.handle_callback(callback("hi"))
        assert response == {"status": "accepted"}

        await controller.drain()
        assert services.ledger.balance("u9") == 2
        assert controller.get_health_status() == {"pending": 0, "processed": 1, "failed": 0}

    @pytest.mark.asyncio
    async def test_rejects_non_object_payload(self, controller):
        with pytest.raises(HTTPException) as exc_info:
            await controller.handle_callback(["not", "a", "callback"])
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_rejects_invalid_payload(self, controller):
        with pytest.raises(HTTPException) as exc_info:
            await controller.handle_callback({"attachments": "nope"})
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_unavailable_before_startup(self):
        with pytest.raises(HTTPException) as exc_info:
            await CallbackController().handle_callback(callback())
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_processing_errors_are_contained(self, controller, monkeypatch):
        async def broken(cb):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(controller.processor, "process", broken)
        await controller.handle_callback(callback())
        await controller.drain()

        assert controller.failed == 1


@pytest_asyncio.fixture
async def client(controller, services):
    app = FastAPI()
    app.include_router(health_router)
    app.include_router(create_webhook_router(controller))
    app.state.services = services

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


class TestRoutes:
    @pytest.mark.asyncio
    async def test_callback_route(self, client, controller, services):
        response = await client.post("/webhook/groupme", json=callback("hey"))

        assert response.status_code == 200
        assert response.json() == {"status": "accepted"}
        await controller.drain()
        assert services.ledger.balance("u9") == 2

    @pytest.mark.asyncio
    async def test_malformed_json(self, client, services):
        response = await client.post(
            "/webhook/groupme",
            content=b"{oops",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert services.ledger.snapshot() == {"u1": 5}

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        body = response.json()

        assert body["status"] == "healthy"
        assert body["state"]["ledger_records"] == 1
        assert body["state"]["catalog_entries"] == 3
        assert body["state"]["state_owner_running"] is True
        assert body["state"]["state_backlog"] == 0


class TestMessageHistory:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["/", "/   ", "/deepfry now"])
    async def test_prefixed_text_is_never_remembered(self, processor, services, text):
        services.history.record("earlier chat")
        result = await processor.process(GroupMeCallback.model_validate(callback(text)))

        assert result["signal"] == "COMMAND_USED"
        assert services.history.last_text == "earlier chat"
