"""
GroupBot application: FastAPI app, lifespan wiring and uvicorn entry point.

Startup order:
1. logging
2. GroupMe credentials and the shared aiohttp session
3. persistent store, ledger and catalog mirrors (a load failure aborts startup)
4. state owner, dispatcher and callback processor

Shutdown drains queued callbacks and state jobs before closing the store and
the HTTP session.
"""

import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp
import uvicorn
from fastapi import FastAPI

from groupbot.api.controllers import CallbackController
from groupbot.api.middleware import ErrorHandlerMiddleware, RequestLoggingMiddleware
from groupbot.api.routes import create_webhook_router, health_router
from groupbot.commands import BotServices, CommandDispatcher
from groupbot.core.config.settings import Settings, settings
from groupbot.core.events import CallbackProcessor
from groupbot.core.logging.logger import get_app_logger, setup_app_logging
from groupbot.core.state import StateOwner
from groupbot.core.types import StoreType, StoreTypeOptions, validate_store_type
from groupbot.domain.interfaces.messaging_interface import IGroupRoster, IMessenger
from groupbot.domain.interfaces.store_interface import IPersistentStore
from groupbot.domain.services import PictureCatalog, PointsLedger, RotationCache
from groupbot.messaging.groupme import GroupMeClient, GroupMeMessenger
from groupbot.messaging.lookups import LookupClient
from groupbot.persistence import create_store


class GroupBot:
    """
    The GroupMe bot server.

    Example:
        bot = GroupBot(store="json")
        bot.run()

    Collaborators can be injected (tests, alternative transports); anything
    not injected is built from settings during startup.
    """

    def __init__(
        self,
        store: StoreTypeOptions | StoreType | None = None,
        config: Settings | None = None,
        *,
        store_instance: IPersistentStore | None = None,
        messenger: IMessenger | None = None,
        roster: IGroupRoster | None = None,
        lookups: LookupClient | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or settings
        self.store_type = validate_store_type(
            store.value if isinstance(store, StoreType) else store or self.config.store_type
        )
        self._store = store_instance
        self._messenger = messenger
        self._roster = roster
        self._lookups = lookups
        self._rng = rng or random.Random()

        self.controller = CallbackController()
        self.services: BotServices | None = None
        self._session: aiohttp.ClientSession | None = None
        self._app: FastAPI | None = None

    def create_app(self) -> FastAPI:
        if self._app is not None:
            return self._app

        app = FastAPI(
            title="groupbot",
            version=self.config.version,
            lifespan=self.lifespan,
            docs_url="/docs" if self.config.is_development else None,
            redoc_url=None,
        )
        app.add_middleware(ErrorHandlerMiddleware)
        app.add_middleware(RequestLoggingMiddleware)
        app.include_router(health_router)
        app.include_router(create_webhook_router(self.controller))
        self._app = app
        return app

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        await self.startup(app)
        try:
            yield
        finally:
            await self.shutdown(app)

    async def startup(self, app: FastAPI) -> None:
        setup_app_logging(self.config)
        logger = get_app_logger()
        logger.info(f"🚀 Starting groupbot v{self.config.version}")
        logger.info(f"📊 Environment: {self.config.environment}")
        logger.info(f"💾 Store type: {self.store_type.value}")

        try:
            messenger, roster, lookups = await self._build_messaging()
            store = self._store or create_store(self.store_type, self.config)

            ledger = PointsLedger(store)
            catalog = PictureCatalog(store, rng=self._rng)
            # Never serve from an empty mirror that would overwrite stored data
            await ledger.load()
            await catalog.load()

            state = StateOwner()
            state.start()
        except Exception as e:
            logger.error(f"❌ Error during startup: {e}", exc_info=True)
            await self._close_session()
            raise

        self.services = BotServices(
            state=state,
            ledger=ledger,
            catalog=catalog,
            rotation=RotationCache(catalog, rng=self._rng),
            messenger=messenger,
            roster=roster,
            settings=self.config,
            lookups=lookups,
            rng=self._rng,
        )
        self._store = store
        self.controller.processor = CallbackProcessor(
            self.services, CommandDispatcher(self.services)
        )
        app.state.services = self.services
        app.state.store_type = self.store_type.value

        logger.info(
            f"✅ Ready - {len(ledger)} points records, {len(catalog)} pictures; "
            f"callbacks at /webhook/groupme"
        )

    async def shutdown(self, app: FastAPI) -> None:
        logger = get_app_logger()
        logger.info("🛑 Shutting down groupbot...")
        try:
            await self.controller.drain()
            if self.services is not None:
                await self.services.state.stop()
            if self._store is not None:
                await self._store.close()
        except Exception as e:
            logger.error(f"❌ Error during shutdown: {e}", exc_info=True)
        finally:
            await self._close_session()
            if hasattr(app.state, "services"):
                del app.state.services
        logger.info("✅ Shutdown completed")

    async def _build_messaging(
        self,
    ) -> tuple[IMessenger, IGroupRoster, LookupClient | None]:
        if self._messenger is not None:
            roster = self._roster
            if roster is None and isinstance(self._messenger, IGroupRoster):
                roster = self._messenger
            if roster is None:
                raise ValueError("A roster is required when injecting a messenger")
            return self._messenger, roster, self._lookups

        self.config.validate_groupme_credentials()
        connector = aiohttp.TCPConnector(limit=100, keepalive_timeout=30)
        self._session = aiohttp.ClientSession(
            connector=connector, timeout=aiohttp.ClientTimeout(total=30)
        )
        client = GroupMeClient(
            self._session,
            bot_id=self.config.groupme_bot_id,
            access_token=self.config.groupme_access_token,
            group_id=self.config.groupme_group_id,
            base_url=self.config.groupme_api_url,
        )
        messenger = GroupMeMessenger(client, self.config.max_message_length)
        lookups = self._lookups or LookupClient(self._session)
        return messenger, self._roster or messenger, lookups

    async def _close_session(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    def run(self, host: str = "0.0.0.0", port: int | None = None, **kwargs) -> None:
        """
        Run the bot using uvicorn.

        Args:
            host: Host to bind to
            port: Port to bind to (defaults to settings.port)
            **kwargs: Additional uvicorn configuration
        """
        port = port or self.config.port
        uvicorn_config = {
            "host": host,
            "port": port,
            "log_level": self.config.log_level.lower(),
            **kwargs,
        }
        uvicorn.run(self.create_app(), **uvicorn_config)
