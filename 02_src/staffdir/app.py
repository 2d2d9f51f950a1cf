"""Application bootstrap and lifecycle management."""

from datetime import timedelta
from typing import Protocol

import socketio

from .auth import TokenService
from .config import Settings, resolve_db_path
from .conversations import ConversationService, IConversationService
from .directory import EmployeeDirectory, IEmployeeDirectory
from .logging_config import get_logger
from .presence import PresenceRegistry
from .realtime import Dispatcher, create_socket_server, register_handlers
from .storage import IStorage, Storage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, settings: Settings | None = None, db_path: str | None = None):
        self._settings = settings or Settings.from_env()
        env_db_path = self._settings.database_url if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)

        # Presence and the socket server live for the whole process
        self._presence = PresenceRegistry()
        self._sio = create_socket_server(self._settings.cors_origins)
        self._tokens = TokenService(
            self._settings.jwt_secret,
            timedelta(hours=self._settings.jwt_expires_hours),
        )

        # Storage connects in start(); services only hold references
        self._storage: IStorage = Storage(self._db_path)
        self._directory = EmployeeDirectory(self._storage, self._tokens)
        self._conversations = ConversationService(self._storage)
        self._dispatcher = Dispatcher(
            emitter=self._sio,
            presence=self._presence,
            conversations=self._conversations,
            tokens=self._tokens,
        )
        register_handlers(self._sio, self._dispatcher)
        self._started = False

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")
        if self._settings.uses_default_secret:
            logger.warning("JWT_SECRET is not set; using the built-in default secret")

        await self._storage.init()
        self._started = True
        logger.info("Storage initialized")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if not self._started:
            return
        await self._dispatcher.drain()
        await self._storage.close()
        self._started = False
        logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if not self._started:
            raise RuntimeError("Application not started")
        await self._dispatcher.drain()
        await self._storage.clear()
        logger.info("Storage cleared")

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def sio(self) -> socketio.AsyncServer:
        return self._sio

    @property
    def presence(self) -> PresenceRegistry:
        return self._presence

    @property
    def tokens(self) -> TokenService:
        return self._tokens

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._started:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def directory(self) -> IEmployeeDirectory:
        """Get employee directory instance."""
        if not self._started:
            raise RuntimeError("Application not started")
        return self._directory

    @property
    def conversations(self) -> IConversationService:
        """Get conversation service instance."""
        if not self._started:
            raise RuntimeError("Application not started")
        return self._conversations

    @property
    def dispatcher(self) -> Dispatcher:
        """Get realtime dispatcher instance."""
        if not self._started:
            raise RuntimeError("Application not started")
        return self._dispatcher
