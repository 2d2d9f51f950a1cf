"""Dispatcher for realtime client events."""

import asyncio
from typing import Any, Protocol

from ..auth import TokenError, TokenService
from ..conversations import IConversationService
from ..logging_config import get_logger
from ..models import Message
from ..presence import IPresenceRegistry

logger = get_logger(__name__)


class IEmitter(Protocol):
    """Delivers events to connected clients (socketio.AsyncServer fits)."""

    async def emit(self, event: str, data: Any = None, to: str | None = None) -> None:
        """Emit to one connection when `to` is given, to everyone otherwise."""
        ...


class Dispatcher:
    """Handles register, typing, sendMessage and connection lifecycle events."""

    def __init__(
        self,
        emitter: IEmitter,
        presence: IPresenceRegistry,
        conversations: IConversationService,
        tokens: TokenService | None = None,
    ):
        self._emitter = emitter
        self._presence = presence
        self._conversations = conversations
        self._tokens = tokens
        self._pending: set[asyncio.Task] = set()

    async def on_connect(self, sid: str, token: str | None = None) -> str | None:
        """Accept a connection, registering it when a valid token is supplied.

        A token that does not verify is logged and the connection stays
        unregistered until the client sends `register`.
        """
        logger.info(
            "New user connected with socket id: %s", sid, extra={"context": {"sid": sid}}
        )
        if not token or self._tokens is None:
            return None

        try:
            claims = self._tokens.verify(token)
        except TokenError as exc:
            logger.warning(
                "Ignoring connect token on %s: %s",
                sid,
                exc,
                extra={"context": {"sid": sid, "expired": exc.expired}},
            )
            return None

        identity = claims["email"]
        self._presence.register(identity, sid)
        logger.info(
            "Registered %s from token on %s",
            identity,
            sid,
            extra={"context": {"sid": sid, "identity": identity}},
        )
        return identity

    async def on_register(self, sid: str, identity: Any) -> None:
        if not isinstance(identity, str) or not identity:
            logger.warning(
                "Ignoring register with invalid identity from %s",
                sid,
                extra={"context": {"sid": sid}},
            )
            return
        self._presence.register(identity, sid)
        logger.info(
            "Registered %s on %s",
            identity,
            sid,
            extra={"context": {"sid": sid, "identity": identity}},
        )

    async def on_typing(self, sid: str, data: Any) -> bool:
        """Forward a typing indicator to its single recipient.

        Returns False when the recipient is not connected; nothing is sent.
        """
        if not isinstance(data, dict):
            return False
        recipient = data.get("to")
        if not isinstance(recipient, str):
            return False

        recipient_sid = self._presence.lookup(recipient)
        if recipient_sid is None:
            return False

        await self._emitter.emit("typing", {"from": data.get("from")}, to=recipient_sid)
        return True

    async def on_send_message(self, sid: str, data: Any) -> asyncio.Task:
        """Broadcast a message to every connection, then persist it.

        Every connected client receives `newMessage`, participant or not.
        Persistence runs in the background after the broadcast; failures are
        logged and never reported to clients.
        """
        logger.info(
            "Received message via socket from %s", sid, extra={"context": {"sid": sid}}
        )

        await self._emitter.emit("newMessage", data)

        task = asyncio.create_task(self._persist(sid, data))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def on_disconnect(self, sid: str) -> None:
        identities = self._presence.unregister_handle(sid)
        logger.info(
            "User disconnected: %s",
            sid,
            extra={"context": {"sid": sid, "identities": identities}},
        )

    async def drain(self) -> None:
        """Wait for in-flight persistence tasks."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _persist(self, sid: str, data: Any) -> None:
        try:
            if not isinstance(data, dict):
                raise TypeError("sendMessage payload must be an object")
            message = Message.from_dict(data.get("message"))
            await self._conversations.append_or_create(data.get("participants"), message)
        except Exception:
            logger.exception(
                "Failed to save message to storage", extra={"context": {"sid": sid}}
            )
