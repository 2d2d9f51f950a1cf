"""Socket.IO server wiring.

Client events:
- `register(identity)`
- `typing({from, to})` -> `typing({from})` to `to` only
- `sendMessage({participants, message})` -> `newMessage(data)` to everyone

A client may pass a login token as `auth: {token}` or `?token=` to be
registered on connect. A bad token never refuses the connection.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs

import socketio

from .dispatcher import Dispatcher


def create_socket_server(cors_origins: tuple[str, ...] = ("*",)) -> socketio.AsyncServer:
    allowed: str | list[str] = "*" if "*" in cors_origins else list(cors_origins)
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=allowed,
        logger=False,
        engineio_logger=False,
    )


def extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract a token from Socket.IO auth data or the query string.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """
    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    return None


def register_handlers(sio: socketio.AsyncServer, dispatcher: Dispatcher) -> None:
    """Bind client events on sio to dispatcher."""

    @sio.event
    async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
        await dispatcher.on_connect(sid, extract_token(environ, auth))

    @sio.event
    async def register(sid: str, identity: Any):
        await dispatcher.on_register(sid, identity)

    @sio.on("typing")
    async def typing(sid: str, data: Any):
        await dispatcher.on_typing(sid, data)

    @sio.on("sendMessage")
    async def send_message(sid: str, data: Any):
        await dispatcher.on_send_message(sid, data)

    @sio.event
    async def disconnect(sid: str, reason: Any = None):
        await dispatcher.on_disconnect(sid)
