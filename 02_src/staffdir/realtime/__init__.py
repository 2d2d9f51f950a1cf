"""Realtime messaging over Socket.IO."""

from .dispatcher import Dispatcher, IEmitter
from .server import create_socket_server, extract_token, register_handlers

__all__ = [
    "Dispatcher",
    "IEmitter",
    "create_socket_server",
    "extract_token",
    "register_handlers",
]
