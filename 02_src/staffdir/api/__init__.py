"""HTTP and Socket.IO entry points."""

from .app import create_asgi_app, create_fastapi_app

__all__ = ["create_asgi_app", "create_fastapi_app"]
