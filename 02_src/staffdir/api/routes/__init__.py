"""API routers."""

from .auth import create_auth_router
from .conversations import create_conversations_router
from .employees import create_employees_router

__all__ = [
    "create_auth_router",
    "create_conversations_router",
    "create_employees_router",
]
