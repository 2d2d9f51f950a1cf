"""Conversation API routes."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from fastapi import APIRouter

from ...app import Application
from ...errors import DirectoryError, StoreError
from ...logging_config import get_logger
from ...models import Message

logger = get_logger(__name__)


class MessageModel(BaseModel):
    """A message as sent by a client; unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    sender: str
    text: str
    recipient: str | None = None
    timestamp: str | int | float | None = None


class ConversationResponse(BaseModel):
    id: int
    participants: list[str]
    # Stored bodies are returned verbatim
    messages: list[dict[str, Any]]


class ListMessagesRequest(BaseModel):
    participants: list[str]


class ListMessagesResponse(BaseModel):
    messages: list[dict[str, Any]]


class SaveMessageRequest(BaseModel):
    participants: list[str]
    message: MessageModel


class SaveMessageResponse(BaseModel):
    success: bool


def create_conversations_router(app: Application) -> APIRouter:
    """Create conversations router."""
    router = APIRouter(tags=["conversations"])

    @router.get("/convos", response_model=list[ConversationResponse])
    async def list_conversations() -> list[dict]:
        """All conversations with their messages."""
        try:
            conversations = await app.conversations.list_conversations()
        except DirectoryError:
            raise
        except Exception:
            logger.exception("Failed to list conversations")
            raise StoreError("Could not fetch convos")
        return [c.to_dict() for c in conversations]

    @router.post("/messages", response_model=ListMessagesResponse)
    async def get_messages(request: ListMessagesRequest) -> dict:
        """Messages for a participant list, empty if none exist."""
        try:
            messages = await app.conversations.list_messages(request.participants)
        except DirectoryError:
            raise
        except Exception:
            logger.exception("Failed to read messages")
            raise StoreError("Error retrieving messages")
        return {"messages": [m.to_dict() for m in messages]}

    @router.put("/messages", response_model=SaveMessageResponse)
    async def save_message(request: SaveMessageRequest) -> dict:
        """Append a message, creating the conversation if needed."""
        try:
            body = request.message.model_dump(exclude_unset=True)
            body.update(request.message.model_extra or {})
            message = Message.from_dict(body)
            await app.conversations.append_or_create(request.participants, message)
        except DirectoryError:
            raise
        except Exception:
            logger.exception("Failed to save message")
            raise StoreError("Error saving message")
        return {"success": True}

    return router
