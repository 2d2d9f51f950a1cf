"""ConversationService implementation."""

from typing import Protocol

from ..errors import ValidationError
from ..logging_config import get_logger
from ..models import Conversation, Message
from ..storage import IStorage

logger = get_logger(__name__)


def participants_error(participants: object) -> str | None:
    """Describe what is wrong with a participant list, None if it is usable."""
    if not isinstance(participants, list) or not participants:
        return "Participants must be a non-empty list"
    if not all(isinstance(p, str) and p for p in participants):
        return "Participants must be non-empty strings"
    return None


def validate_participants(participants: object) -> list[str]:
    """Return participants as a list, raising ValidationError if malformed.

    Order is kept as given: it is part of the conversation's lookup key.
    """
    error = participants_error(participants)
    if error is not None:
        raise ValidationError(error)
    return list(participants)


class IConversationService(Protocol):
    """Conversation reads and writes shared by REST and realtime."""

    async def append_or_create(
        self, participants: list[str], message: Message
    ) -> int:
        """Append message to the participants' conversation, creating it if absent."""
        ...

    async def list_messages(self, participants: list[str]) -> list[Message]:
        """Messages for the exact participant list, empty if none or malformed."""
        ...

    async def list_conversations(self) -> list[Conversation]:
        """All conversations."""
        ...


class ConversationService:
    """Per-participant-list message logs backed by Storage."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def append_or_create(
        self, participants: list[str], message: Message
    ) -> int:
        participants = validate_participants(participants)
        conversation_id = await self._storage.append_message(participants, message)
        logger.debug(
            "Message appended to conversation %s",
            conversation_id,
            extra={"context": {"participants": participants, "sender": message.sender}},
        )
        return conversation_id

    async def list_messages(self, participants: list[str]) -> list[Message]:
        # No conversation can be stored under a malformed list
        if participants_error(participants) is not None:
            return []
        conversation = await self._storage.get_conversation(participants)
        if conversation is None:
            return []
        return conversation.messages

    async def list_conversations(self) -> list[Conversation]:
        return await self._storage.list_conversations()
