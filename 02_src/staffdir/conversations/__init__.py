"""Conversations module."""

from .service import (
    ConversationService,
    IConversationService,
    participants_error,
    validate_participants,
)

__all__ = [
    "ConversationService",
    "IConversationService",
    "participants_error",
    "validate_participants",
]
