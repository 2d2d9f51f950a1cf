"""Conversation-related data models."""

from dataclasses import dataclass, field
from typing import Any

from ..errors import ValidationError


@dataclass(frozen=True)
class Message:
    """A single message in a conversation.

    The body is kept exactly as the client sent it. Only `sender` and `text`
    are required; every other key (`recipient`, `timestamp`, client extras)
    passes through untouched and in its original JSON type.
    """

    body: dict[str, Any]

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        """Build a Message from a client payload, raising ValidationError if malformed."""
        if not isinstance(data, dict):
            raise ValidationError("Message must be an object")
        sender = data.get("sender")
        if not isinstance(sender, str) or not sender:
            raise ValidationError("Message sender is required")
        if not isinstance(data.get("text"), str):
            raise ValidationError("Message text is required")

        return cls(body=dict(data))

    @property
    def sender(self) -> str:
        return self.body["sender"]

    @property
    def text(self) -> str:
        return self.body["text"]

    @property
    def recipient(self) -> Any:
        return self.body.get("recipient")

    @property
    def timestamp(self) -> Any:
        return self.body.get("timestamp")

    def to_dict(self) -> dict[str, Any]:
        return dict(self.body)


@dataclass
class Conversation:
    """Ordered message log shared by an exact participant list."""

    id: int
    participants: list[str]
    messages: list[Message] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "participants": list(self.participants),
            "messages": [m.to_dict() for m in self.messages],
        }
