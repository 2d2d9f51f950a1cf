"""Core data models for the staff directory."""

from .conversations import Conversation, Message
from .employees import Employee

__all__ = [
    # Employees
    "Employee",
    # Conversations
    "Conversation",
    "Message",
]
