"""Staff directory backend."""

from .app import Application, IApplication
from .config import Settings
from .conversations import ConversationService, IConversationService
from .directory import EmployeeDirectory, IEmployeeDirectory
from .errors import (
    DirectoryError,
    DuplicateEmailError,
    EmployeeNotFoundError,
    InvalidCredentialsError,
    InvalidIdentifierError,
    StoreError,
    ValidationError,
)
from .models import Conversation, Employee, Message
from .presence import IPresenceRegistry, PresenceRegistry
from .realtime import Dispatcher
from .storage import IStorage, Storage

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "Employee",
    "Conversation",
    "Message",
    # Components
    "IStorage",
    "Storage",
    "IEmployeeDirectory",
    "EmployeeDirectory",
    "IConversationService",
    "ConversationService",
    "IPresenceRegistry",
    "PresenceRegistry",
    "Dispatcher",
    # Errors
    "DirectoryError",
    "ValidationError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "EmployeeNotFoundError",
    "InvalidIdentifierError",
    "StoreError",
]
