"""Storage module."""

from .storage import IStorage, Storage, participants_key

__all__ = ["IStorage", "Storage", "participants_key"]
