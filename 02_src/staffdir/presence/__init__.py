"""Presence module."""

from .registry import IPresenceRegistry, PresenceRegistry

__all__ = ["IPresenceRegistry", "PresenceRegistry"]
