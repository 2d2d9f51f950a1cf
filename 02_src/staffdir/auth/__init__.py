"""Credentials module."""

from .passwords import hash_password, verify_password
from .tokens import TokenError, TokenService

__all__ = ["hash_password", "verify_password", "TokenError", "TokenService"]
