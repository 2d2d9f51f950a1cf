"""Password hashing using Argon2."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

_ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    return _ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Never raises on mismatch."""
    try:
        return _ph.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False
