"""JWT issuing and verification."""

from datetime import datetime, timedelta, timezone

import jwt

from ..models import Employee

ALGORITHM = "HS256"


class TokenError(Exception):
    """Raised when a token cannot be verified."""

    def __init__(self, message: str, expired: bool = False):
        super().__init__(message)
        self.expired = expired


class TokenService:
    """Issues and verifies signed employee tokens."""

    def __init__(self, secret: str, expires_in: timedelta = timedelta(hours=8)):
        self._secret = secret
        self._expires_in = expires_in

    def issue(self, employee: Employee) -> str:
        """Create a token carrying the employee's email and id."""
        now = datetime.now(timezone.utc)
        payload = {
            "email": employee.email,
            "id": employee.id,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> dict:
        """Decode a token and return its claims."""
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat", "email", "id"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenError("Token has expired", expired=True) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenError(f"Invalid token: {exc}") from exc
