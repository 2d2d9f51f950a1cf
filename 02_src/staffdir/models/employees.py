"""Employee data models."""

from dataclasses import dataclass


@dataclass
class Employee:
    """A registered employee."""

    id: str
    name: str
    email: str  # unique
    department: str
    role: str
    password_hash: str

    def to_public_dict(self) -> dict:
        """Representation safe to send to clients (no password hash)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "role": self.role,
        }
