"""EmployeeDirectory implementation."""

import re
import uuid
from typing import Protocol

from ..auth import TokenService, hash_password, verify_password
from ..errors import (
    EmployeeNotFoundError,
    InvalidCredentialsError,
    InvalidIdentifierError,
)
from ..logging_config import get_logger
from ..models import Employee
from ..storage import IStorage

logger = get_logger(__name__)

_EMPLOYEE_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def is_valid_employee_id(value: str) -> bool:
    return bool(_EMPLOYEE_ID_RE.match(value or ""))


class IEmployeeDirectory(Protocol):
    """Employee registration, lookup and login."""

    async def register(
        self, name: str, email: str, department: str, role: str, password: str
    ) -> Employee:
        """Create an employee with a hashed password."""
        ...

    async def get(self, employee_id: str) -> Employee | None:
        """Get an employee by ID, None if absent."""
        ...

    async def list_employees(self) -> list[Employee]:
        """All employees sorted by name."""
        ...

    async def login(self, email: str, password: str) -> tuple[str, Employee]:
        """Check credentials and issue a token."""
        ...


class EmployeeDirectory:
    """Employee records backed by Storage."""

    def __init__(self, storage: IStorage, tokens: TokenService):
        self._storage = storage
        self._tokens = tokens

    async def register(
        self, name: str, email: str, department: str, role: str, password: str
    ) -> Employee:
        """Create an employee. Raises DuplicateEmailError if email is taken."""
        employee = Employee(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            department=department,
            role=role,
            password_hash=hash_password(password),
        )
        await self._storage.insert_employee(employee)
        logger.info("Employee registered: %s", email)
        return employee

    async def get(self, employee_id: str) -> Employee | None:
        if not is_valid_employee_id(employee_id):
            raise InvalidIdentifierError()
        return await self._storage.get_employee(employee_id)

    async def list_employees(self) -> list[Employee]:
        return await self._storage.list_employees()

    async def login(self, email: str, password: str) -> tuple[str, Employee]:
        """Check credentials and issue a token.

        Raises:
            EmployeeNotFoundError: no employee has this email.
            InvalidCredentialsError: the password does not match.
        """
        employee = await self._storage.get_employee_by_email(email)
        if employee is None:
            raise EmployeeNotFoundError()

        if not verify_password(password, employee.password_hash):
            logger.info("Rejected login for %s", email)
            raise InvalidCredentialsError()

        return self._tokens.issue(employee), employee
