"""Domain exceptions.

Raised by services and routes; the API layer renders them as
``{"error": message}`` with the exception's status code.
"""


class DirectoryError(Exception):
    """Base class for errors with a client-facing message."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DirectoryError):
    """Malformed request payload."""

    status_code = 400
    default_message = "Validation error"


class DuplicateEmailError(DirectoryError):
    status_code = 400
    default_message = "Email already registered"


class InvalidCredentialsError(DirectoryError):
    status_code = 401
    default_message = "Invalid password"


class EmployeeNotFoundError(DirectoryError):
    status_code = 404
    default_message = "User not found"


class InvalidIdentifierError(DirectoryError):
    """Employee id is not a valid identifier.

    Reported as a server error to keep the existing client contract.
    """

    status_code = 500
    default_message = "Invalid ID format"


class StoreError(DirectoryError):
    """Storage failure, reported with a generic message."""

    status_code = 500
    default_message = "Could not complete the request"
