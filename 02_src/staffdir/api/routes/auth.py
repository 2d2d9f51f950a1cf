"""Login route."""

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import Application
from ...errors import DirectoryError, StoreError
from ...logging_config import get_logger

logger = get_logger(__name__)


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginUser(BaseModel):
    email: str
    name: str
    department: str


class LoginResponse(BaseModel):
    token: str
    user: LoginUser


def create_auth_router(app: Application) -> APIRouter:
    """Create auth router."""
    router = APIRouter(tags=["auth"])

    @router.post("/login", response_model=LoginResponse)
    async def login(request: LoginRequest) -> dict:
        """Exchange email and password for a token."""
        try:
            token, employee = await app.directory.login(request.email, request.password)
        except DirectoryError:
            raise
        except Exception:
            logger.exception("Login failed for %s", request.email)
            raise StoreError("Login failed")

        return {
            "token": token,
            "user": {
                "email": employee.email,
                "name": employee.name,
                "department": employee.department,
            },
        }

    return router
