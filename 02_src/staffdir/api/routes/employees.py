"""Employee API routes."""

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import Application
from ...errors import DirectoryError, StoreError
from ...logging_config import get_logger

logger = get_logger(__name__)


class CreateEmployeeRequest(BaseModel):
    """Request model for registering an employee."""

    name: str
    email: str
    department: str
    role: str
    password: str


class EmployeeResponse(BaseModel):
    """Public employee document."""

    id: str
    name: str
    email: str
    department: str
    role: str


class CreateEmployeeResponse(BaseModel):
    message: str
    id: str


def create_employees_router(app: Application) -> APIRouter:
    """Create employees router."""
    router = APIRouter(tags=["employees"])

    @router.get("/employees", response_model=list[EmployeeResponse])
    async def list_employees() -> list[dict]:
        """All employees sorted by name."""
        try:
            employees = await app.directory.list_employees()
        except DirectoryError:
            raise
        except Exception:
            logger.exception("Failed to list employees")
            raise StoreError("Could not fetch documents")
        return [e.to_public_dict() for e in employees]

    @router.get("/employees/{employee_id}", response_model=EmployeeResponse | None)
    async def get_employee(employee_id: str) -> dict | None:
        """Single employee, null if absent."""
        try:
            employee = await app.directory.get(employee_id)
        except DirectoryError:
            raise
        except Exception:
            logger.exception("Failed to fetch employee %s", employee_id)
            raise StoreError("Could not fetch document")
        return employee.to_public_dict() if employee else None

    @router.post(
        "/employees", status_code=201, response_model=CreateEmployeeResponse
    )
    async def create_employee(request: CreateEmployeeRequest) -> dict:
        """Register an employee."""
        try:
            employee = await app.directory.register(
                name=request.name,
                email=request.email,
                department=request.department,
                role=request.role,
                password=request.password,
            )
        except DirectoryError:
            raise
        except Exception:
            logger.exception("Failed to create employee")
            raise StoreError("Failed to create employee")
        return {"message": "Employee registered", "id": employee.id}

    return router
