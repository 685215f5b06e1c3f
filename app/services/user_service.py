"""Admin directory endpoints: users, staff and students."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from app.core.exceptions import BackendError
from app.schemas.common import PaginatedResponse, pagination_from
from app.schemas.user import (
    BulkRoleUpdate,
    Staff,
    StaffCreate,
    StaffPermissionsUpdate,
    StaffUpdate,
    Student,
    StudentCreate,
    StudentUpdate,
    User,
    UserCreate,
)
from app.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _payload(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _one(body: dict[str, Any], model: type[M], resource: str) -> M:
    data = body.get("data")
    if not isinstance(data, dict):
        raise BackendError(status_code=502, detail=f"Backend returned no {resource}")
    return model.model_validate(data)


def _page(body: dict[str, Any], model: type[M], key: str) -> PaginatedResponse[M]:
    """Normalise ``{data: [...]}`` and ``{data: {<key>: [...], total, ...}}``."""
    data = body.get("data")
    if isinstance(data, dict):
        data = data.get(key, [])
    items = [model.model_validate(item) for item in data or []]
    return PaginatedResponse[model](
        message=body.get("message", ""),
        data=items,
        pagination=pagination_from(body, len(items)),
    )


class UserService:
    """Platform user accounts (``/admin/users``)."""

    def __init__(self, client: BackendClient) -> None:
        self.client = client

    async def list_users(
        self,
        token: str,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        role: str | None = None,
        is_active: bool | None = None,
    ) -> PaginatedResponse[User]:
        body = await self.client.get(
            "/admin/users",
            token=token,
            params={
                "page": page,
                "limit": limit,
                "search": search,
                "role": role,
                "isActive": None if is_active is None else str(is_active).lower(),
            },
        )
        return _page(body, User, "users")

    async def get_user(self, token: str, user_id: str) -> User:
        return _one(await self.client.get(f"/admin/users/{user_id}", token=token), User, "user")

    async def create_user(self, token: str, data: UserCreate) -> User:
        user = _one(await self.client.post("/admin/users", token=token, json=_payload(data)), User, "user")
        logger.info(f"User created: {user.email} ({user.role})")
        return user

    async def update_role(self, token: str, user_id: str, role: str) -> User:
        body = await self.client.patch(f"/admin/users/{user_id}/role", token=token, json={"role": role})
        logger.info(f"User {user_id} role set to {role}")
        return _one(body, User, "user")

    async def update_status(self, token: str, user_id: str, is_active: bool) -> User:
        body = await self.client.patch(
            f"/admin/users/{user_id}/status", token=token, json={"isActive": is_active}
        )
        logger.info(f"User {user_id} {'activated' if is_active else 'deactivated'}")
        return _one(body, User, "user")

    async def bulk_update_roles(self, token: str, data: BulkRoleUpdate) -> dict[str, Any]:
        body = await self.client.patch("/admin/users/bulk-roles", token=token, json=_payload(data))
        logger.info(f"Bulk role update for {len(data.updates)} users")
        return body.get("data") or {}

    async def delete_user(self, token: str, user_id: str) -> None:
        await self.client.delete(f"/admin/users/{user_id}", token=token)
        logger.info(f"User {user_id} deleted")


class StaffService:
    """Staff records (``/admin/staff``)."""

    def __init__(self, client: BackendClient) -> None:
        self.client = client

    async def list_staff(
        self,
        token: str,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        department: str | None = None,
        is_active: bool | None = None,
    ) -> PaginatedResponse[Staff]:
        body = await self.client.get(
            "/admin/staff",
            token=token,
            params={
                "page": page,
                "limit": limit,
                "search": search,
                "department": department,
                "isActive": None if is_active is None else str(is_active).lower(),
            },
        )
        return _page(body, Staff, "staff")

    async def get_staff(self, token: str, staff_id: str) -> Staff:
        return _one(await self.client.get(f"/admin/staff/{staff_id}", token=token), Staff, "staff member")

    async def get_by_employee_id(self, token: str, employee_id: str) -> Staff:
        body = await self.client.get(f"/admin/staff/employee/{employee_id}", token=token)
        return _one(body, Staff, "staff member")

    async def create_staff(self, token: str, data: StaffCreate) -> Staff:
        body = await self.client.post("/admin/staff", token=token, json=_payload(data))
        staff = _one(body, Staff, "staff member")
        logger.info(f"Staff created: {staff.employee_id}")
        return staff

    async def update_staff(self, token: str, staff_id: str, data: StaffUpdate) -> Staff:
        body = await self.client.patch(f"/admin/staff/{staff_id}", token=token, json=_payload(data))
        return _one(body, Staff, "staff member")

    async def update_status(self, token: str, staff_id: str, is_active: bool) -> Staff:
        body = await self.client.patch(
            f"/admin/staff/{staff_id}/status", token=token, json={"isActive": is_active}
        )
        logger.info(f"Staff {staff_id} {'activated' if is_active else 'deactivated'}")
        return _one(body, Staff, "staff member")

    async def update_permissions(self, token: str, staff_id: str, data: StaffPermissionsUpdate) -> Staff:
        body = await self.client.patch(
            f"/admin/staff/{staff_id}/permissions", token=token, json=_payload(data)
        )
        logger.info(f"Staff {staff_id} permissions replaced ({len(data.permissions)})")
        return _one(body, Staff, "staff member")

    async def delete_staff(self, token: str, staff_id: str) -> None:
        await self.client.delete(f"/admin/staff/{staff_id}", token=token)
        logger.info(f"Staff {staff_id} deleted")


class StudentService:
    """Student records (``/admin/students``)."""

    def __init__(self, client: BackendClient) -> None:
        self.client = client

    async def list_students(
        self,
        token: str,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        course: str | None = None,
        year: int | None = None,
        is_active: bool | None = None,
    ) -> PaginatedResponse[Student]:
        body = await self.client.get(
            "/admin/students",
            token=token,
            params={
                "page": page,
                "limit": limit,
                "search": search,
                "course": course,
                "year": year,
                "isActive": None if is_active is None else str(is_active).lower(),
            },
        )
        return _page(body, Student, "students")

    async def get_student(self, token: str, student_id: str) -> Student:
        body = await self.client.get(f"/admin/students/{student_id}", token=token)
        return _one(body, Student, "student")

    async def get_by_enrollment(self, token: str, enrollment_no: str) -> Student:
        body = await self.client.get(f"/admin/students/enrollment/{enrollment_no}", token=token)
        return _one(body, Student, "student")

    async def create_student(self, token: str, data: StudentCreate) -> Student:
        body = await self.client.post("/admin/students", token=token, json=_payload(data))
        student = _one(body, Student, "student")
        logger.info(f"Student created: {student.enrollment_no}")
        return student

    async def update_student(self, token: str, student_id: str, data: StudentUpdate) -> Student:
        body = await self.client.patch(f"/admin/students/{student_id}", token=token, json=_payload(data))
        return _one(body, Student, "student")

    async def update_status(self, token: str, student_id: str, is_active: bool) -> Student:
        body = await self.client.patch(
            f"/admin/students/{student_id}/status", token=token, json={"isActive": is_active}
        )
        logger.info(f"Student {student_id} {'activated' if is_active else 'deactivated'}")
        return _one(body, Student, "student")

    async def delete_student(self, token: str, student_id: str) -> None:
        await self.client.delete(f"/admin/students/{student_id}", token=token)
        logger.info(f"Student {student_id} deleted")
