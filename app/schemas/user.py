"""User, staff and student schemas for the admin screens."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, field_validator

from app.core.permissions import Permission, Role
from app.schemas.common import CamelModel

AssignableRole = Literal["STUDENT", "STAFF", "ADMIN", "SUPER_ADMIN", "HOSTEL_ADMIN", "ACCOUNTANT"]


class User(CamelModel):
    id: str = Field(alias="_id")
    full_name: str | None = None
    email: str
    phone: str | None = None
    role: str
    is_active: bool = True
    is_email_verified: bool = False
    gender: str | None = None
    profile_picture: str | None = None
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserCreate(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    role: AssignableRole
    password: str = Field(..., min_length=8)


class UserRoleUpdate(CamelModel):
    role: AssignableRole


class UserStatusUpdate(CamelModel):
    is_active: bool


class UserRoleChange(CamelModel):
    user_id: str = Field(..., min_length=1)
    role: AssignableRole


class BulkRoleUpdate(CamelModel):
    updates: list[UserRoleChange] = Field(..., min_length=1)


class Staff(CamelModel):
    id: str = Field(alias="_id")
    employee_id: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    department: str | None = None
    designation: str | None = None
    hostel_id: str | None = None
    permissions: list[str] = []
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StaffCreate(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    employee_id: str = Field(..., min_length=1)
    department: str | None = None
    designation: str | None = None
    hostel_id: str | None = None
    role: AssignableRole = Role.STAFF.value


class StaffUpdate(CamelModel):
    full_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=20)
    department: str | None = None
    designation: str | None = None
    hostel_id: str | None = None


class StaffPermissionsUpdate(CamelModel):
    permissions: list[str]

    @field_validator("permissions")
    @classmethod
    def known_permissions(cls, v: list[str]) -> list[str]:
        known = {perm.value for perm in Permission}
        unknown = [perm for perm in v if perm not in known]
        if unknown:
            raise ValueError(f"Unknown permissions: {', '.join(unknown)}")
        return v


class Student(CamelModel):
    id: str = Field(alias="_id")
    enrollment_no: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    course: str | None = None
    year: int | None = None
    gender: str | None = None
    hostel_id: str | None = None
    room_id: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StudentCreate(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    enrollment_no: str = Field(..., min_length=1)
    course: str | None = None
    year: int | None = Field(None, ge=1, le=10)
    gender: Literal["male", "female", "other"] | None = None


class StudentUpdate(CamelModel):
    full_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=20)
    course: str | None = None
    year: int | None = Field(None, ge=1, le=10)
    hostel_id: str | None = None
    room_id: str | None = None


class StatusUpdate(CamelModel):
    is_active: bool
