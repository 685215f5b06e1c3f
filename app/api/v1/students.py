"""Student management endpoints (admin panel)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_student_service, require_permission
from app.core.permissions import Permission
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.user import StatusUpdate, Student, StudentCreate, StudentUpdate
from app.services.session_service import AuthSession
from app.services.user_service import StudentService

router = APIRouter()

Students = Annotated[StudentService, Depends(get_student_service)]
CanRead = Annotated[AuthSession, Depends(require_permission(Permission.STUDENTS_READ))]
CanUpdate = Annotated[AuthSession, Depends(require_permission(Permission.STUDENTS_UPDATE))]


@router.get("", response_model=PaginatedResponse[Student])
async def get_students(
    session: CanRead,
    service: Students,
    search: str | None = None,
    course: str | None = None,
    year: int | None = Query(default=None, ge=1, le=10),
    is_active: bool | None = Query(default=None, alias="isActive"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> PaginatedResponse[Student]:
    return await service.list_students(
        session.token,
        page=page,
        limit=limit,
        search=search,
        course=course,
        year=year,
        is_active=is_active,
    )


@router.get("/enrollment/{enrollment_no}", response_model=ApiResponse[Student])
async def get_student_by_enrollment(
    enrollment_no: str,
    session: CanRead,
    service: Students,
) -> ApiResponse[Student]:
    return ApiResponse[Student](data=await service.get_by_enrollment(session.token, enrollment_no))


@router.get("/{student_id}", response_model=ApiResponse[Student])
async def get_student(student_id: str, session: CanRead, service: Students) -> ApiResponse[Student]:
    return ApiResponse[Student](data=await service.get_student(session.token, student_id))


@router.post("", response_model=ApiResponse[Student], status_code=status.HTTP_201_CREATED)
async def create_student(
    data: StudentCreate,
    session: Annotated[AuthSession, Depends(require_permission(Permission.STUDENTS_CREATE))],
    service: Students,
) -> ApiResponse[Student]:
    student = await service.create_student(session.token, data)
    return ApiResponse[Student](message="Student created successfully", data=student)


@router.patch("/{student_id}", response_model=ApiResponse[Student])
async def update_student(
    student_id: str,
    data: StudentUpdate,
    session: CanUpdate,
    service: Students,
) -> ApiResponse[Student]:
    student = await service.update_student(session.token, student_id, data)
    return ApiResponse[Student](message="Student updated successfully", data=student)


@router.patch("/{student_id}/status", response_model=ApiResponse[Student])
async def update_student_status(
    student_id: str,
    data: StatusUpdate,
    session: CanUpdate,
    service: Students,
) -> ApiResponse[Student]:
    student = await service.update_status(session.token, student_id, data.is_active)
    return ApiResponse[Student](message="Student status updated successfully", data=student)


@router.delete("/{student_id}", response_model=ApiResponse[None])
async def delete_student(
    student_id: str,
    session: Annotated[AuthSession, Depends(require_permission(Permission.STUDENTS_DELETE))],
    service: Students,
) -> ApiResponse[None]:
    await service.delete_student(session.token, student_id)
    return ApiResponse[None](message="Student deleted successfully")
