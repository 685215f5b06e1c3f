"""Dashboard endpoints: role-filtered navigation plus gated sections."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import require_admin, require_staff, require_student, require_teacher
from app.config import settings
from app.data.dashboards import QUICK_ACTIONS, STAT_CARDS
from app.data.navigation import DASHBOARD_NAVIGATION
from app.domain.navigation import filter_navigation
from app.schemas.common import ApiResponse
from app.schemas.navigation import DashboardResponse, NavigationNode
from app.services.session_service import AuthSession

router = APIRouter()


def build_dashboard(dashboard: str, session: AuthSession) -> DashboardResponse:
    """Assemble what ``session`` may see on ``dashboard``."""
    navigation = filter_navigation(
        DASHBOARD_NAVIGATION[dashboard],
        session.role,
        hide_empty_parents=settings.navigation_hide_empty_parents,
    )
    quick_actions = [action for gate, action in QUICK_ACTIONS[dashboard] if gate.allows(session.role)]
    stats = [title for gate, title in STAT_CARDS[dashboard] if gate.allows(session.role)]
    return DashboardResponse(
        dashboard=dashboard,
        role=session.role.value,
        navigation=[NavigationNode.from_item(item) for item in navigation],
        sections={"quickActions": quick_actions, "stats": stats},
    )


@router.get("/admin", response_model=ApiResponse[DashboardResponse])
async def admin_dashboard(
    session: Annotated[AuthSession, Depends(require_admin)],
) -> ApiResponse[DashboardResponse]:
    return ApiResponse[DashboardResponse](data=build_dashboard("admin", session))


@router.get("/staff", response_model=ApiResponse[DashboardResponse])
async def staff_dashboard(
    session: Annotated[AuthSession, Depends(require_staff)],
) -> ApiResponse[DashboardResponse]:
    return ApiResponse[DashboardResponse](data=build_dashboard("staff", session))


@router.get("/student", response_model=ApiResponse[DashboardResponse])
async def student_dashboard(
    session: Annotated[AuthSession, Depends(require_student)],
) -> ApiResponse[DashboardResponse]:
    return ApiResponse[DashboardResponse](data=build_dashboard("student", session))


@router.get("/teacher", response_model=ApiResponse[DashboardResponse])
async def teacher_dashboard(
    session: Annotated[AuthSession, Depends(require_teacher)],
) -> ApiResponse[DashboardResponse]:
    return ApiResponse[DashboardResponse](data=build_dashboard("teacher", session))
