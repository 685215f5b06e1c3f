"""Navigation trees for the four dashboards.

Icons are names from the lucide icon set used by the dashboard client.
"""

from app.core.permissions import Permission as P
from app.core.permissions import Role
from app.domain.navigation import NavigationItem as Nav

ADMIN_GROUP = (Role.SUPER_ADMIN, Role.HOSTEL_ADMIN, Role.ADMIN)

ADMIN_NAVIGATION: tuple[Nav, ...] = (
    Nav("Dashboard", "/admin/", "home",
        permissions=(P.HOSTELS_READ, P.STUDENTS_READ, P.BOOKINGS_READ)),
    Nav("Hostels", "/admin/hostels", "building-2", permissions=(P.HOSTELS_READ,)),
    Nav("Students", "/admin/students", "users", permissions=(P.STUDENTS_READ,)),
    Nav("Staff", "/admin/staff", "user", permissions=(P.STAFF_READ,), roles=ADMIN_GROUP),
    Nav("Users", "/admin/users", "users", permissions=(P.ADMIN_READ,), roles=ADMIN_GROUP),
    Nav(
        "Operations", "/admin/operations", "clipboard-list",
        permissions=(P.BOOKINGS_READ, P.PAYMENTS_READ),
        children=(
            Nav("Bookings", "/admin/bookings", "calendar", permissions=(P.BOOKINGS_READ,)),
            Nav("Allocations", "/admin/allocations", "user-check",
                permissions=(P.BOOKINGS_APPROVE,)),
            Nav("Payments", "/admin/payments", "credit-card",
                permissions=(P.PAYMENTS_READ,), roles=ADMIN_GROUP + (Role.ACCOUNTANT,)),
            Nav("Refunds", "/admin/refunds", "undo-2", permissions=(P.PAYMENTS_REFUND,)),
        ),
    ),
    Nav("Reports", "/admin/reports", "bar-chart-3", permissions=(P.REPORTS_READ,)),
    Nav("Documents", "/admin/documents", "file-text", permissions=(P.DOCUMENTS_READ,)),
    Nav(
        "Security", "/admin/security", "shield",
        permissions=(P.SECURITY_READ,), roles=(Role.SUPER_ADMIN, Role.ADMIN),
        children=(
            Nav("Audit Log", "/admin/security/audit", "scroll-text", permissions=(P.AUDIT_READ,)),
        ),
    ),
    Nav("Messages", "/admin/messages", "message-square", permissions=(P.MESSAGES_READ,)),
    Nav("Notifications", "/admin/notifications", "bell", permissions=(P.NOTIFICATIONS_READ,)),
    Nav("Settings", "/admin/settings", "settings", permissions=(P.SETTINGS_READ,), roles=ADMIN_GROUP),
    Nav("Help & Support", "/admin/help", "help-circle"),
)

STAFF_NAVIGATION: tuple[Nav, ...] = (
    Nav("Dashboard", "/staff/", "home",
        permissions=(P.HOSTELS_READ, P.STUDENTS_READ, P.BOOKINGS_READ)),
    Nav("Hostels", "/staff/hostels", "building-2", permissions=(P.HOSTELS_READ,)),
    Nav("Students", "/staff/students", "users", permissions=(P.STUDENTS_READ,)),
    Nav("Bookings", "/staff/bookings", "calendar", permissions=(P.BOOKINGS_READ,)),
    Nav("Allocations", "/staff/allocations", "user-check", permissions=(P.BOOKINGS_APPROVE,)),
    Nav("Check-ins", "/staff/checkins", "clipboard-list", permissions=(P.BOOKINGS_UPDATE,)),
    Nav("Payments", "/staff/payments", "credit-card", permissions=(P.PAYMENTS_READ,)),
    Nav("Reports", "/staff/reports", "bar-chart-3", permissions=(P.REPORTS_READ,)),
    Nav("Documents", "/staff/documents", "file-text", permissions=(P.DOCUMENTS_READ,)),
    Nav("Messages", "/staff/messages", "message-square", permissions=(P.MESSAGES_READ,)),
    Nav("Notifications", "/staff/notifications", "bell", permissions=(P.NOTIFICATIONS_READ,)),
    Nav("Settings", "/staff/settings", "settings", permissions=(P.SETTINGS_READ,)),
    Nav("Help & Support", "/staff/help", "help-circle"),
)

STUDENT_NAVIGATION: tuple[Nav, ...] = (
    Nav("Dashboard", "/student", "home"),
    Nav("My Hostel", "/student/hostel", "building-2"),
    Nav("My Room", "/student/room", "map-pin"),
    Nav("Profile", "/student/profile", "user"),
    Nav("Bookings", "/student/bookings", "calendar", permissions=(P.BOOKINGS_READ,)),
    Nav("Payments", "/student/payments", "credit-card", permissions=(P.PAYMENTS_READ,)),
    Nav("Documents", "/student/documents", "file-text", permissions=(P.DOCUMENTS_READ,)),
    Nav("Study Schedule", "/student/schedule", "clock"),
    Nav("Courses", "/student/courses", "book-open"),
    Nav("Messages", "/student/messages", "message-square", permissions=(P.MESSAGES_READ,)),
    Nav("Notifications", "/student/notifications", "bell"),
    Nav("Reviews", "/student/reviews", "star"),
    Nav("Settings", "/student/settings", "settings"),
    Nav("Help & Support", "/student/help", "help-circle"),
)

TEACHER_NAVIGATION: tuple[Nav, ...] = (
    Nav("Dashboard", "/teacher", "home"),
    Nav("My Students", "/teacher/students", "users", permissions=(P.STUDENTS_READ,)),
    Nav("My Courses", "/teacher/courses", "book-open"),
    Nav("Profile", "/teacher/profile", "user"),
    Nav("Schedule", "/teacher/schedule", "calendar"),
    Nav("Assignments", "/teacher/assignments", "clipboard-list"),
    Nav("Grades", "/teacher/grades", "award"),
    Nav("Attendance", "/teacher/attendance", "clock"),
    Nav("Reports", "/teacher/reports", "bar-chart-3", permissions=(P.REPORTS_READ,)),
    Nav("Documents", "/teacher/documents", "file-text", permissions=(P.DOCUMENTS_READ,)),
    Nav("Course Materials", "/teacher/materials", "graduation-cap"),
    Nav("Messages", "/teacher/messages", "message-square", permissions=(P.MESSAGES_READ,)),
    Nav("Notifications", "/teacher/notifications", "bell"),
    Nav("Settings", "/teacher/settings", "settings"),
    Nav("Help & Support", "/teacher/help", "help-circle"),
)

DASHBOARD_NAVIGATION: dict[str, tuple[Nav, ...]] = {
    "admin": ADMIN_NAVIGATION,
    "staff": STAFF_NAVIGATION,
    "student": STUDENT_NAVIGATION,
    "teacher": TEACHER_NAVIGATION,
}
