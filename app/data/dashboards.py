"""Gated sections shown on each dashboard."""

from app.core.permissions import Permission as P
from app.domain.access_gate import ADMIN_ONLY, PermissionGate

QUICK_ACTIONS: dict[str, tuple[tuple[PermissionGate, dict[str, str]], ...]] = {
    "admin": (
        (PermissionGate(P.HOSTELS_CREATE), {"title": "Add Hostel", "href": "/admin/hostels"}),
        (PermissionGate(P.STUDENTS_CREATE), {"title": "Register Student", "href": "/admin/students"}),
        (PermissionGate(P.STAFF_CREATE), {"title": "Add Staff", "href": "/admin/staff"}),
        (ADMIN_ONLY, {"title": "Manage Users", "href": "/admin/users"}),
        (PermissionGate(P.BOOKINGS_APPROVE), {"title": "Review Bookings", "href": "/admin/bookings"}),
        (PermissionGate(P.REPORTS_GENERATE), {"title": "Generate Report", "href": "/admin/reports"}),
    ),
    "staff": (
        (PermissionGate(P.BOOKINGS_READ), {"title": "Manage Bookings", "href": "/staff/bookings"}),
        (PermissionGate(P.BOOKINGS_APPROVE), {"title": "Room Allocation", "href": "/staff/allocations"}),
        (PermissionGate(P.STUDENTS_READ), {"title": "Student Management", "href": "/staff/students"}),
        (PermissionGate(P.REPORTS_READ), {"title": "Reports", "href": "/staff/reports"}),
    ),
    "student": (
        (PermissionGate(P.BOOKINGS_CREATE), {"title": "Book a Room", "href": "/student/bookings"}),
        (PermissionGate(P.PAYMENTS_READ), {"title": "Payments", "href": "/student/payments"}),
        (PermissionGate(P.DOCUMENTS_UPLOAD), {"title": "Upload Documents", "href": "/student/documents"}),
    ),
    "teacher": (
        (PermissionGate(P.STUDENTS_READ), {"title": "My Students", "href": "/teacher/students"}),
        (PermissionGate(P.REPORTS_READ), {"title": "Reports", "href": "/teacher/reports"}),
    ),
}

STAT_CARDS: dict[str, tuple[tuple[PermissionGate, str], ...]] = {
    "admin": (
        (PermissionGate(P.STUDENTS_READ), "Total Students"),
        (PermissionGate(P.HOSTELS_READ), "Total Hostels"),
        (PermissionGate(P.BOOKINGS_READ), "Active Bookings"),
        (PermissionGate(P.PAYMENTS_READ), "Revenue"),
    ),
    "staff": (
        (PermissionGate(P.HOSTELS_READ), "Total Hostels"),
        (PermissionGate(P.STUDENTS_READ), "Total Students"),
        (PermissionGate(P.HOSTELS_READ), "Available Beds"),
        (PermissionGate(P.BOOKINGS_APPROVE), "Pending Requests"),
    ),
    "student": (
        (PermissionGate(P.HOSTELS_READ), "My Hostel"),
        (PermissionGate(P.PAYMENTS_READ), "Next Payment"),
    ),
    "teacher": (
        (PermissionGate(P.STUDENTS_READ), "Total Students"),
    ),
}
