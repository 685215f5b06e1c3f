import pytest

from app.core.permissions import (
    ROLE_PERMISSIONS,
    Permission,
    Role,
    capabilities,
    has_all_permissions,
    has_any_permission,
    has_permission,
    home_path,
    is_admin,
    is_staff,
    is_student,
    parse_role,
    permissions_for,
)

REAL_ROLES = [role for role in Role if role is not Role.NONE]


@pytest.mark.parametrize("role", list(Role))
@pytest.mark.parametrize("permission", list(Permission))
def test_has_permission_matches_table(role, permission):
    assert has_permission(role, permission) == (permission in ROLE_PERMISSIONS[role])


@pytest.mark.parametrize("role", REAL_ROLES)
def test_every_real_role_has_permissions(role):
    assert ROLE_PERMISSIONS[role]


def test_no_access_role_has_nothing():
    assert ROLE_PERMISSIONS[Role.NONE] == frozenset()
    assert not any(has_permission(Role.NONE, perm) for perm in Permission)


@pytest.mark.parametrize("role", [Role.SUPER_ADMIN, Role.ADMIN])
def test_admins_hold_everything(role):
    assert permissions_for(role) == frozenset(Permission)


def test_table_is_read_only():
    with pytest.raises(TypeError):
        ROLE_PERMISSIONS[Role.STUDENT] = frozenset(Permission)


def test_staff_reads_but_does_not_approve_bookings():
    assert has_permission(Role.STAFF, "bookings:read") is True
    assert has_permission(Role.STAFF, "bookings:approve") is False


def test_student_can_pay_but_not_refund():
    assert has_permission(Role.STUDENT, Permission.PAYMENTS_CREATE)
    assert not has_permission(Role.STUDENT, Permission.PAYMENTS_REFUND)
    assert not has_permission(Role.STUDENT, Permission.BOOKINGS_CANCEL)


def test_accountant_handles_refunds_and_exports():
    assert has_all_permissions(
        Role.ACCOUNTANT,
        [Permission.PAYMENTS_REFUND, Permission.REPORTS_EXPORT, Permission.REPORTS_GENERATE],
    )
    assert not has_permission(Role.ACCOUNTANT, Permission.BOOKINGS_UPDATE)


def test_hostel_admin_cannot_delete_people():
    assert not has_any_permission(
        Role.HOSTEL_ADMIN,
        [Permission.STUDENTS_DELETE, Permission.STAFF_DELETE, Permission.ADMIN_DELETE],
    )
    assert has_permission(Role.HOSTEL_ADMIN, Permission.HOSTELS_DELETE)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("STUDENT", Role.STUDENT),
        ("student", Role.STUDENT),
        ("  hostel_admin ", Role.HOSTEL_ADMIN),
        ("TEACHER", Role.NONE),
        ("", Role.NONE),
        (None, Role.NONE),
        (42, Role.NONE),
    ],
)
def test_parse_role(raw, expected):
    assert parse_role(raw) is expected


@pytest.mark.parametrize("permission", list(Permission))
def test_unknown_role_string_is_denied(permission):
    assert has_permission("JANITOR", permission) is False


def test_unknown_permission_string_is_denied():
    assert has_permission(Role.SUPER_ADMIN, "bookings:teleport") is False
    assert has_any_permission(Role.SUPER_ADMIN, ["bookings:teleport"]) is False


def test_any_and_all_with_empty_lists():
    assert has_any_permission(Role.SUPER_ADMIN, []) is False
    assert has_all_permissions(Role.NONE, []) is True


def test_any_versus_all():
    perms = [Permission.BOOKINGS_READ, Permission.BOOKINGS_APPROVE]
    assert has_any_permission(Role.STAFF, perms) is True
    assert has_all_permissions(Role.STAFF, perms) is False


def test_role_groups():
    assert {r for r in Role if is_admin(r)} == {Role.ADMIN, Role.SUPER_ADMIN, Role.HOSTEL_ADMIN}
    assert {r for r in Role if is_staff(r)} == {Role.STAFF, Role.ACCOUNTANT}
    assert is_student("student")
    assert not is_admin(None)


def test_capabilities_for_staff():
    caps = capabilities(Role.STAFF)
    assert caps["canManageStudents"] is True
    assert caps["canManageBookings"] is True
    assert caps["canManageStaff"] is False
    assert caps["canManageSettings"] is False
    assert caps["canViewAuditLogs"] is False


def test_capabilities_for_no_access_role_are_all_false():
    assert not any(capabilities(Role.NONE).values())
    assert len(capabilities(Role.NONE)) == 11


@pytest.mark.parametrize(
    "role, path",
    [
        (Role.SUPER_ADMIN, "/admin"),
        (Role.HOSTEL_ADMIN, "/admin"),
        (Role.ADMIN, "/admin"),
        (Role.STAFF, "/staff"),
        (Role.ACCOUNTANT, "/staff"),
        (Role.STUDENT, "/student"),
        (Role.NONE, "/auth/login"),
    ],
)
def test_home_path(role, path):
    assert home_path(role) == path
