import pytest

from app.core.permissions import Role

USER = {"_id": "u1", "email": "warden@hostel.edu", "fullName": "Meera Iyer", "role": "HOSTEL_ADMIN"}
STAFF = {"_id": "st1", "employeeId": "EMP-7", "fullName": "Asha Rao", "department": "Housekeeping"}
STUDENT = {"_id": "s1", "enrollmentNo": "ENR-2024-11", "fullName": "Ravi Kumar", "year": 2}
HOSTEL = {"_id": "h1", "name": "North Block", "availableBeds": 12}
ROOM = {"_id": "r1", "hostelId": {"_id": "h1", "name": "North Block"}, "number": "101", "pricePerMonth": 4500}


@pytest.mark.asyncio
async def test_users_list_reads_nested_page(client, backend, sign_in):
    backend.on(
        "GET",
        "/admin/users",
        {"success": True, "data": {"users": [USER], "total": 21, "page": 3, "limit": 10, "totalPages": 3}},
    )

    res = await client.get(
        "/api/v1/admin/users", params={"page": 3, "isActive": "true"}, headers=sign_in(Role.SUPER_ADMIN)
    )

    assert res.status_code == 200
    body = res.json()
    assert body["data"][0]["fullName"] == "Meera Iyer"
    assert body["pagination"] == {"page": 3, "limit": 10, "total": 21, "totalPages": 3}
    sent = backend.calls("GET", "/admin/users")[0]
    assert sent.url.params["isActive"] == "true"
    assert "search" not in sent.url.params


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [Role.HOSTEL_ADMIN, Role.STAFF, Role.STUDENT])
async def test_users_need_admin_permissions(client, sign_in, role):
    res = await client.get("/api/v1/admin/users", headers=sign_in(role))

    assert res.status_code == 403


@pytest.mark.asyncio
async def test_bulk_role_update_route_is_not_an_id(client, backend, sign_in):
    backend.on("PATCH", "/admin/users/bulk-roles", {"success": True, "data": {"modifiedCount": 2}})

    res = await client.patch(
        "/api/v1/admin/users/bulk-roles",
        json={"updates": [{"userId": "u1", "role": "STAFF"}, {"userId": "u2", "role": "ACCOUNTANT"}]},
        headers=sign_in(Role.ADMIN),
    )

    assert res.status_code == 200
    assert res.json()["data"] == {"modifiedCount": 2}


@pytest.mark.asyncio
async def test_user_role_must_be_assignable(client, sign_in):
    res = await client.patch(
        "/api/v1/admin/users/u1/role", json={"role": "NONE"}, headers=sign_in(Role.SUPER_ADMIN)
    )

    assert res.status_code == 422


@pytest.mark.asyncio
async def test_staff_lookup_by_employee_id(client, backend, sign_in):
    backend.on("GET", "/admin/staff/employee/EMP-7", {"success": True, "data": STAFF})

    res = await client.get("/api/v1/admin/staff/employee/EMP-7", headers=sign_in(Role.HOSTEL_ADMIN))

    assert res.status_code == 200
    assert res.json()["data"]["employeeId"] == "EMP-7"


@pytest.mark.asyncio
async def test_staff_directory_is_closed_to_staff(client, sign_in):
    res = await client.get("/api/v1/admin/staff", headers=sign_in(Role.STAFF))

    assert res.status_code == 403
    assert res.json()["redirectTo"] == "/staff"


@pytest.mark.asyncio
async def test_staff_permissions_are_validated(client, backend, sign_in):
    res = await client.patch(
        "/api/v1/admin/staff/st1/permissions",
        json={"permissions": ["bookings:read", "rooms:teleport"]},
        headers=sign_in(Role.SUPER_ADMIN),
    )

    assert res.status_code == 422
    assert res.json()["error"] == "ValidationError"
    assert backend.calls("PATCH", "/admin/staff/st1/permissions") == []


@pytest.mark.asyncio
async def test_staff_can_read_students(client, backend, sign_in):
    backend.on("GET", "/admin/students", {"success": True, "data": [STUDENT]})

    res = await client.get("/api/v1/admin/students", headers=sign_in(Role.STAFF))

    assert res.status_code == 200
    body = res.json()
    assert body["data"][0]["enrollmentNo"] == "ENR-2024-11"
    assert body["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_accountant_cannot_create_students(client, sign_in):
    res = await client.post(
        "/api/v1/admin/students",
        json={"fullName": "New Student", "email": "new@hostel.edu", "enrollmentNo": "ENR-1"},
        headers=sign_in(Role.ACCOUNTANT),
    )

    assert res.status_code == 403


@pytest.mark.asyncio
async def test_hostels_list_with_top_level_counters(client, backend, sign_in):
    backend.on("GET", "/hostels", {"success": True, "data": [HOSTEL], "total": 4, "page": 1, "limit": 1})

    res = await client.get("/api/v1/hostels", params={"limit": 1}, headers=sign_in(Role.STUDENT))

    assert res.status_code == 200
    body = res.json()
    assert body["data"][0]["availableBeds"] == 12
    assert body["pagination"]["total"] == 4


@pytest.mark.asyncio
async def test_hostel_search(client, backend, sign_in):
    backend.on("GET", "/hostels/search", {"success": True, "data": [HOSTEL]})

    res = await client.get("/api/v1/hostels/search", params={"q": "north"}, headers=sign_in(Role.STUDENT))

    assert res.status_code == 200
    assert res.json()["data"][0]["name"] == "North Block"
    assert backend.calls("GET", "/hostels/search")[0].url.params["q"] == "north"


@pytest.mark.asyncio
async def test_available_rooms(client, backend, sign_in):
    backend.on("GET", "/hostels/h1/rooms/available", {"success": True, "data": {"rooms": [ROOM]}})

    res = await client.get("/api/v1/hostels/h1/rooms/available", headers=sign_in(Role.STUDENT))

    assert res.status_code == 200
    room = res.json()["data"][0]
    assert room["hostelId"] == "h1"
    assert room["pricePerMonth"] == 4500


@pytest.mark.asyncio
async def test_hostels_need_a_role(client, sign_in):
    res = await client.get("/api/v1/hostels", headers=sign_in(Role.NONE))

    assert res.status_code == 403
    assert res.json()["redirectTo"] == "/auth/login"
