from app.models.base.enums import UserRole

API = "/api/v1"


def register(client, email="jane@example.com", password="password123"):
    return client.post(
        f"{API}/auth/register",
        json={"name": "Jane Doe", "email": email, "password": password},
    )


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_request_id_is_echoed(client):
    generated = client.get("/health")
    supplied = client.get("/health", headers={"X-Request-ID": "trace-123"})

    assert generated.headers["X-Request-ID"]
    assert supplied.headers["X-Request-ID"] == "trace-123"


def test_register_login_refresh_logout(client):
    registered = register(client)
    assert registered.status_code == 201
    body = registered.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["user"]["role"] == "employee"
    assert "password_hash" not in body["data"]["user"]
    assert "refresh_token_hash" not in body["data"]["user"]

    login = client.post(
        f"{API}/auth/login", json={"email": "jane@example.com", "password": "password123"}
    )
    assert login.status_code == 200
    tokens = login.json()["data"]

    refreshed = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["message"] == "Token refreshed successfully"
    new_tokens = refreshed.json()["data"]

    replay = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert replay.status_code == 401
    assert replay.json()["success"] is False

    headers = {"Authorization": f"Bearer {new_tokens['access_token']}"}
    logout = client.post(f"{API}/auth/logout", headers=headers)
    assert logout.status_code == 200
    assert logout.json()["success"] is True

    after_logout = client.post(
        f"{API}/auth/refresh", json={"refresh_token": new_tokens["refresh_token"]}
    )
    assert after_logout.status_code == 401


def test_duplicate_registration_is_409(client):
    register(client).raise_for_status()

    response = register(client)

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Email already registered"}


def test_bad_login_is_401(client):
    register(client).raise_for_status()

    response = client.post(
        f"{API}/auth/login", json={"email": "jane@example.com", "password": "wrong-password"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_validation_errors_use_envelope(client):
    response = client.post(
        f"{API}/auth/register", json={"name": "Jane", "email": "not-an-email", "password": "short"}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "password"} <= fields


def test_protected_route_requires_token(client):
    missing = client.get(f"{API}/users/me")
    garbage = client.get(f"{API}/users/me", headers={"Authorization": "Bearer nonsense"})

    assert missing.status_code == 401
    assert missing.json()["message"] == "Not authenticated"
    assert garbage.status_code == 401
    assert garbage.json()["message"] == "Invalid or expired token"


def test_me_returns_safe_profile(client, make_user, auth_headers):
    user = make_user(department="Engineering")

    response = client.get(f"{API}/users/me", headers=auth_headers(user))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == user.id
    assert data["department"] == "Engineering"
    assert "password_hash" not in data


def test_only_admin_creates_users(client, make_user, auth_headers):
    hr = make_user(role=UserRole.HR)
    admin = make_user(role=UserRole.ADMIN)
    payload = {
        "name": "New Hire",
        "email": "new@example.com",
        "password": "password123",
        "role": "department_head",
        "department": "Sales",
    }

    denied = client.post(f"{API}/users", json=payload, headers=auth_headers(hr))
    created = client.post(f"{API}/users", json=payload, headers=auth_headers(admin))

    assert denied.status_code == 403
    assert created.status_code == 201
    assert created.json()["data"]["role"] == "department_head"


def test_task_crud(client, make_user, auth_headers):
    owner = make_user()
    headers = auth_headers(owner)

    created = client.post(f"{API}/tasks", json={"title": "Prepare slides"}, headers=headers)
    assert created.status_code == 201
    task_id = created.json()["data"]["id"]

    updated = client.put(
        f"{API}/tasks/{task_id}", json={"description": "For Monday"}, headers=headers
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["title"] == "Prepare slides"
    assert updated.json()["data"]["description"] == "For Monday"

    empty_update = client.put(f"{API}/tasks/{task_id}", json={}, headers=headers)
    assert empty_update.status_code == 400

    other = client.get(f"{API}/tasks/{task_id}", headers=auth_headers(make_user()))
    assert other.status_code == 403

    deleted = client.delete(f"{API}/tasks/{task_id}", headers=headers)
    assert deleted.status_code == 200
    assert client.get(f"{API}/tasks/{task_id}", headers=headers).status_code == 404


def test_leave_flow(client, make_user, auth_headers):
    employee = make_user(department="Engineering")
    head = make_user(role=UserRole.DEPARTMENT_HEAD, department="Engineering")
    outsider = make_user(role=UserRole.DEPARTMENT_HEAD, department="Sales")

    applied = client.post(
        f"{API}/leave/apply",
        json={
            "leave_type": "sick",
            "from_date": "2024-01-10",
            "to_date": "2024-01-15",
            "reason": "Flu and fever",
        },
        headers=auth_headers(employee),
    )
    assert applied.status_code == 201
    leave_id = applied.json()["data"]["id"]
    assert applied.json()["data"]["status"] == "pending"

    overlap = client.post(
        f"{API}/leave/apply",
        json={
            "leave_type": "casual",
            "from_date": "2024-01-14",
            "to_date": "2024-01-20",
            "reason": "Trip with family",
        },
        headers=auth_headers(employee),
    )
    assert overlap.status_code == 409
    assert overlap.json()["message"] == "You have an overlapping leave request for this period"

    wrong_department = client.patch(
        f"{API}/leave/{leave_id}/status",
        json={"status": "approved"},
        headers=auth_headers(outsider),
    )
    assert wrong_department.status_code == 403

    approved = client.patch(
        f"{API}/leave/{leave_id}/status",
        json={"status": "approved", "approver_remarks": "Get well"},
        headers=auth_headers(head),
    )
    assert approved.status_code == 200
    assert approved.json()["message"] == "Leave approved successfully"
    assert approved.json()["data"]["approved_by"]["id"] == head.id

    again = client.patch(
        f"{API}/leave/{leave_id}/status",
        json={"status": "rejected"},
        headers=auth_headers(head),
    )
    assert again.status_code == 409

    queue = client.get(f"{API}/leave", headers=auth_headers(head))
    assert queue.json()["data"]["count"] == 1


def test_leave_date_order_validated(client, make_user, auth_headers):
    response = client.post(
        f"{API}/leave/apply",
        json={
            "leave_type": "sick",
            "from_date": "2024-01-15",
            "to_date": "2024-01-10",
            "reason": "Backwards dates",
        },
        headers=auth_headers(make_user()),
    )

    assert response.status_code == 400


def test_transfer_flow(client, make_user, auth_headers):
    employee = make_user(department="Engineering")
    hr = make_user(role=UserRole.HR)

    requested = client.post(
        f"{API}/transfers/request",
        json={"requested_department": "Sales", "reason": "Closer to customers"},
        headers=auth_headers(employee),
    )
    assert requested.status_code == 201
    transfer_id = requested.json()["data"]["id"]

    approved = client.patch(
        f"{API}/transfers/{transfer_id}/approve",
        json={"status": "approved"},
        headers=auth_headers(hr),
    )
    assert approved.status_code == 200

    me = client.get(f"{API}/users/me", headers=auth_headers(employee))
    assert me.json()["data"]["department"] == "Sales"


def test_grievance_upload_and_file_access(client, make_user, auth_headers, object_store):
    employee = make_user()
    hr = make_user(role=UserRole.HR)

    created = client.post(
        f"{API}/grievances",
        data={
            "category": "workplace_safety",
            "description": "The loading dock ramp is cracked and unsafe.",
            "priority": "high",
        },
        files={"file": ("ramp.jpg", b"\xff\xd8\xff\xe0fakejpeg", "image/jpeg")},
        headers=auth_headers(employee),
    )
    assert created.status_code == 201
    data = created.json()["data"]
    key = data["file_object_key"]
    assert key in object_store.objects
    assert data["priority"] == "high"

    url = client.get(f"{API}/files/{key}", headers=auth_headers(hr))
    assert url.status_code == 200
    assert url.json()["data"]["file_meta"]["file_name"] == "ramp.jpg"
    assert url.json()["data"]["expires_in_seconds"] > 0

    responded = client.patch(
        f"{API}/grievances/{data['id']}/respond",
        json={"status": "closed", "response": "Ramp replaced"},
        headers=auth_headers(hr),
    )
    assert responded.status_code == 200

    closed = client.patch(
        f"{API}/grievances/{data['id']}/respond",
        json={"status": "in_progress"},
        headers=auth_headers(hr),
    )
    assert closed.status_code == 409


def test_grievance_rejects_bad_attachment(client, make_user, auth_headers, object_store):
    response = client.post(
        f"{API}/grievances",
        data={"category": "other", "description": "Attaching an executable for reasons."},
        files={"file": ("run.exe", b"MZ", "application/x-msdownload")},
        headers=auth_headers(make_user()),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid file type. Only PDF, JPEG, and PNG files are allowed."
    assert object_store.objects == {}


def test_grievance_short_description_is_400(client, make_user, auth_headers):
    response = client.post(
        f"{API}/grievances",
        data={"category": "other", "description": "too short"},
        headers=auth_headers(make_user()),
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "description"


def test_storage_outage_is_502(client, make_user, auth_headers, object_store):
    object_store.fail_put = True

    response = client.post(
        f"{API}/grievances",
        data={"category": "salary", "description": "Salary for March was not credited."},
        files={"file": ("slip.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth_headers(make_user()),
    )

    assert response.status_code == 502
    assert response.json()["success"] is False


def test_attendance_mark_twice(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    first = client.post(
        f"{API}/attendance/mark", json={"status": "Present", "date": "2024-03-05T09:00:00"}, headers=headers
    )
    second = client.post(
        f"{API}/attendance/mark", json={"status": "Late", "date": "2024-03-05T11:00:00"}, headers=headers
    )

    assert first.status_code == 201
    assert first.json()["data"]["date"] == "2024-03-05"
    assert second.status_code == 409
    assert second.json()["message"] == "Attendance already marked for this date"


def test_employee_cannot_list_everyone(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    for path in ("/leave", "/transfers", "/grievances", "/attendance"):
        assert client.get(f"{API}{path}", headers=headers).status_code == 403
