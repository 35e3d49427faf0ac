"""Route tests for booking CRUD and status changes."""

from datetime import date

from drivedesk.models.prepaid_hours import PrePaidHours


def _create(client, headers, student_id, **extra):
    payload = {"student_id": student_id, "start_time": "2025-01-14T10:00:00", **extra}
    return client.post("/api/v1/bookings", json=payload, headers=headers)


def test_create_returns_bookings_and_fetch_window(client, auth_headers, test_student):
    response = client.post(
        "/api/v1/bookings",
        params={"anchor_date": "2025-01-14", "view_mode": "week"},
        json={
            "student_id": test_student.id,
            "start_time": "2025-01-14T10:00:00",
            "lesson_length": 90,
            "repeat": "weekly",
            "repeat_count": 2,
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert len(body["bookings"]) == 2
    first = body["bookings"][0]
    assert first["title"] == "Alex Learner - Driving lesson"
    assert first["duration_hours"] == 1.5
    assert first["start_time"].startswith("2025-01-14T10:00:00")
    assert body["fetch_window"]["start"].startswith("2025-01-13T00:00:00")


def test_create_without_view_has_no_fetch_window(client, auth_headers, test_student):
    response = _create(client, auth_headers, test_student.id)
    assert response.status_code == 201
    assert response.json()["fetch_window"] is None


def test_create_rejects_unknown_lesson_length(client, auth_headers, test_student):
    response = _create(client, auth_headers, test_student.id, lesson_length=45)
    assert response.status_code == 422


def test_create_rejects_unexpected_fields(client, auth_headers, test_student):
    response = _create(client, auth_headers, test_student.id, colour="red")
    assert response.status_code == 422


def test_list_range_and_get(client, auth_headers, test_student):
    created = _create(client, auth_headers, test_student.id).json()["bookings"][0]

    listed = client.get(
        "/api/v1/bookings",
        params={"start": "2025-01-14T00:00:00", "end": "2025-01-14T23:59:59"},
        headers=auth_headers,
    )
    fetched = client.get(f"/api/v1/bookings/{created['id']}", headers=auth_headers)

    assert [b["id"] for b in listed.json()] == [created["id"]]
    assert fetched.status_code == 200
    assert fetched.json()["status"] == "scheduled"


def test_other_instructor_gets_404(client, auth_headers, other_auth_headers, test_student):
    created = _create(client, auth_headers, test_student.id).json()["bookings"][0]

    response = client.get(f"/api/v1/bookings/{created['id']}", headers=other_auth_headers)

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")


def test_invalid_id_gets_404(client, auth_headers):
    assert client.get("/api/v1/bookings/not-an-id", headers=auth_headers).status_code == 404


def test_complete_deducts_prepaid_hours(client, db, auth_headers, test_profile, test_student):
    package = PrePaidHours(
        user_id=test_profile.id,
        student_id=test_student.id,
        package_hours=10,
        remaining_hours=10,
        purchase_date=date(2025, 1, 1),
    )
    db.add(package)
    db.commit()
    created = _create(client, auth_headers, test_student.id).json()["bookings"][0]

    response = client.post(
        f"/api/v1/bookings/{created['id']}/status",
        json={"status": "completed"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["bookings"][0]["status"] == "completed"
    db.refresh(package)
    assert package.remaining_hours == 9

    detail = client.get(f"/api/v1/prepaid-hours/{package.id}", headers=auth_headers).json()
    assert len(detail["transactions"]) == 1
    assert detail["transactions"][0]["booking_id"] == created["id"]


def test_patch_moves_booking(client, auth_headers, test_student):
    created = _create(client, auth_headers, test_student.id).json()["bookings"][0]

    response = client.patch(
        f"/api/v1/bookings/{created['id']}",
        json={"start_time": "2025-01-15T16:00:00", "title": "Roundabouts"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    moved = response.json()["bookings"][0]
    assert moved["start_time"].startswith("2025-01-15T16:00:00")
    assert moved["end_time"].startswith("2025-01-15T17:00:00")
    assert moved["title"] == "Roundabouts"


def test_delete_returns_id_and_window(client, auth_headers, test_student):
    created = _create(client, auth_headers, test_student.id).json()["bookings"][0]

    response = client.delete(
        f"/api/v1/bookings/{created['id']}",
        params={"anchor_date": "2025-01-14", "view_mode": "day"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body == {
        "success": True,
        "deleted_id": created["id"],
        "fetch_window": body["fetch_window"],
    }
    assert body["fetch_window"]["start"].startswith("2025-01-14T00:00:00")
    assert client.get(f"/api/v1/bookings/{created['id']}", headers=auth_headers).status_code == 404
