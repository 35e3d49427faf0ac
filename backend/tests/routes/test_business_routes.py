"""Route tests for cars, mileage, driving tests, packages, resources, support and dashboard."""

from datetime import date


def test_car_and_service_status(client, auth_headers):
    car = client.post(
        "/api/v1/cars",
        json={
            "make": "Ford",
            "model": "Fiesta",
            "year": 2021,
            "acquisition_date": "2024-01-01",
            "initial_mileage": 10000,
            "service_interval_miles": 6000,
        },
        headers=auth_headers,
    )
    assert car.status_code == 201
    car_id = car.json()["id"]

    for entry_date, start, end in (("2025-01-06", 12000, 12300), ("2025-01-08", 12300, 12500)):
        response = client.post(
            "/api/v1/mileage",
            json={
                "car_id": car_id,
                "entry_date": entry_date,
                "start_mileage": start,
                "end_mileage": end,
            },
            headers=auth_headers,
        )
        assert response.status_code == 201

    status = client.get(f"/api/v1/cars/{car_id}/service-status", headers=auth_headers).json()
    assert status["current_mileage"] == 12500
    assert status["miles_until_service"] == 3500

    weekly = client.get("/api/v1/mileage/weekly", headers=auth_headers).json()
    assert len(weekly) == 1
    assert weekly[0]["week_start"] == "2025-01-06"
    assert weekly[0]["total_miles"] == 500


def test_mileage_end_before_start_rejected(client, auth_headers):
    response = client.post(
        "/api/v1/mileage",
        json={"entry_date": "2025-01-06", "start_mileage": 500, "end_mileage": 400},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_driving_test_statistics(client, auth_headers, test_student):
    empty = client.get(
        "/api/v1/driving-tests/statistics", params={"timeframe": "alltime"}, headers=auth_headers
    )
    assert empty.status_code == 200
    assert empty.json() is None

    for passed, faults in ((False, 9), (True, 3)):
        response = client.post(
            "/api/v1/driving-tests",
            json={
                "student_id": test_student.id,
                "test_date": date.today().isoformat(),
                "passed": passed,
                "driving_faults": faults,
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["student_name"] == "Alex Learner"

    stats = client.get("/api/v1/driving-tests/statistics", headers=auth_headers).json()
    assert stats["total"] == 2
    assert stats["pass_rate"] == 50.0
    assert stats["avg_driving_faults"] == 6.0
    assert stats["student_stats"][0]["total_tests"] == 2


def test_prepaid_summary(client, auth_headers, test_student):
    created = client.post(
        "/api/v1/prepaid-hours",
        json={
            "student_id": test_student.id,
            "package_hours": 10,
            "amount_paid": 350,
            "purchase_date": "2025-01-01",
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    package = created.json()
    assert package["remaining_hours"] == 10
    assert package["amount_paid"] == 350.0

    summary = client.get("/api/v1/prepaid-hours/summary", headers=auth_headers).json()
    assert [s["student_id"] for s in summary] == [test_student.id]
    assert summary[0]["is_low"] is False

    expired = client.get(
        "/api/v1/prepaid-hours/summary", params={"status": "expired"}, headers=auth_headers
    ).json()
    assert expired == []


def test_prepaid_negative_amount_rejected(client, auth_headers, test_student):
    response = client.post(
        "/api/v1/prepaid-hours",
        json={
            "student_id": test_student.id,
            "package_hours": 5,
            "amount_paid": -1,
            "purchase_date": "2025-01-01",
        },
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_resources_alphabetical(client, auth_headers):
    for name in ("Theory test", "Highway Code"):
        response = client.post(
            "/api/v1/resources",
            json={"name": name, "resource_url": "https://example.com/" + name.replace(" ", "-")},
            headers=auth_headers,
        )
        assert response.status_code == 201

    names = [r["name"] for r in client.get("/api/v1/resources", headers=auth_headers).json()]
    assert names == ["Highway Code", "Theory test"]


def test_resource_url_must_be_valid(client, auth_headers):
    response = client.post(
        "/api/v1/resources", json={"name": "Bad", "resource_url": "not a url"}, headers=auth_headers
    )
    assert response.status_code == 422


def test_support_flow(client, auth_headers, admin_auth_headers, other_auth_headers):
    ticket = client.post(
        "/api/v1/support/messages",
        json={"subject": "Sync", "message": "Bookings missing"},
        headers=auth_headers,
    ).json()
    assert ticket["status"] == "open"

    assert client.get("/api/v1/support/admin/messages", headers=auth_headers).status_code == 403
    assert (
        client.get(f"/api/v1/support/messages/{ticket['id']}", headers=other_auth_headers).status_code
        == 404
    )

    reply = client.post(
        f"/api/v1/support/messages/{ticket['id']}/replies",
        json={"body": "Fixed now"},
        headers=admin_auth_headers,
    )
    assert reply.status_code == 201
    assert reply.json()["is_admin"] is True

    closed = client.patch(
        f"/api/v1/support/messages/{ticket['id']}/status",
        json={"status": "closed"},
        headers=admin_auth_headers,
    )
    assert closed.json()["status"] == "closed"

    mine = client.get(f"/api/v1/support/messages/{ticket['id']}", headers=auth_headers).json()
    assert [r["body"] for r in mine["replies"]] == ["Fixed now"]


def test_dashboard_shape(client, auth_headers, test_student):
    response = client.get(
        "/api/v1/dashboard",
        params={"revenue_timeframe": "monthly", "week_of": "2025-01-15"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["student_count"] == 1
    assert body["revenue"]["timeframe"] == "monthly"
    assert body["weekly_hours"]["week_start"] == "2025-01-13"
    assert body["test_statistics"] is None
