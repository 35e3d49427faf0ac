"""Authentication behaviour shared by every v1 route."""

from datetime import timedelta

from drivedesk.models.profile import Profile

TEST_USER_ID = "11111111-1111-4111-8111-111111111111"


def test_missing_token_is_rejected(client):
    response = client.get("/api/v1/students")

    assert response.status_code == 401
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "NOT_AUTHENTICATED"


def test_garbage_token_is_rejected(client):
    response = client.get("/api/v1/students", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


def test_expired_token_is_rejected(client, make_token):
    token = make_token(TEST_USER_ID, expires_in=timedelta(minutes=-5))

    response = client.get("/api/v1/students", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_EXPIRED"


def test_first_request_creates_profile(client, db, auth_headers):
    response = client.get("/api/v1/profile", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == TEST_USER_ID
    assert body["timezone"] == "Europe/London"
    assert db.get(Profile, TEST_USER_ID) is not None


def test_profile_update_validates_timezone(client, auth_headers):
    bad = client.patch("/api/v1/profile", json={"timezone": "Mars/Olympus"}, headers=auth_headers)
    assert bad.status_code == 422

    ok = client.patch(
        "/api/v1/profile",
        json={"timezone": "America/New_York", "first_name": "Sam"},
        headers=auth_headers,
    )
    assert ok.status_code == 200
    assert ok.json()["timezone"] == "America/New_York"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
