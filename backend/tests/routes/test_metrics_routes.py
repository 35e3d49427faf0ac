"""Route tests for the Prometheus scrape endpoint."""

from drivedesk.middleware.prometheus_middleware import normalize_endpoint


def test_metrics_endpoint_is_public_and_in_exposition_format(client):
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "drivedesk_service_operations_total" in response.text


def test_calendar_request_shows_up_in_scrape(client, auth_headers):
    view = client.get(
        "/api/v1/calendar",
        params={"anchor_date": "2025-01-13", "view_mode": "day"},
        headers=auth_headers,
    )
    assert view.status_code == 200

    body = client.get("/metrics/prometheus").text

    assert 'operation="get_calendar_view"' in body
    assert 'drivedesk_calendar_views_total{view_mode="day"}' in body
    assert 'endpoint="/api/v1/calendar"' in body


def test_record_ids_are_collapsed_in_endpoint_labels():
    assert (
        normalize_endpoint("/api/v1/bookings/01HZX3K9V7Q2M4N5P6R7S8T9V0/status")
        == "/api/v1/bookings/:id/status"
    )
    assert normalize_endpoint("/api/v1/calendar/fetch-window") == "/api/v1/calendar/fetch-window"
