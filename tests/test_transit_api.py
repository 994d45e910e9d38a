from fastapi.testclient import TestClient

from ltabus.core.errors import ConfigError, DecodeError, TransportError


def test_list_stops_returns_network(client: TestClient, fake_service):
    response = client.get("/api/stops")
    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 1
    stop = payload["stops"]["01012"]
    assert stop["stop"]["road_name"] == "Victoria St"
    assert stop["services"]["2"]["stop_sequence"] == 3
    assert stop["services"]["2"]["weekday_first_last"] == {"first_bus": "0512", "last_bus": "2312"}


def test_stop_rows(client: TestClient):
    response = client.get("/api/stops/rows")
    assert response.status_code == 200
    payload = response.json()
    assert [row["code"] for row in payload["stops"]] == ["01012"]
    assert payload["routes"][0]["service_no"] == "2"
    assert [row["day_type"] for row in payload["schedules"]] == ["WD", "SAT", "SUN"]


def test_stop_arrivals(client: TestClient):
    response = client.get("/api/stops/01012/arrivals")
    assert response.status_code == 200
    payload = response.json()
    assert payload["stop_code"] == "01012"
    assert payload["services"]["2"] == {
        "next": {
            "minutes_until_arrival": 4,
            "vehicle_type": "SD",
            "wheelchair_accessible": True,
            "load_level": "SEA",
        }
    }
    assert payload["skipped"] == []


def test_missing_credentials_is_503(client: TestClient, fake_service):
    fake_service.error = ConfigError("LTA_API_KEY is not configured")
    response = client.get("/api/stops/01012/arrivals")
    assert response.status_code == 503
    assert response.json() == {"detail": "LTA_API_KEY is not configured", "code": 503}


def test_upstream_failures_are_502(client: TestClient, fake_service):
    fake_service.error = TransportError("DataMall returned HTTP 500", "https://x", 500)
    assert client.get("/api/stops").status_code == 502

    fake_service.error = DecodeError("Unexpected DataMall payload", "https://x", "<html>")
    response = client.get("/api/stops")
    assert response.status_code == 502
    assert response.json()["code"] == 502


def test_unknown_route_uses_custom_handler(client: TestClient):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json()["code"] == 404


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/api/stops", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
