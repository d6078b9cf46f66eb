def test_device_attendance(client):
    resp = client.get("/pk01/attendance")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["success"] is True
    assert body["data"]["recordCount"] == 6
    assert body["summary"]["uniqueEmployees"] == 4


def test_invalid_date_is_400(client):
    resp = client.get("/pk01/attendance/date/15-01-2024")
    body = resp.get_json()

    assert resp.status_code == 400
    assert body["success"] is False
    assert body["error"] == "Invalid date format. Use YYYY-MM-DD"
    assert body["requestId"].startswith("req_")


def test_request_id_header_is_echoed(client):
    resp = client.get("/pk01/attendance/date/bad", headers={"X-Request-ID": "abc-123"})
    assert resp.get_json()["requestId"] == "abc-123"


def test_unknown_device_is_404(client):
    resp = client.get("/zz01/attendance")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Device not found: zz01"


def test_range_route(client):
    resp = client.get("/pk01/attendance/filter/2024-01-16/2024-01-16")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["recordCount"] == 2


def test_all_devices_with_country_query(client):
    resp = client.get("/attendance/all-devices?country=pk")
    body = resp.get_json()

    assert resp.status_code == 200
    assert sorted(body["data"]) == ["pk01", "pk02"]
    assert body["summary"]["successfulDevices"] == 2


def test_country_attendance(client):
    body = client.get("/country/us/attendance").get_json()
    assert body["country"] == "US"
    assert body["summary"]["totalDevices"] == 1
