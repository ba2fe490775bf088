"""HTTP-level tests for hall management."""

from .conftest import FUTURE


def _hall(name="Main Seminar Hall", capacity=120, equipment=None, **extra):
    body = {"name": name, "capacity": capacity, "equipment": equipment or ["Projector"]}
    body.update(extra)
    return body


def test_admin_creates_hall_with_default_image(client, admin_api):
    resp = client.post("/halls/", json=_hall(), headers=admin_api["headers"])
    assert resp.status_code == 201

    hall = resp.json()["hall"]
    assert hall["name"] == "Main Seminar Hall"
    assert hall["imageUrl"] == "https://placehold.co/600x400.png"
    assert hall["imageHint"] is None


def test_faculty_cannot_manage_halls(client, faculty_api):
    resp = client.post("/halls/", json=_hall(), headers=faculty_api["headers"])
    assert resp.status_code == 403


def test_duplicate_name_is_conflict(client, admin_api, hall_api):
    resp = client.post("/halls/", json=_hall(name="main seminar hall"), headers=admin_api["headers"])
    assert resp.status_code == 409


def test_hall_validation(client, admin_api):
    headers = admin_api["headers"]
    assert client.post("/halls/", json=_hall(capacity=0), headers=headers).status_code == 400
    assert client.post("/halls/", json=_hall(name="AB"), headers=headers).status_code == 400
    assert client.post("/halls/", json=_hall(equipment=[" "]), headers=headers).status_code == 400
    bad_image = _hall(imageUrl="ftp://files/hall.png")
    assert client.post("/halls/", json=bad_image, headers=headers).status_code == 400


def test_list_filters(client, admin_api):
    headers = admin_api["headers"]
    client.post("/halls/", json=_hall("Main Seminar Hall", 120, ["Projector", "Mic"]), headers=headers)
    client.post("/halls/", json=_hall("Board Room", 20, ["Whiteboard"]), headers=headers)
    client.post("/halls/", json=_hall("Lecture Theatre", 300, ["Projector"]), headers=headers)

    names = lambda resp: [h["name"] for h in resp.json()["halls"]]  # noqa: E731

    assert names(client.get("/halls/")) == ["Board Room", "Lecture Theatre", "Main Seminar Hall"]
    assert names(client.get("/halls/", params={"search": "proj"})) == [
        "Lecture Theatre",
        "Main Seminar Hall",
    ]
    assert names(client.get("/halls/", params={"min_capacity": 100, "max_capacity": 200})) == [
        "Main Seminar Hall"
    ]
    assert names(client.get("/halls/", params={"equipment": "Projector,Mic"})) == [
        "Main Seminar Hall"
    ]


def test_partial_update_and_delete(client, admin_api, hall_api):
    headers = admin_api["headers"]
    url = f"/halls/{hall_api['id']}"

    resp = client.put(url, json={"capacity": 150}, headers=headers)
    assert resp.status_code == 200
    hall = resp.json()["hall"]
    assert hall["capacity"] == 150
    assert hall["name"] == "Main Seminar Hall"

    assert client.delete(url, headers=headers).status_code == 200
    assert client.get(url).status_code == 404
    assert client.delete(url, headers=headers).status_code == 404


def test_booking_keeps_hall_name_after_rename(client, admin_api, faculty_api, hall_api):
    booking = client.post(
        "/bookings/",
        json={
            "hallId": hall_api["id"],
            "date": FUTURE.isoformat(),
            "startTime": "10:00",
            "endTime": "11:00",
            "purpose": "Faculty meeting",
        },
        headers=faculty_api["headers"],
    ).json()["booking"]

    client.put(f"/halls/{hall_api['id']}", json={"name": "Renamed Hall"}, headers=admin_api["headers"])

    resp = client.get(f"/bookings/{booking['id']}", headers=faculty_api["headers"])
    assert resp.json()["booking"]["hallName"] == "Main Seminar Hall"


def test_search_matches_name_literally(client, admin_api):
    headers = admin_api["headers"]
    client.post("/halls/", json=_hall("Board Room", 20, ["Whiteboard"]), headers=headers)
    client.post("/halls/", json=_hall("Lecture Theatre", 300, ["Projector"]), headers=headers)

    names = lambda resp: [h["name"] for h in resp.json()["halls"]]  # noqa: E731

    assert names(client.get("/halls/", params={"search": "ROOM"})) == ["Board Room"]
    assert names(client.get("/halls/", params={"search": "%"})) == []
    assert names(client.get("/halls/", params={"search": "board", "min_capacity": 50})) == []


def test_deleted_hall_releases_its_bookings(client, admin_api, faculty_api, hall_api):
    admin_headers = admin_api["headers"]
    slot = {
        "date": FUTURE.isoformat(),
        "startTime": "10:00",
        "endTime": "11:00",
        "purpose": "Faculty meeting",
    }

    doomed = client.post("/halls/", json=_hall("Board Room", 20), headers=admin_headers).json()["hall"]
    booking = client.post(
        "/bookings/", json={"hallId": doomed["id"], **slot}, headers=faculty_api["headers"]
    ).json()["booking"]

    assert client.delete(f"/halls/{doomed['id']}", headers=admin_headers).status_code == 200

    kept = client.get(f"/bookings/{booking['id']}", headers=faculty_api["headers"]).json()["booking"]
    assert kept["hallId"] is None
    assert kept["hallName"] == "Board Room"

    # SQLite may hand the freed id to the next hall
    fresh = client.post("/halls/", json=_hall("Lecture Theatre", 300), headers=admin_headers).json()["hall"]
    resp = client.post(
        "/bookings/", json={"hallId": fresh["id"], **slot}, headers=faculty_api["headers"]
    )
    assert resp.status_code == 201, resp.text
