"""
HTTP layer tests, run against a manager backed by a temporary data file.
"""

X = "34ABC123"
Y = "34DEF456"

RANGE = {"startDate": "2030-01-01T10:00:00", "endDate": "2030-01-04T10:00:00"}


def book(client, customer="Alice", plate=X, **dates):
    body = {"customerName": customer, "plate": plate, **RANGE, **dates}
    return client.post("/api/reservations", json=body)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_cars_returns_active_cars_in_camel_case(client):
    response = client.get("/api/cars")

    assert response.status_code == 200
    cars = response.json()
    assert [c["plate"] for c in cars] == [X, Y]
    assert cars[0]["makeModel"] == "Toyota Corolla 2024"
    assert cars[0]["dailyRate"] == 2500


def test_get_unknown_car_is_404(client):
    assert client.get("/api/cars/NOPE").status_code == 404
    assert client.get(f"/api/cars/{X}").json()["plate"] == X


def test_price_quote(client):
    response = client.post("/api/price", json={"plate": X, **RANGE})

    assert response.json() == {"success": True, "price": 7500}


def test_booking_returns_reservation_and_price(client):
    response = book(client)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["price"] == 7500
    assert body["reservation"]["customerName"] == "Alice"
    assert body["reservation"]["totalCharge"] == 7500
    assert body["reservation"]["startDate"] == "2030-01-01T10:00:00"


def test_overlapping_booking_is_rejected(client):
    book(client)

    response = book(client, customer="Bob",
                    startDate="2030-01-02T10:00:00", endDate="2030-01-03T10:00:00")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Car is not available for the selected dates.",
    }
    assert len(client.get("/api/reservations").json()) == 1


def test_booking_requires_customer_and_plate(client):
    response = book(client, customer="  ")

    assert response.status_code == 400
    assert response.json()["message"] == "Customer name and plate are required."


def test_booking_rejects_inverted_range(client):
    response = book(client, startDate="2030-01-04T10:00:00", endDate="2030-01-01T10:00:00")

    assert response.status_code == 400
    assert response.json()["message"] == "End date must be after start date."


def test_invalid_date_is_rejected(client):
    response = client.post("/api/availability", json={"startDate": "soon", "endDate": "later"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid date format."}


def test_availability_listing_reflects_bookings(client):
    book(client)

    during = client.post("/api/availability", json=RANGE).json()
    later = client.post("/api/availability",
                        json={"startDate": "2030-01-04T10:00:00", "endDate": "2030-01-05"}).json()

    assert [c["plate"] for c in during["cars"]] == [Y]
    assert [c["plate"] for c in later["cars"]] == [X, Y]


def test_single_car_availability(client):
    assert client.post(f"/api/availability/{X}", json=RANGE).json()["available"] is True
    book(client)
    assert client.post(f"/api/availability/{X}", json=RANGE).json()["available"] is False


def test_timezone_aware_dates_are_accepted(client):
    response = client.post("/api/price", json={
        "plate": Y, "startDate": "2030-01-01T10:00:00+00:00", "endDate": "2030-01-03T10:00:00+00:00",
    })

    assert response.json()["price"] == 5300


def test_customer_reservations_ignore_case(client):
    book(client, customer="Alice")
    book(client, customer="Bob", plate=Y)

    found = client.get("/api/reservations/customer/ALICE").json()

    assert [r["customerName"] for r in found] == ["Alice"]


def test_cancel_latest_reservation(client):
    book(client)

    first = client.delete(f"/api/reservations/{X}/latest").json()
    second = client.delete(f"/api/reservations/{X}/latest").json()

    assert first["removed"] is True
    assert first["reservation"]["customerName"] == "Alice"
    assert second == {"success": True, "removed": False, "reservation": None}
    assert book(client).status_code == 200


def test_report(client):
    empty = client.get("/api/report").json()
    assert empty == {"success": True, "totalIncome": 0, "topCar": "No Data", "totalBookings": 0}

    book(client)
    book(client, customer="Bob", plate=Y)
    book(client, customer="Carol", startDate="2030-02-01T10:00:00", endDate="2030-02-02T10:00:00")

    report = client.get("/api/report").json()
    assert report["totalIncome"] == 7500 + 7950 + 2500
    assert report["topCar"] == X
    assert report["totalBookings"] == 3


def test_aware_date_outside_local_range_is_invalid_format(client):
    response = client.post("/api/price", json={
        "plate": X, "startDate": "0001-01-01T00:00:00+05:00", "endDate": "2030-01-03T10:00:00",
    })

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid date format."}
