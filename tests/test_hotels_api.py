from datetime import date

from conftest import day
from models.booking import BookingModel

HOTEL_BODY = {
    "name": "Grand Hotel",
    "location": "Lyon",
    "description": "A grand hotel by the river",
    "picture_list": ["front.jpg"],
}


def create_hotels(client, headers, *names):
    for name in names:
        res = client.post(
            "/api/hotels",
            json={**HOTEL_BODY, "name": name},
            headers=headers,
        )
        assert res.status_code == 201


class TestCatalogReads:
    def test_list_is_public(self, client, hotel):
        res = client.get("/api/hotels")
        assert res.status_code == 200
        body = res.json()
        assert body["success"] is True
        assert [h["id"] for h in body["data"]] == [hotel.id]
        assert body["data"][0]["picture_list"] == ["test1.jpg", "test2.jpg"]
        assert body["pagination"] == {"current": 1, "limit": 10, "total": 1, "pages": 1}

    def test_pagination(self, client, make_user):
        _, headers = make_user("admin")
        create_hotels(client, headers, "A", "B", "C")
        res = client.get("/api/hotels", params={"page": 1, "limit": 2})
        body = res.json()
        assert len(body["data"]) == 2
        assert body["pagination"]["total"] == 3
        assert body["pagination"]["pages"] == 2

        second = client.get("/api/hotels", params={"page": 2, "limit": 2}).json()
        assert len(second["data"]) == 1

    def test_sort_by_name(self, client, make_user):
        _, headers = make_user("admin")
        create_hotels(client, headers, "Charlie", "Alpha", "Bravo")
        res = client.get("/api/hotels", params={"sort": "name", "order": "asc"})
        assert [h["name"] for h in res.json()["data"]] == ["Alpha", "Bravo", "Charlie"]

    def test_invalid_sort(self, client):
        res = client.get("/api/hotels", params={"sort": "price"})
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "sort"

    def test_limit_out_of_range(self, client):
        assert client.get("/api/hotels", params={"limit": 0}).status_code == 400
        assert client.get("/api/hotels", params={"limit": 1000}).status_code == 400

    def test_get_unknown_hotel(self, client):
        res = client.get("/api/hotels/does-not-exist")
        assert res.status_code == 404
        assert res.json()["success"] is False


class TestCatalogWrites:
    def test_admin_creates(self, client, make_user):
        _, headers = make_user("admin")
        res = client.post("/api/hotels", json=HOTEL_BODY, headers=headers)
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["name"] == "Grand Hotel"
        assert client.get(f"/api/hotels/{data['id']}").status_code == 200

    def test_blank_name_rejected(self, client, make_user):
        _, headers = make_user("admin")
        res = client.post("/api/hotels", json={**HOTEL_BODY, "name": "   "}, headers=headers)
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "name"

    def test_employee_cannot_create(self, client, make_user):
        _, headers = make_user("employee")
        assert client.post("/api/hotels", json=HOTEL_BODY, headers=headers).status_code == 403

    def test_anonymous_cannot_create(self, client):
        assert client.post("/api/hotels", json=HOTEL_BODY).status_code == 401

    def test_update_replaces_images(self, client, make_user, hotel):
        _, headers = make_user("admin")
        res = client.put(
            f"/api/hotels/{hotel.id}",
            json={"location": "Nice", "picture_list": ["new.jpg"]},
            headers=headers,
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["location"] == "Nice"
        assert data["name"] == "Test Hotel"
        assert data["picture_list"] == ["new.jpg"]

    def test_update_keeps_existing_images(self, client, make_user, hotel):
        _, headers = make_user("admin")
        res = client.put(
            f"/api/hotels/{hotel.id}",
            json={"picture_list": ["new.jpg"], "keepExistingImages": True},
            headers=headers,
        )
        assert res.json()["data"]["picture_list"] == ["test1.jpg", "test2.jpg", "new.jpg"]

    def test_update_unknown_hotel(self, client, make_user):
        _, headers = make_user("admin")
        res = client.put("/api/hotels/missing", json={"name": "X"}, headers=headers)
        assert res.status_code == 404

    def test_delete(self, client, make_user, hotel):
        _, headers = make_user("admin")
        assert client.delete(f"/api/hotels/{hotel.id}", headers=headers).status_code == 200
        assert client.get(f"/api/hotels/{hotel.id}").status_code == 404

    def test_user_cannot_delete(self, client, make_user, hotel):
        _, headers = make_user("user")
        assert client.delete(f"/api/hotels/{hotel.id}", headers=headers).status_code == 403


class TestOccupancy:
    def add_booking(self, db, user, hotel, check_in, check_out, status="confirmed"):
        db.add(
            BookingModel(
                booking_id=f"b-{check_in.isoformat()}",
                user_id=user.user_id,
                hotel_id=hotel.id,
                check_in=check_in,
                check_out=check_out,
                number_of_guests=1,
                total_price=100,
                status=status,
                created_at=day(0),
                updated_at=day(0),
            )
        )
        db.commit()

    def test_rate(self, client, db, make_user, hotel):
        guest, _ = make_user("user")
        _, headers = make_user("employee")
        self.add_booking(db, guest, hotel, date(2025, 7, 1), date(2025, 7, 4))
        self.add_booking(db, guest, hotel, date(2025, 7, 5), date(2025, 7, 6))
        # Runs past the window
        self.add_booking(db, guest, hotel, date(2025, 7, 9), date(2025, 7, 15))

        res = client.get(
            f"/api/hotels/{hotel.id}/occupancy",
            params={"startDate": "2025-07-01", "endDate": "2025-07-11"},
            headers=headers,
        )
        assert res.status_code == 200
        assert res.json()["data"] == {
            "totalDays": 10,
            "occupiedDays": 4,
            "occupancyRate": 40.0,
            "totalBookings": 2,
        }

    def test_reversed_window(self, client, make_user, hotel):
        _, headers = make_user("admin")
        res = client.get(
            f"/api/hotels/{hotel.id}/occupancy",
            params={"startDate": "2025-07-11", "endDate": "2025-07-01"},
            headers=headers,
        )
        assert res.status_code == 400

    def test_user_denied(self, client, make_user, hotel):
        _, headers = make_user("user")
        res = client.get(
            f"/api/hotels/{hotel.id}/occupancy",
            params={"startDate": "2025-07-01", "endDate": "2025-07-11"},
            headers=headers,
        )
        assert res.status_code == 403
