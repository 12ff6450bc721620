"""Integration tests for the HTTP API.

Run with: pytest backend/tests/test_api.py -v
"""

from fastapi.testclient import TestClient

SLOT_ID = "2021-12-30T09:00:00+00:00"

BOOKING = {
    "productId": "1",
    "optionId": "DEFAULT",
    "availabilityId": SLOT_ID,
    "unitItems": [{"unitId": "adult"}],
    "resellerReference": "reseller",
}


class TestTransport:

    def test_ping(self, api_client: TestClient):
        response = api_client.get("/ping")
        assert response.status_code == 200
        assert "serverTime" in response.json()

    def test_request_id_header(self, api_client: TestClient):
        first = api_client.get("/ping").headers["x-request-id"]
        second = api_client.get("/ping").headers["x-request-id"]
        assert first and second and first != second

    def test_capabilities_echoed(self, api_client: TestClient):
        response = api_client.get(
            "/ping", headers={"Octo-Capabilities": "octo/pricing, octo/unknown"},
        )
        assert response.headers["Octo-Capabilities"] == "octo/pricing"

    def test_unknown_route(self, api_client: TestClient):
        response = api_client.get("/nowhere")
        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"


class TestProducts:

    def test_list_products(self, api_client: TestClient):
        products = api_client.get("/products").json()
        assert [p["id"] for p in products] == ["1", "2"]
        assert products[0]["availabilityType"] == "START_TIME"
        assert products[1]["availabilityType"] == "OPENING_HOURS"

    def test_fields_gated_by_capabilities(self, api_client: TestClient):
        plain = api_client.get("/products/1").json()
        assert "pricingPer" not in plain
        assert "title" not in plain
        assert "pricingFrom" not in plain["options"][0]["units"][0]

        rich = api_client.get(
            "/products/1", headers={"Octo-Capabilities": "octo/pricing,octo/content"},
        ).json()
        assert rich["pricingPer"] == "UNIT"
        assert rich["defaultCurrency"] == "GBP"
        assert rich["title"] == "London walking tour"
        assert rich["options"][0]["units"][0]["pricingFrom"][0]["retail"] == 2500

    def test_unknown_product(self, api_client: TestClient):
        response = api_client.get("/products/99")
        assert response.status_code == 400
        assert response.json() == {
            "error": "INVALID_PRODUCT_ID",
            "errorMessage": "The productId was missing or invalid",
            "productId": "99",
        }


class TestAvailability:

    def test_local_date(self, api_client: TestClient):
        response = api_client.post("/availability", json={
            "productId": "1", "optionId": "DEFAULT", "localDate": "2021-12-20",
        })
        assert response.status_code == 200
        body = response.json()
        assert [a["id"] for a in body] == [
            "2021-12-20T09:00:00+00:00",
            "2021-12-20T12:00:00+00:00",
            "2021-12-20T15:00:00+00:00",
        ]
        assert body[0]["available"] is True
        assert body[0]["status"] == "AVAILABLE"
        assert body[0]["vacancies"] == 10
        assert "unitPricing" not in body[0]

    def test_pricing_capability(self, api_client: TestClient):
        body = api_client.post(
            "/availability",
            json={
                "productId": "1",
                "optionId": "DEFAULT",
                "localDate": "2021-12-20",
                "units": [{"id": "adult", "quantity": 2}],
            },
            headers={"Octo-Capabilities": "octo/pricing"},
        ).json()
        assert body[0]["unitPricing"][0]["unitId"] == "adult"
        assert body[0]["pricing"]["retail"] == 5000

    def test_opening_hours_product(self, api_client: TestClient):
        body = api_client.post("/availability", json={
            "productId": "2", "optionId": "DEFAULT", "localDate": "2021-12-21",
        }).json()
        assert body[0]["id"] == "2021-12-21"
        assert body[0]["allDay"] is True
        assert body[0]["openingHours"] == [{"from": "10:00", "to": "18:00"}]

    def test_range(self, api_client: TestClient):
        body = api_client.post("/availability", json={
            "productId": "1",
            "optionId": "DEFAULT",
            "localDateStart": "2021-12-20",
            "localDateEnd": "2021-12-22",
        }).json()
        assert len(body) == 9

    def test_range_start_after_end(self, api_client: TestClient):
        response = api_client.post("/availability", json={
            "productId": "1",
            "optionId": "DEFAULT",
            "localDateStart": "2021-12-30",
            "localDateEnd": "2021-12-20",
        })
        assert response.status_code == 400
        assert response.json()["error"] == "BAD_REQUEST"

    def test_selector_required(self, api_client: TestClient):
        response = api_client.post("/availability", json={"productId": "1", "optionId": "DEFAULT"})
        assert response.status_code == 400
        assert response.json()["error"] == "BAD_REQUEST"

    def test_range_needs_both_ends(self, api_client: TestClient):
        response = api_client.post("/availability", json={
            "productId": "1", "optionId": "DEFAULT", "localDateStart": "2021-12-20",
        })
        assert response.status_code == 400

    def test_unknown_option(self, api_client: TestClient):
        response = api_client.post("/availability", json={
            "productId": "1", "optionId": "NOPE", "localDate": "2021-12-20",
        })
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_OPTION_ID"


class TestBookings:

    def test_create_and_look_up(self, api_client: TestClient):
        created = api_client.post("/bookings", json=BOOKING)
        assert created.status_code == 200
        booking = created.json()
        assert booking["status"] == "CONFIRMED"
        assert booking["resellerReference"] == "reseller"
        assert booking["availabilityId"] == SLOT_ID
        assert booking["unitItems"][0]["unitId"] == "adult"

        by_uuid = api_client.get(f"/bookings/{booking['uuid']}").json()
        by_reference = api_client.get("/bookings", params={"resellerReference": "reseller"}).json()
        assert by_uuid == booking
        assert by_reference == [booking]

    def test_booking_reduces_availability(self, api_client: TestClient):
        api_client.post("/bookings", json={**BOOKING, "unitItems": [{"unitId": "adult"}] * 4})

        body = api_client.post("/availability", json={
            "productId": "1", "optionId": "DEFAULT", "availabilityIds": [SLOT_ID],
        }).json()
        assert body[0]["vacancies"] == 6
        assert body[0]["status"] == "AVAILABLE"

    def test_invalid_availability_id(self, api_client: TestClient):
        response = api_client.post("/bookings", json={**BOOKING, "availabilityId": "2021-13-40"})
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_AVAILABILITY_ID"
        assert response.json()["availabilityId"] == "2021-13-40"

    def test_unit_items_required(self, api_client: TestClient):
        response = api_client.post("/bookings", json={**BOOKING, "unitItems": []})
        assert response.status_code == 400

    def test_unknown_booking(self, api_client: TestClient):
        response = api_client.get("/bookings/missing")
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_BOOKING_UUID"

    def test_null_fields_kept_and_pricing_omitted(self, api_client: TestClient):
        booking = api_client.post("/bookings", json=BOOKING).json()

        assert booking["cancellation"] is None
        assert booking["notes"] is None
        assert booking["unitItems"][0]["ticket"] is None
        assert "pricing" not in booking

    def test_pricing_capability(self, api_client: TestClient):
        booking = api_client.post(
            "/bookings", json=BOOKING, headers={"Octo-Capabilities": "octo/pricing"},
        ).json()
        assert booking["pricing"]["retail"] == 2500

    def test_cancel(self, api_client: TestClient):
        booking = api_client.post("/bookings", json=BOOKING).json()

        cancelled = api_client.post(f"/bookings/{booking['uuid']}/cancel", json={"reason": "ill"})
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "CANCELLED"
        assert cancelled.json()["cancellation"]["reason"] == "ill"
        assert cancelled.json()["cancellable"] is False

        again = api_client.post(f"/bookings/{booking['uuid']}/cancel")
        assert again.status_code == 400

    def test_delete_not_allowed(self, api_client: TestClient):
        booking = api_client.post("/bookings", json=BOOKING).json()

        response = api_client.delete(f"/bookings/{booking['uuid']}")
        assert response.status_code == 405
        assert response.json()["error"] == "METHOD_NOT_ALLOWED"
