"""
End-to-end tests for the waitlist endpoints.
"""

from nursery_api.modules.submissions.references import reference_pattern


class TestJoinWaitlist:
    """POST /api/waitlist/join"""

    def test_join(self, client, make_waitlist_payload):
        response = client.post("/api/waitlist/join", json=make_waitlist_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["position"] == 1
        assert body["data"]["estimatedWaitTime"] == "1-2 weeks"
        assert body["data"]["reference"].startswith("WL-")
        assert "position 1" in body["message"]

    def test_rejoin_is_409(self, client, make_waitlist_payload):
        assert client.post("/api/waitlist/join", json=make_waitlist_payload()).status_code == 201

        response = client.post("/api/waitlist/join", json=make_waitlist_payload("07700900123"))

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "DUPLICATE_SUBMISSION"
        assert body["message"] == "This phone number is already on our waitlist"

    def test_invalid_body(self, client):
        response = client.post("/api/waitlist/join", json={"fullName": "G"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_FAILED"


class TestWaitlistStatus:
    """GET /api/waitlist/join?phone=..."""

    def test_phone_required(self, client):
        response = client.get("/api/waitlist/join")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "PHONE_REQUIRED"
        assert body["errors"] == ["Phone number parameter is missing"]

    def test_blank_phone(self, client):
        response = client.get("/api/waitlist/join", params={"phone": "   "})

        assert response.status_code == 400

    def test_not_found(self, client):
        response = client.get("/api/waitlist/join", params={"phone": "07700 900999"})

        assert response.status_code == 404
        assert response.json()["error"] == "WAITLIST_ENTRY_NOT_FOUND"

    def test_position(self, client, make_waitlist_payload):
        for phone in ("07700 900001", "07700 900002"):
            assert client.post("/api/waitlist/join", json=make_waitlist_payload(phone)).status_code == 201

        response = client.get("/api/waitlist/join", params={"phone": "07700-900-002"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Waitlist status retrieved successfully"
        assert body["data"]["position"] == 2
        assert body["data"]["status"] == "active"
        assert "joinedAt" in body["data"]

    def test_join_then_look_up_same_entry(self, client, make_waitlist_payload):
        """The reference handed out on join is the one the status lookup returns."""
        joined = client.post(
            "/api/waitlist/join", json=make_waitlist_payload("07712345678", "Jane Doe")
        )

        assert joined.status_code == 201
        reference = joined.json()["data"]["reference"]
        assert reference_pattern("WL").match(reference)

        response = client.get("/api/waitlist/join", params={"phone": "07712345678"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["reference"] == reference
        assert data["position"] >= 1
