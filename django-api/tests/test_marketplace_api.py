"""Integration tests for the marketplace HTTP API.

Run with: pytest tests/test_marketplace_api.py -v
"""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from marketplace.domain.value_objects import MAX_AMOUNT
from marketplace.models import Account, Ticket

MISSING_KEY = "0" * 64


@pytest.fixture
def users():
    model = get_user_model()
    return {
        name: model.objects.create_user(username=name, password="secret")
        for name in ("alice", "bob", "carol")
    }


@pytest.fixture
def as_user(api_client: APIClient, users):
    def authenticate(name: str) -> APIClient:
        api_client.force_authenticate(user=users[name])
        return api_client

    return authenticate


@pytest.fixture
def issued(as_user) -> dict:
    """Ticket issued by alice at 100 with a 20% markup cap."""
    response = as_user("alice").post(
        "/api/tickets",
        {
            "initial_price": 100,
            "resale_allowed": True,
            "max_markup_percent": 20,
            "asset_reference": "evt-1",
        },
        format="json",
    )
    assert response.status_code == 201
    return response.json()


def error_code(response) -> str:
    return response.json()["error"]["code"]


@pytest.mark.django_db
class TestAuthentication:
    """Every endpoint requires an authenticated principal."""

    @pytest.mark.parametrize(
        "method, path",
        [
            ("post", "/api/tickets"),
            ("get", f"/api/tickets/{MISSING_KEY}"),
            ("post", f"/api/tickets/{MISSING_KEY}/listing"),
            ("post", f"/api/tickets/{MISSING_KEY}/purchase"),
            ("get", "/api/marketplace"),
            ("get", "/api/me/balance"),
        ],
    )
    def test_anonymous_requests_are_rejected(self, api_client, method, path):
        response = getattr(api_client, method)(path, {}, format="json")
        assert response.status_code == 401


@pytest.mark.django_db
class TestIssueTicket:
    """Tests for POST /api/tickets"""

    def test_issue_returns_ticket_owned_by_caller(self, issued):
        assert issued["owner"] == "alice"
        assert issued["price"] == issued["original_price"] == 100
        assert issued["is_listed"] is False
        assert issued["markup_ceiling"] == 120
        assert Ticket.objects.filter(pk=issued["key"]).exists()

    def test_issue_ignores_owner_in_body(self, as_user):
        """Identity comes from authentication, never from the payload."""
        response = as_user("bob").post(
            "/api/tickets",
            {
                "owner": "alice",
                "issuer": "alice",
                "initial_price": 10,
                "resale_allowed": False,
                "max_markup_percent": 0,
                "asset_reference": "evt-9",
            },
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["owner"] == "bob"

    def test_issue_duplicate_returns_409(self, as_user, issued):
        response = as_user("alice").post(
            "/api/tickets",
            {
                "initial_price": 1,
                "resale_allowed": True,
                "max_markup_percent": 0,
                "asset_reference": "evt-1",
            },
            format="json",
        )
        assert response.status_code == 409
        assert error_code(response) == "DUPLICATE_RECORD"

    def test_issue_invalid_body_returns_400(self, as_user):
        response = as_user("alice").post(
            "/api/tickets",
            {"initial_price": -5, "max_markup_percent": 150},
            format="json",
        )
        assert response.status_code == 400
        body = response.json()["error"]
        assert body["code"] == "INVALID_REQUEST"
        assert {"initial_price", "max_markup_percent", "resale_allowed", "asset_reference"} <= set(
            body["fields"]
        )


@pytest.mark.django_db
class TestTicketDetail:
    """Tests for GET /api/tickets/{key}"""

    def test_get_ticket_returns_details(self, as_user, issued):
        response = as_user("bob").get(f"/api/tickets/{issued['key']}")
        assert response.status_code == 200
        assert response.json() == issued

    def test_get_ticket_not_found(self, as_user):
        response = as_user("bob").get(f"/api/tickets/{MISSING_KEY}")
        assert response.status_code == 404
        assert error_code(response) == "RECORD_NOT_FOUND"

    def test_get_ticket_invalid_key_format(self, as_user):
        response = as_user("bob").get("/api/tickets/not-a-key")
        assert response.status_code == 400
        assert error_code(response) == "INVALID_TICKET_KEY"


@pytest.mark.django_db
class TestListing:
    """Tests for POST /api/tickets/{key}/listing"""

    def test_owner_lists_at_ceiling(self, as_user, issued):
        response = as_user("alice").post(
            f"/api/tickets/{issued['key']}/listing", {"new_price": 120}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["is_listed"] is True
        assert response.json()["price"] == 120

    def test_listing_above_ceiling_returns_422(self, as_user, issued):
        response = as_user("alice").post(
            f"/api/tickets/{issued['key']}/listing", {"new_price": 121}, format="json"
        )
        assert response.status_code == 422
        assert error_code(response) == "EXCEEDS_MAX_MARKUP"

    def test_listing_by_non_owner_returns_403(self, as_user, issued):
        response = as_user("bob").post(
            f"/api/tickets/{issued['key']}/listing", {"new_price": 100}, format="json"
        )
        assert response.status_code == 403
        assert error_code(response) == "NOT_OWNER"
        assert Ticket.objects.get(pk=issued["key"]).is_listed is False

    def test_listing_non_resalable_returns_409(self, as_user):
        client = as_user("alice")
        created = client.post(
            "/api/tickets",
            {
                "initial_price": 100,
                "resale_allowed": False,
                "max_markup_percent": 20,
                "asset_reference": "evt-locked",
            },
            format="json",
        ).json()
        response = client.post(
            f"/api/tickets/{created['key']}/listing", {"new_price": 100}, format="json"
        )
        assert response.status_code == 409
        assert error_code(response) == "RESALE_NOT_ALLOWED"

    def test_non_resalable_rejection_wins_over_oversized_price(self, as_user):
        client = as_user("alice")
        created = client.post(
            "/api/tickets",
            {
                "initial_price": 100,
                "resale_allowed": False,
                "max_markup_percent": 20,
                "asset_reference": "evt-locked",
            },
            format="json",
        ).json()
        response = client.post(
            f"/api/tickets/{created['key']}/listing",
            {"new_price": MAX_AMOUNT + 1},
            format="json",
        )
        assert response.status_code == 409
        assert error_code(response) == "RESALE_NOT_ALLOWED"

    def test_listing_requires_price(self, as_user, issued):
        response = as_user("alice").post(
            f"/api/tickets/{issued['key']}/listing", {}, format="json"
        )
        assert response.status_code == 400
        assert error_code(response) == "INVALID_REQUEST"


@pytest.mark.django_db
class TestPurchase:
    """Tests for POST /api/tickets/{key}/purchase"""

    def list_ticket(self, as_user, key: str, price: int) -> None:
        response = as_user("alice").post(
            f"/api/tickets/{key}/listing", {"new_price": price}, format="json"
        )
        assert response.status_code == 200

    def test_purchase_transfers_value_and_ownership(self, as_user, issued):
        Account.objects.create(principal="bob", balance=500)
        self.list_ticket(as_user, issued["key"], 120)

        response = as_user("bob").post(f"/api/tickets/{issued['key']}/purchase")

        assert response.status_code == 200
        assert response.json()["owner"] == "bob"
        assert response.json()["is_listed"] is False
        assert as_user("alice").get("/api/me/balance").json() == {
            "principal": "alice",
            "balance": 120,
        }
        assert as_user("bob").get("/api/me/balance").json()["balance"] == 380

    def test_purchase_unlisted_returns_409(self, as_user, issued):
        response = as_user("bob").post(f"/api/tickets/{issued['key']}/purchase")
        assert response.status_code == 409
        assert error_code(response) == "TICKET_NOT_LISTED"

    def test_purchase_without_funds_returns_402(self, as_user, issued):
        Account.objects.create(principal="bob", balance=50)
        self.list_ticket(as_user, issued["key"], 120)

        response = as_user("bob").post(f"/api/tickets/{issued['key']}/purchase")

        assert response.status_code == 402
        assert error_code(response) == "INSUFFICIENT_FUNDS"
        row = Ticket.objects.get(pk=issued["key"])
        assert (row.owner, row.is_listed) == ("alice", True)
        assert Account.objects.get(principal="bob").balance == 50

    def test_purchase_records_sale_history(self, as_user, issued):
        Account.objects.create(principal="bob", balance=500)
        self.list_ticket(as_user, issued["key"], 110)
        as_user("bob").post(f"/api/tickets/{issued['key']}/purchase")

        response = as_user("carol").get(f"/api/tickets/{issued['key']}/sales")

        assert response.status_code == 200
        sales = response.json()
        assert len(sales) == 1
        assert sales[0]["sequence"] == 1
        assert (sales[0]["seller"], sales[0]["buyer"], sales[0]["price"]) == ("alice", "bob", 110)


@pytest.mark.django_db
class TestCollections:
    """Tests for GET /api/marketplace and GET /api/me/tickets"""

    def test_marketplace_lists_only_listed_tickets(
        self, as_user, issued, django_capture_on_commit_callbacks
    ):
        client = as_user("alice")
        assert client.get("/api/marketplace").json() == []

        with django_capture_on_commit_callbacks(execute=True):
            client.post(
                f"/api/tickets/{issued['key']}/listing", {"new_price": 100}, format="json"
            )

        listed = as_user("bob").get("/api/marketplace").json()
        assert [ticket["key"] for ticket in listed] == [issued["key"]]

    def test_my_tickets_returns_caller_tickets(self, as_user, issued):
        assert [t["key"] for t in as_user("alice").get("/api/me/tickets").json()] == [issued["key"]]
        assert as_user("bob").get("/api/me/tickets").json() == []
