"""
API tests for real-estate property endpoints.
"""

from decimal import Decimal

from fastapi.testclient import TestClient


def _create_home(client: TestClient, **extra) -> dict:
    payload = {
        "name": "Family home",
        "property_type": "PRIMARY_RESIDENCE",
        "current_value": "400000",
        "valuation_date": "2024-06-01",
        "city": "Lisbon",
        "rooms": 4,
    }
    payload.update(extra)
    response = client.post("/properties", json=payload)
    assert response.status_code == 201
    return response.json()


class TestPropertiesApi:
    """Tests for /properties."""

    def test_create_with_mortgage_reports_equity(self, client: TestClient):
        data = _create_home(
            client,
            mortgage={"name": "Home loan", "original_amount": "250000", "outstanding_amount": "200000"},
        )

        assert data["symbol"] == "PROP-LISBON-001"
        assert data["city"] == "Lisbon"
        assert Decimal(data["current_value"]) == Decimal("400000")
        assert Decimal(data["mortgage_balance"]) == Decimal("250000")
        assert Decimal(data["equity"]) == Decimal("150000")
        assert data["mortgage_id"] is not None

        liabilities = client.get("/liabilities").json()
        assert [item["linked_asset_symbol"] for item in liabilities] == ["PROP-LISBON-001"]

    def test_get_list_and_summary(self, client: TestClient):
        home = _create_home(client)
        _create_home(client, name="Plot", property_type="LAND", current_value="50000", city=None)

        assert client.get(f"/properties/{home['symbol']}").json()["name"] == "Family home"
        assert len(client.get("/properties").json()) == 2

        summary = client.get("/properties/summary").json()
        assert summary["property_count"] == 2
        assert Decimal(summary["total_equity"]) == Decimal("450000")

    def test_patch_changes_only_sent_fields(self, client: TestClient):
        home = _create_home(client)

        response = client.patch(f"/properties/{home['symbol']}", json={"rooms": 5})

        assert response.status_code == 200
        assert response.json()["rooms"] == 5
        assert response.json()["city"] == "Lisbon"

    def test_put_value_revalues(self, client: TestClient):
        home = _create_home(client)

        response = client.put(
            f"/properties/{home['symbol']}/value",
            json={"value": "420000", "valuation_date": "2024-06-10"},
        )

        assert response.status_code == 200
        assert Decimal(response.json()["current_value"]) == Decimal("420000")

    def test_held_property_counts_in_portfolio_value(self, client: TestClient):
        home = _create_home(client)
        client.post("/snapshots", json={"date": "2024-06-15"})
        holding = client.post(
            "/snapshots/2024-06-15/holdings", json={"symbol": home["symbol"], "amount": "1"}
        )
        assert holding.status_code == 201

        response = client.get("/portfolio")

        assert Decimal(response.json()["total_value"]) == Decimal("400000")

    def test_unknown_property_returns_404(self, client: TestClient):
        response = client.get("/properties/PROP-NOWHERE-001")

        assert response.status_code == 404
        assert response.json()["error"] == "PROPERTY_NOT_FOUND"

    def test_bad_value_returns_400(self, client: TestClient):
        response = client.post(
            "/properties",
            json={"name": "Home", "property_type": "RENTAL", "current_value": "0"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_AMOUNT"
