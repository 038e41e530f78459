"""API tests against a fresh sample portfolio (see conftest.client)."""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from househack.api.deps import cached_compute, memoized_compute
from househack.config import settings
from househack.engine.validation import InvalidScenarioError
from househack.models.ai import DealSearchResult, RentEstimate, SearchSource

TRIPLEX_REQUEST = {
    "property": {
        "price": "200000",
        "taxes_yearly": "2400",
        "insurance_yearly": "1200",
        "units": [
            {"name": "A", "estimated_rent": "1200", "is_owner_occupied": True},
            {"name": "B", "estimated_rent": "1000"},
            {"name": "C", "estimated_rent": "900"},
        ],
    },
    "scenario": {
        "down_payment_percent": "3.5",
        "interest_rate": "6.5",
        "loan_term_years": 30,
        "mip_rate": "0.85",
    },
}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestCalculate:
    def test_triplex_breakdown(self, client):
        resp = client.post("/api/v1/calculate", json=TRIPLEX_REQUEST)
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["loan_amount"]) == Decimal("193000")
        assert Decimal(data["monthly_principal_interest"]) == Decimal("1219.89")
        assert Decimal(data["monthly_mip"]) == Decimal("136.71")
        assert Decimal(data["total_piti"]) == Decimal("1656.60")
        assert Decimal(data["net_rental_income"]) == Decimal("2325")
        assert Decimal(data["cash_flow"]) == Decimal("1443.40")
        assert data["self_sufficiency_pass"] is True
        assert data["self_sufficiency_applies"] is True
        assert data["unit_count"] == 3

    def test_scenario_defaults_to_fha(self, client):
        body = {"property": TRIPLEX_REQUEST["property"]}
        resp = client.post("/api/v1/calculate", json=body)
        assert Decimal(resp.json()["loan_amount"]) == Decimal("193000")

    def test_zero_term_is_422(self, client):
        body = {**TRIPLEX_REQUEST, "scenario": {**TRIPLEX_REQUEST["scenario"], "loan_term_years": 0}}
        resp = client.post("/api/v1/calculate", json=body)
        assert resp.status_code == 422
        assert "loan_term_years" in resp.json()["detail"]

    def test_negative_rent_is_422(self, client):
        prop = {**TRIPLEX_REQUEST["property"], "units": [{"estimated_rent": "-5"}]}
        resp = client.post("/api/v1/calculate", json={"property": prop})
        assert resp.status_code == 422

    def test_results_are_memoized_by_value(self, client):
        memoized_compute.cache_clear()
        client.post("/api/v1/calculate", json=TRIPLEX_REQUEST)
        client.post("/api/v1/calculate", json=TRIPLEX_REQUEST)
        info = memoized_compute.cache_info()
        assert info.misses == 1
        assert info.hits == 1

    def test_near_zero_rate(self, client):
        scenario = {**TRIPLEX_REQUEST["scenario"], "interest_rate": "0.000000000000000000000000001"}
        resp = client.post("/api/v1/calculate", json={**TRIPLEX_REQUEST, "scenario": scenario})
        assert resp.status_code == 200
        assert Decimal(resp.json()["monthly_principal_interest"]) == Decimal("536.11")

    def test_overflowing_rate_is_422(self, client):
        scenario = {**TRIPLEX_REQUEST["scenario"], "interest_rate": "1E+5000"}
        resp = client.post("/api/v1/calculate", json={**TRIPLEX_REQUEST, "scenario": scenario})
        assert resp.status_code == 422

    def test_default_scenario(self, client):
        data = client.get("/api/v1/calculate/default-scenario").json()
        assert data["loan_term_years"] == 30
        assert Decimal(data["down_payment_percent"]) == Decimal("3.5")
        assert Decimal(data["mip_rate"]) == Decimal("0.85")


class TestCachedCompute:
    def test_float_term_rejected_after_int_term_cached(self, triplex, fha_scenario):
        memoized_compute.cache_clear()
        cached_compute(triplex, fha_scenario)
        # 30.0 == 30, so the lookup alone would return the cached result
        with pytest.raises(InvalidScenarioError):
            cached_compute(triplex, replace(fha_scenario, loan_term_years=30.0))

    def test_bool_rate_rejected_after_int_rate_cached(self, triplex, fha_scenario):
        memoized_compute.cache_clear()
        cached_compute(triplex, replace(fha_scenario, interest_rate=1))
        with pytest.raises(InvalidScenarioError):
            cached_compute(triplex, replace(fha_scenario, interest_rate=True))

    def test_valid_inputs_hit_the_cache(self, triplex, fha_scenario):
        memoized_compute.cache_clear()
        first = cached_compute(triplex, fha_scenario)
        assert cached_compute(triplex, fha_scenario) is first
        assert memoized_compute.cache_info().hits == 1


class TestWorkspaces:
    def test_list(self, client):
        names = [ws["name"] for ws in client.get("/api/v1/workspaces").json()]
        assert names == ["Lake Havasu", "Phoenix Metro"]

    def test_create_and_delete(self, client):
        resp = client.post("/api/v1/workspaces", json={"name": "Austin Market", "location_string": "Austin, TX"})
        assert resp.status_code == 201
        ws_id = resp.json()["id"]
        assert client.delete(f"/api/v1/workspaces/{ws_id}").status_code == 204
        assert client.delete(f"/api/v1/workspaces/{ws_id}").status_code == 404

    def test_blank_name(self, client):
        assert client.post("/api/v1/workspaces", json={"name": " "}).status_code == 422

    def test_stats(self, client):
        assert client.get("/api/v1/workspaces/ws1/stats").json() == {"total": 1, "analyzing": 1, "offers": 0}
        assert client.get("/api/v1/workspaces/all/stats").json()["total"] == 1
        assert client.get("/api/v1/workspaces/nope/stats").status_code == 404


class TestProperties:
    def test_list_filtered(self, client):
        assert len(client.get("/api/v1/properties").json()) == 1
        assert client.get("/api/v1/properties", params={"workspace_id": "ws2"}).json() == []

    def test_new_property(self, client):
        resp = client.post("/api/v1/properties", json={"workspace_id": "ws2"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["city"] == "Phoenix"
        assert data["status"] == "Lead"
        assert len(data["units"]) == 1

    def test_new_property_unknown_workspace(self, client):
        assert client.post("/api/v1/properties", json={"workspace_id": "nope"}).status_code == 404

    def test_quick_add(self, client):
        resp = client.post(
            "/api/v1/properties/quick-add",
            json={"workspace_id": "ws1", "address": "7 Cove Ln", "price": "375000", "unit_count": 4},
        )
        assert resp.status_code == 201
        assert len(resp.json()["units"]) == 4
        assert client.get("/api/v1/workspaces/ws1/stats").json()["total"] == 2

    def test_get_unknown(self, client):
        assert client.get("/api/v1/properties/nope").status_code == 404

    def test_update(self, client):
        resp = client.put("/api/v1/properties/1", json={"price": "499000", "status": "Offer Made"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["price"]) == Decimal("499000")
        assert client.get("/api/v1/workspaces/ws1/stats").json()["offers"] == 1

    def test_update_bad_status(self, client):
        assert client.put("/api/v1/properties/1", json={"status": "Sold"}).status_code == 422

    def test_unit_lifecycle(self, client):
        added = client.post("/api/v1/properties/1/units").json()
        assert len(added["units"]) == 4

        edited = client.patch("/api/v1/properties/1/units/3", json={"estimated_rent": "1100"}).json()
        assert Decimal(edited["units"][3]["estimated_rent"]) == Decimal("1100")

        removed = client.delete("/api/v1/properties/1/units/0").json()
        assert [u["name"] for u in removed["units"]] == ["Unit B", "Unit C", "Unit 4"]

    def test_unit_bad_index(self, client):
        assert client.patch("/api/v1/properties/1/units/9", json={"bedrooms": 1}).status_code == 404

    def test_cannot_remove_last_unit(self, client):
        prop_id = client.post("/api/v1/properties", json={}).json()["id"]
        assert client.delete(f"/api/v1/properties/{prop_id}/units/0").status_code == 409

    def test_calculate_saved_property(self, client):
        resp = client.post("/api/v1/properties/1/calculate")
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["gross_rental_income"]) == Decimal("4600")
        assert Decimal(data["loan_amount"]) == Decimal("506625")
        assert data["self_sufficiency_applies"] is True

    def test_calculate_with_scenario(self, client):
        scenario = {"down_payment_percent": "20", "interest_rate": "0", "loan_term_years": 15, "mip_rate": "0"}
        data = client.post("/api/v1/properties/1/calculate", json=scenario).json()
        # 420000 / 180
        assert Decimal(data["monthly_principal_interest"]) == Decimal("2333.33")

    def test_negative_rent_edit_rejected(self, client):
        resp = client.patch("/api/v1/properties/1/units/1", json={"estimated_rent": "-5"})
        assert resp.status_code == 422
        stored = client.get("/api/v1/properties/1").json()
        assert Decimal(stored["units"][1]["estimated_rent"]) == Decimal("1400")
        assert client.post("/api/v1/properties/1/calculate").status_code == 200

    def test_negative_price_update_rejected(self, client):
        assert client.put("/api/v1/properties/1", json={"price": "-1"}).status_code == 422
        assert Decimal(client.get("/api/v1/properties/1").json()["price"]) == Decimal("525000")

    def test_edit_changes_calculation(self, client):
        before = client.post("/api/v1/properties/1/calculate").json()
        client.patch("/api/v1/properties/1/units/1", json={"estimated_rent": "1500"})
        after = client.post("/api/v1/properties/1/calculate").json()
        assert Decimal(after["gross_rental_income"]) - Decimal(before["gross_rental_income"]) == Decimal("100")


class TestAI:
    def test_rent_estimate_placeholder_without_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "anthropic_api_key", "")
        resp = client.post("/api/v1/ai/rent-estimate", json={"address": "1 Main", "bedrooms": 2, "bathrooms": 1})
        assert resp.json()["estimated_rent"] == 1500

    def test_unit_estimate_written_back(self, client):
        estimate = RentEstimate(estimated_rent=1650, confidence="High", reasoning="comps")
        with patch(
            "househack.data.assistant.estimate_market_rent",
            new_callable=AsyncMock,
            return_value=estimate,
        ) as mock_estimate:
            resp = client.post("/api/v1/properties/1/units/2/estimate-rent")

        assert resp.status_code == 200
        mock_estimate.assert_awaited_once_with("2444 Hummingbird Ln", 2, 1.0)
        assert Decimal(resp.json()["property"]["units"][2]["estimated_rent"]) == Decimal("1650")
        saved = client.get("/api/v1/properties/1").json()
        assert Decimal(saved["units"][2]["estimated_rent"]) == Decimal("1650")

    def test_unit_estimate_bad_index(self, client):
        assert client.post("/api/v1/properties/1/units/5/estimate-rent").status_code == 404

    def test_analyze_property(self, client):
        with patch(
            "househack.data.assistant.analyze_deal",
            new_callable=AsyncMock,
            return_value="Looks self-sufficient.",
        ) as mock_analyze:
            resp = client.post("/api/v1/properties/1/analyze")
        assert resp.json() == {"analysis": "Looks self-sufficient."}
        details, financials = mock_analyze.await_args.args
        assert details == "2444 Hummingbird Ln (3 units)"
        assert "Total Rent: 4600" in financials

    def test_find_deals(self, client):
        result = DealSearchResult(text="1. 5 Palm Dr", sources=[SearchSource(uri="https://x.example", title="X")])
        with patch("househack.data.assistant.find_deals", new_callable=AsyncMock, return_value=result):
            resp = client.post("/api/v1/ai/deals", json={"location": "Phoenix, AZ", "query": "triplex"})
        assert resp.json() == {"text": "1. 5 Palm Dr", "sources": [{"uri": "https://x.example", "title": "X"}]}
