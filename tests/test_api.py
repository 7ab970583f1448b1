"""
Tests for the calculation API endpoints.
"""

import pytest

# Database setup is handled by conftest.py


@pytest.fixture
def rental_payload():
    """Camel-case request body for a subject-to rental."""
    return {
        "name": "123 Main St",
        "propertyBasics": {"askingPrice": 160000, "arv": 220000, "repairs": 20000},
        "purchaseCosts": {"purchasePrice": 150000},
        "taxInsurance": {"annualTaxes": 2400, "annualInsurance": 1200},
        "income": {"monthlyRent": 2000},
        "subjectTo": {
            "useSubjectTo": True,
            "subToPrincipal": 120000,
            "subToInterestRate": 0,
            "subToTermYears": 30,
        },
    }


class TestHealth:
    """Test health endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCalculateAPI:
    """Test the calculate endpoint."""

    def test_calculate(self, client, rental_payload):
        response = client.post("/api/calculate", json=rental_payload)
        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"loanCalcs", "totals", "quickStats", "dealChecklist"}
        assert data["totals"]["totalMonthlyTI"] == pytest.approx(300)
        assert data["quickStats"]["totalEntryFee"] == pytest.approx(3800)
        assert data["dealChecklist"]["dealDecision"] == "DEAL"
        assert data["dealChecklist"]["entryFeeUnder25k"] is True

    def test_dscr_loan(self, client):
        response = client.post(
            "/api/calculate",
            json={"purchaseCosts": {"purchasePrice": 300000}, "dscrLoan": {"useDSCRLoan": True}},
        )
        assert response.status_code == 200
        loan_calcs = response.json()["loanCalcs"]
        assert loan_calcs["dscrLoanAmount"] == pytest.approx(240000)
        assert loan_calcs["dscrDownPayment"] == pytest.approx(60000)
        assert "buyerMonthlyPITI" in loan_calcs

    def test_as_of_pins_subject_to_balance(self, client):
        payload = {
            "subjectTo": {
                "useSubjectTo": True,
                "subToPrincipal": 200000,
                "subToInterestRate": 6,
                "subToStartDate": "2020-01-01",
            }
        }
        early = client.post("/api/calculate?as_of=2021-01-01", json=payload).json()
        late = client.post("/api/calculate?as_of=2030-01-01", json=payload).json()
        assert (
            late["loanCalcs"]["subToCurrentBalance"]
            < early["loanCalcs"]["subToCurrentBalance"]
        )

    def test_negative_values_clamped(self, client):
        response = client.post("/api/calculate", json={"income": {"monthlyRent": -1000}})
        assert response.status_code == 200
        assert response.json()["totals"]["totalMonthlyIncome"] == 0

    def test_empty_date_accepted(self, client):
        response = client.post(
            "/api/calculate", json={"subjectTo": {"subToStartDate": ""}}
        )
        assert response.status_code == 200

    def test_malformed_input(self, client):
        response = client.post("/api/calculate", json={"income": {"monthlyRent": "lots"}})
        assert response.status_code == 422


class TestAmortizationAPI:
    """Test schedule endpoints."""

    def test_amortization(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 200000, "annualRate": 6, "termYears": 30, "startDate": "2025-01-01"},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 360
        assert data["schedule"][0]["payment"] == pytest.approx(1199.10, abs=0.01)
        assert data["total_principal"] == pytest.approx(200000, abs=5)

    def test_loan_schedules(self, client):
        response = client.post(
            "/api/calculate/schedules?as_of=2025-01-01",
            json={"purchaseCosts": {"purchasePrice": 300000}, "dscrLoan": {"useDSCRLoan": True}},
        )
        assert response.status_code == 200
        data = response.json()
        assert list(data) == ["dscrLoan"]
        assert data["dscrLoan"][0]["date"] == "2025-01-01"


class TestCompareAPI:
    """Test the compare endpoint."""

    def test_compare_two(self, client, rental_payload):
        richer = {**rental_payload, "income": {"monthlyRent": 2600}}
        response = client.post(
            "/api/calculate/compare",
            json={
                "scenarios": [
                    {"name": "Base", "inputs": rental_payload},
                    {"name": "Higher rent", "inputs": richer},
                ]
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert [s["name"] for s in data["scenarios"]] == ["Base", "Higher rent"]
        assert "quickStats" in data["scenarios"][0]["outputs"]

        metrics = {m["key"]: m for m in data["comparison"]["metrics"]}
        assert metrics["monthlyCashflow"]["bestScenarioIds"] == ["scenario_2"]

    def test_compare_needs_two(self, client, rental_payload):
        response = client.post(
            "/api/calculate/compare",
            json={"scenarios": [{"name": "Base", "inputs": rental_payload}]},
        )
        assert response.status_code == 400

    def test_compare_at_most_three(self, client, rental_payload):
        scenario = {"name": "Base", "inputs": rental_payload}
        response = client.post(
            "/api/calculate/compare", json={"scenarios": [scenario] * 4}
        )
        assert response.status_code == 400
