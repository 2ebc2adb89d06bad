"""Integration tests for the calculator endpoints"""

import pytest
from fastapi.testclient import TestClient


def test_debt_summary_endpoint(client: TestClient):
    response = client.post(
        "/v1/calculators/debt-summary",
        json={
            "debts": [
                {
                    "category": "CREDIT_CARD",
                    "outstandingBalance": "$500",
                    "originalLoanAmount": "$1000",
                    "monthlyPayment": "$50",
                }
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_debt_service"] == 50
    assert data["annual_debt_service"] == 600
    assert data["credit_utilization_rate"] == 0.5
    assert set(data["category_totals"]) == {"REAL_ESTATE", "VEHICLE_EQUIPMENT", "CREDIT_CARD", "LINE_OF_CREDIT", "OTHER"}


def test_debt_summary_endpoint_tolerates_junk(client: TestClient):
    response = client.post("/v1/calculators/debt-summary", json={"debts": ["junk", 5, {"category": "BOAT"}]})
    assert response.status_code == 200
    assert response.json()["monthly_debt_service"] == 0


def test_debt_summary_endpoint_reads_out_of_range_amount_as_zero(client: TestClient):
    response = client.post(
        "/v1/calculators/debt-summary",
        json={
            "debts": [
                {"category": "OTHER", "monthlyPayment": 10 ** 400},
                {"category": "OTHER", "monthlyPayment": "$25"},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json()["monthly_debt_service"] == 25


def test_dscr_endpoint(client: TestClient):
    response = client.post(
        "/v1/calculators/dscr",
        json={
            "financials": {"year2024": {"summary": {"ebitda": 1000}}},
            "annual_debt_service": 0,
            "annualized_loan_payment": 500,
        },
    )

    assert response.status_code == 200
    assert response.json() == {"dscr": 2.0, "band": "1.25+"}


def test_dscr_endpoint_no_qualifying_year(client: TestClient):
    response = client.post("/v1/calculators/dscr", json={"financials": {}, "annual_debt_service": 1000})
    assert response.json() == {"dscr": None, "band": "none"}


def test_dscr_by_year_endpoint(client: TestClient, sample_financials):
    response = client.post(
        "/v1/calculators/dscr-by-year",
        json={
            "financials": sample_financials,
            "annual_debt_services": {"2024": 36000},
            "annualized_loan_payments": {"2024": 10000},
        },
    )

    data = response.json()["dscr"]
    assert data["2024"] == pytest.approx(5.0)
    assert data["2023"] is None
    assert data["2025YTD"] is None


def test_quick_dscr_endpoint(client: TestClient):
    response = client.post(
        "/v1/calculators/quick-dscr",
        json={
            "monthly_net_income": 20000,
            "real_estate_debt": 3000,
            "credit_cards": 500,
            "vehicle_equipment": 800,
            "lines_of_credit": 200,
            "other_debt": 0,
            "loan_purpose": "Working Capital",
            "loan_amount": 0,
        },
    )

    data = response.json()
    assert data["total_monthly_debt_payments"] == 4500
    assert data["estimated_payment"] == 0
    assert data["dscr"] == pytest.approx(20000 / 4500)
    assert data["annual_income"] == 240000


def test_quick_dscr_endpoint_unknown_purpose_quotes_no_payment(client: TestClient):
    response = client.post(
        "/v1/calculators/quick-dscr",
        json={"monthly_net_income": 10000, "real_estate_debt": 2000, "loan_purpose": "Yacht", "loan_amount": 50000},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["estimated_payment"] == 0
    assert data["dscr"] == pytest.approx(5.0)


def test_quick_dscr_endpoint_rejects_negative(client: TestClient):
    response = client.post("/v1/calculators/quick-dscr", json={"monthly_net_income": -5})
    assert response.status_code == 422


def test_financial_summary_endpoint(client: TestClient):
    response = client.post(
        "/v1/calculators/financial-summary",
        json={"revenue": "$500,000", "cogs": "$200,000", "operatingExpenses": "$150,000", "nonRecurringIncome": "$10,000"},
    )

    data = response.json()
    assert data["gross_profit"] == 300000
    assert data["ebitda"] == 160000
    assert data["adjusted_ebitda"] == 150000


def test_loan_terms_endpoint(client: TestClient):
    response = client.post(
        "/v1/calculators/loan-terms",
        json={"loan_purpose": "Equipment Purchase", "desired_amount": "$100,000"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["down_payment"] == 10000
    assert data["proposed_loan"] == 90000
    assert data["estimated_payment"] == 1980
    assert data["annualized_loan"] == 23760


def test_loan_terms_unknown_purpose(client: TestClient):
    response = client.post("/v1/calculators/loan-terms", json={"loan_purpose": "Yacht", "desired_amount": 1000})
    assert response.status_code == 404


def test_loan_purposes_endpoint(client: TestClient):
    response = client.get("/v1/calculators/loan-purposes")

    assert response.status_code == 200
    titles = [p["title"] for p in response.json()]
    assert "Line of Credit" in titles
    assert len(titles) == 9
