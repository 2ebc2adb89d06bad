"""Integration tests for the analyses endpoints"""

import json
import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from cashflow_gateway.api.dependencies import get_renderer_client
from cashflow_gateway.infrastructure.clients.renderer import RendererClient
from cashflow_gateway.infrastructure.database.repositories import AnalysisRepository


@pytest.fixture
def submission(sample_debts, sample_financials):
    """Analysis body as the multi-step form submits it"""
    return {
        "business_name": "Acme Widget Co",
        "user_id": "user_1",
        "loan_purpose": "Equipment Purchase",
        "desired_amount": 100000,
        "estimated_payment": "1980",
        "annualized_loan": "23760",
        "term": "60",
        "interest_rate": "7.0",
        "down_payment": "10000",
        "down_payment293": "10.0%",
        "proposed_loan": "90000",
        "financials": json.dumps(sample_financials),
        "debts": {"entries": sample_debts},
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "cashflow_analysis_created_total" in response.text


def test_request_id_header(client: TestClient):
    assert client.get("/health").headers["X-Request-ID"]
    assert client.get("/health", headers={"X-Request-ID": "abc-123"}).headers["X-Request-ID"] == "abc-123"


def test_create_analysis_computes_dscr(client: TestClient, submission):
    """2025YTD EBITDA 90,000 over 36,000 existing + 23,760 new debt service"""
    response = client.post("/v1/analyses", json=submission)

    assert response.status_code == 201
    data = response.json()
    assert data["analysis_id"]
    assert data["dscr"] == pytest.approx(90000 / 59760)


def test_get_analysis_normalized(client: TestClient, submission, sample_debts):
    analysis_id = client.post("/v1/analyses", json=submission).json()["analysis_id"]

    response = client.get(f"/v1/analyses/{analysis_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["analysis_id"] == analysis_id
    assert data["loan_info"]["business_name"] == "Acme Widget Co"
    assert data["loan_info"]["desired_amount"] == 100000
    assert data["loan_info"]["loan_term"] == 60
    assert data["loan_info"]["interest_rate"] == pytest.approx(0.07)
    assert data["loan_info"]["proposed_loan_amount"] == 90000
    assert set(data["financials"]) == {"2023", "2024", "2025YTD"}
    assert data["debts"] == sample_debts
    assert data["dscr_band"] == "1.25+"
    assert data["debt_summary"]["monthly_debt_service"] == 3000
    assert data["debt_summary"]["credit_utilization_rate"] == pytest.approx(0.2)


def test_get_analysis_legacy_row(client: TestClient, db: Session):
    """Older rows: bare debt list, formatted amounts, no stored DSCR or summary"""
    record = AnalysisRepository(db).create_analysis(
        {
            "business_name": "Legacy LLC",
            "desired_amount": "$250,000",
            "annualized_loan": "$30,000",
            "interest_rate": 8,
            "financials": {"year2024": {"summary": {"ebitda": "$90,000"}}},
            "debts": [{"category": "OTHER", "monthlyPayment": "$1,250"}],
        }
    )
    db.commit()

    data = client.get(f"/v1/analyses/{record.id}").json()

    assert data["loan_info"]["desired_amount"] == 250000
    assert data["loan_info"]["proposed_loan_amount"] == 250000
    assert data["loan_info"]["interest_rate"] == pytest.approx(0.08)
    assert data["debts"] == [{"category": "OTHER", "monthlyPayment": "$1,250"}]
    assert data["debt_summary"] is None
    # 90,000 / (15,000 + 30,000)
    assert data["dscr"] == pytest.approx(2.0)


def test_get_analysis_not_found(client: TestClient):
    response = client.get("/v1/analyses/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404


def test_get_analysis_invalid_id(client: TestClient):
    response = client.get("/v1/analyses/not-a-uuid")
    assert response.status_code == 400


def test_create_analysis_requires_business_name(client: TestClient):
    response = client.post("/v1/analyses", json={"desired_amount": 1000})
    assert response.status_code == 422


def test_get_debt_summary(client: TestClient, submission):
    analysis_id = client.post("/v1/analyses", json=submission).json()["analysis_id"]

    response = client.get(f"/v1/analyses/{analysis_id}/debt-summary", params={"ytd_months": 6})

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_debt_service"] == 3000
    assert data["annual_debt_service"] == 36000
    assert data["total_debt_service"] == {"2023": 36000, "2024": 36000, "2025YTD": 18000}
    assert data["category_totals"]["REAL_ESTATE"]["total_outstanding_balance"] == 250000


def test_get_debt_summary_opaque_debts(client: TestClient, db: Session):
    """Debts in an unrecognized shape summarize to zero"""
    record = AnalysisRepository(db).create_analysis(
        {"business_name": "Odd Co", "debts": {"REAL_ESTATE": "$5,000"}}
    )
    db.commit()

    data = client.get(f"/v1/analyses/{record.id}/debt-summary").json()

    assert data["monthly_debt_service"] == 0
    assert data["credit_utilization_rate"] is None


def _use_renderer(app, handler) -> None:
    renderer = RendererClient(base_url="http://renderer", transport=httpx.MockTransport(handler))
    renderer.backoff_base = 0
    app.dependency_overrides[get_renderer_client] = lambda: renderer


def test_render_report_pdf(app, client: TestClient, submission):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, content=b"%PDF-1.7 test")

    _use_renderer(app, handler)
    analysis_id = client.post("/v1/analyses", json=submission).json()["analysis_id"]

    response = client.post(f"/v1/analyses/{analysis_id}/pdf", json={"type": "debt_summary"})

    assert response.status_code == 200
    assert response.content == b"%PDF-1.7 test"
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="BusinessDebtSummary-Acme_Widget_Co.pdf"' in response.headers["content-disposition"]
    assert seen["body"]["url"].endswith(f"/report/print/{analysis_id}/debt_summary")


def test_render_report_renderer_down(app, client: TestClient, submission):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    _use_renderer(app, handler)
    analysis_id = client.post("/v1/analyses", json=submission).json()["analysis_id"]

    response = client.post(f"/v1/analyses/{analysis_id}/pdf", json={"type": "full"})
    assert response.status_code == 503


def test_render_report_not_found(app, client: TestClient):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("renderer should not be called")

    _use_renderer(app, handler)
    response = client.post("/v1/analyses/00000000-0000-0000-0000-000000000000/pdf", json={"type": "full"})
    assert response.status_code == 404
