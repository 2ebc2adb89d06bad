"""/v1/calculators - stateless debt, DSCR and loan calculators"""

from dataclasses import asdict
from typing import Any, Dict, List
from fastapi import APIRouter, Body, HTTPException

from cashflow_gateway.api.v1.schemas import (
    DebtSummaryRequest,
    DebtSummaryResponse,
    DscrRequest,
    DscrResponse,
    DscrByYearRequest,
    DscrByYearResponse,
    QuickDscrRequest,
    QuickDscrResponse,
    FinancialSummaryResponse,
    LoanTermsRequest,
    LoanTermsResponse,
    LoanPurposeSchema,
)
from cashflow_gateway.domain.debts import calculate_debt_summary
from cashflow_gateway.domain.dscr import calculate_dscr, calculate_dscr_by_year, quick_dscr, dscr_band
from cashflow_gateway.domain.exceptions import UnknownLoanPurposeError
from cashflow_gateway.domain.financials import summarize_financials
from cashflow_gateway.domain.loans import LOAN_PURPOSES, build_loan_terms, quick_payment_estimate
from cashflow_gateway.utils.currency import parse_currency

router = APIRouter(prefix="/calculators")


@router.post("/debt-summary", response_model=DebtSummaryResponse)
def debt_summary(request_body: DebtSummaryRequest):
    """Per-category totals, debt service and credit utilization for a debt list"""
    summary = calculate_debt_summary(request_body.debts, ytd_months=request_body.ytd_months)
    return DebtSummaryResponse.from_domain(summary)


@router.post("/dscr", response_model=DscrResponse)
def dscr(request_body: DscrRequest):
    """DSCR from the most recent year with positive EBITDA"""
    value = calculate_dscr(
        request_body.financials,
        request_body.annual_debt_service,
        request_body.annualized_loan_payment,
    )
    return DscrResponse(dscr=value, band=dscr_band(value))


@router.post("/dscr-by-year", response_model=DscrByYearResponse)
def dscr_by_year(request_body: DscrByYearRequest):
    """Per-year DSCR from adjusted EBITDA"""
    return DscrByYearResponse(
        dscr=calculate_dscr_by_year(
            request_body.financials,
            request_body.annual_debt_services,
            request_body.annualized_loan_payments,
        )
    )


@router.post("/quick-dscr", response_model=QuickDscrResponse)
def quick_dscr_estimate(request_body: QuickDscrRequest):
    """High-level DSCR from monthly income, monthly debt payments and a prospective loan"""
    estimated_payment = quick_payment_estimate(request_body.loan_amount, request_body.loan_purpose)
    monthly_debt = (
        request_body.real_estate_debt
        + request_body.credit_cards
        + request_body.vehicle_equipment
        + request_body.lines_of_credit
        + request_body.other_debt
    )
    value = quick_dscr(request_body.monthly_net_income, monthly_debt, estimated_payment)

    return QuickDscrResponse(
        dscr=value,
        band=dscr_band(value),
        estimated_payment=estimated_payment,
        total_monthly_debt_payments=monthly_debt,
        annual_income=request_body.monthly_net_income * 12,
    )


@router.post("/financial-summary", response_model=FinancialSummaryResponse)
def financial_summary(inputs: Dict[str, Any] = Body(..., description="One year's income statement inputs")):
    """Gross profit, EBITDA, adjusted EBITDA and net income for one year"""
    return FinancialSummaryResponse(**asdict(summarize_financials(inputs)))


@router.post("/loan-terms", response_model=LoanTermsResponse)
def loan_terms(request_body: LoanTermsRequest):
    """Default term, rate, down payment and estimated payment for a loan purpose"""
    try:
        terms = build_loan_terms(request_body.loan_purpose, parse_currency(request_body.desired_amount))
    except UnknownLoanPurposeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return LoanTermsResponse(**asdict(terms))


@router.get("/loan-purposes", response_model=List[LoanPurposeSchema])
def loan_purposes():
    return [LoanPurposeSchema(**asdict(purpose)) for purpose in LOAN_PURPOSES.values()]
