"""Pydantic schemas for API request/response validation"""

from dataclasses import asdict
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional, Union

from cashflow_gateway.domain.models import CashFlowAnalysis, DebtSummary

# Stored amounts arrive either as numbers or as formatted text ("$250,000")
LooseAmount = Optional[Union[float, str]]


class AnalysisCreateRequest(BaseModel):
    """Request body for POST /v1/analyses"""

    business_name: str = Field(..., min_length=1)
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    loan_purpose: Optional[str] = None
    desired_amount: LooseAmount = None
    estimated_payment: LooseAmount = None
    annualized_loan: LooseAmount = None
    term: LooseAmount = None
    interest_rate: LooseAmount = Field(None, description="Whole-number percent, e.g. 7.5")
    down_payment: LooseAmount = None
    down_payment293: LooseAmount = Field(None, description="Down payment percent, e.g. '10.0%'")
    proposed_loan: LooseAmount = None
    financials: Optional[Any] = Field(None, description="Year-keyed object or its JSON text")
    debts: Optional[Any] = Field(None, description="Debt list or {'entries': [...]}")
    debt_summary: Optional[Dict[str, Any]] = None
    dscr: Optional[float] = None
    status: Optional[str] = None


class AnalysisCreatedResponse(BaseModel):
    """Response for POST /v1/analyses"""

    analysis_id: str
    dscr: Optional[float] = None


class LoanInfoSchema(BaseModel):
    business_name: str
    loan_purpose: str
    desired_amount: float
    estimated_payment: float
    annualized_loan: float
    loan_term: int
    interest_rate: float
    down_payment_percent: float
    down_payment_amount: float
    proposed_loan_amount: float


class AnalysisResponse(BaseModel):
    """Response for GET /v1/analyses/{analysis_id}"""

    analysis_id: str
    loan_info: LoanInfoSchema
    financials: Dict[str, Any]
    dscr: Optional[float] = None
    dscr_band: str
    debts: Optional[Any] = None
    debt_summary: Optional[Dict[str, Any]] = None

    @classmethod
    def from_domain(cls, analysis: CashFlowAnalysis, band: str) -> "AnalysisResponse":
        return cls(
            analysis_id=analysis.id,
            loan_info=LoanInfoSchema(**asdict(analysis.loan_info)),
            financials=analysis.financials,
            dscr=analysis.dscr,
            dscr_band=band,
            debts=analysis.debts,
            debt_summary=analysis.debt_summary,
        )


class CategoryTotalsSchema(BaseModel):
    total_monthly_payment: float
    total_original_loan_amount: float
    total_outstanding_balance: float


class DebtSummaryResponse(BaseModel):
    """Debt summary, per-category keys are the DebtCategory values"""

    monthly_debt_service: float
    annual_debt_service: float
    total_credit_balance: float
    total_credit_limit: float
    credit_utilization_rate: Optional[float] = None
    category_totals: Dict[str, CategoryTotalsSchema]
    total_debt_service: Dict[str, float]

    @classmethod
    def from_domain(cls, summary: DebtSummary) -> "DebtSummaryResponse":
        return cls(
            monthly_debt_service=summary.monthly_debt_service,
            annual_debt_service=summary.annual_debt_service,
            total_credit_balance=summary.total_credit_balance,
            total_credit_limit=summary.total_credit_limit,
            credit_utilization_rate=summary.credit_utilization_rate,
            category_totals={
                category.value: CategoryTotalsSchema(**asdict(totals))
                for category, totals in summary.category_totals.items()
            },
            total_debt_service=summary.total_debt_service,
        )


class DebtSummaryRequest(BaseModel):
    """Request body for POST /v1/calculators/debt-summary"""

    debts: List[Any] = Field(default_factory=list, description="Stored debt records")
    ytd_months: int = Field(0, ge=0, le=12)


class DscrRequest(BaseModel):
    """Request body for POST /v1/calculators/dscr"""

    financials: Dict[str, Any] = Field(default_factory=dict)
    annual_debt_service: float = 0.0
    annualized_loan_payment: float = 0.0


class DscrResponse(BaseModel):
    dscr: Optional[float] = None
    band: str


class DscrByYearRequest(BaseModel):
    """Request body for POST /v1/calculators/dscr-by-year"""

    financials: Dict[str, Any] = Field(default_factory=dict)
    annual_debt_services: Dict[str, float] = Field(default_factory=dict)
    annualized_loan_payments: Dict[str, float] = Field(default_factory=dict)


class DscrByYearResponse(BaseModel):
    dscr: Dict[str, Optional[float]]


class QuickDscrRequest(BaseModel):
    """Request body for POST /v1/calculators/quick-dscr, all amounts monthly"""

    monthly_net_income: float = Field(0.0, ge=0, le=10_000_000)
    real_estate_debt: float = Field(0.0, ge=0, le=10_000_000)
    credit_cards: float = Field(0.0, ge=0, le=10_000_000)
    vehicle_equipment: float = Field(0.0, ge=0, le=10_000_000)
    lines_of_credit: float = Field(0.0, ge=0, le=10_000_000)
    other_debt: float = Field(0.0, ge=0, le=10_000_000)
    loan_purpose: str = "Working Capital"
    loan_amount: float = Field(0.0, ge=0, le=10_000_000)


class QuickDscrResponse(BaseModel):
    dscr: Optional[float] = None
    band: str
    estimated_payment: float
    total_monthly_debt_payments: float
    annual_income: float


class FinancialSummaryResponse(BaseModel):
    """Response for POST /v1/calculators/financial-summary"""

    revenue: float
    cogs: float
    operating_expenses: float
    gross_profit: float
    ebitda: float
    adjusted_ebitda: float
    net_income: float
    interest: float
    taxes: float
    expenses: float
    depreciation: float
    amortization: float
    non_recurring_income: float
    non_recurring_expenses: float


class LoanTermsRequest(BaseModel):
    """Request body for POST /v1/calculators/loan-terms"""

    loan_purpose: str = Field(..., min_length=1)
    desired_amount: Union[float, str] = Field(..., description="Number or formatted text")


class LoanTermsResponse(BaseModel):
    loan_purpose: str
    desired_amount: float
    term: int
    interest_rate: float
    down_payment_pct: float
    down_payment: float
    proposed_loan: float
    estimated_payment: float
    annualized_loan: float
    interest_only: bool


class LoanPurposeSchema(BaseModel):
    title: str
    description: str
    default_term: int
    default_rate: float
    default_down_payment_pct: float


class ChatMessageSchema(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Request body for POST /v1/chat"""

    messages: List[ChatMessageSchema]


class ChatResponse(BaseModel):
    content: str
    role: str = "assistant"


class RenderRequest(BaseModel):
    """Request body for POST /v1/analyses/{analysis_id}/pdf"""

    type: Literal["full", "debt_summary"] = "full"
