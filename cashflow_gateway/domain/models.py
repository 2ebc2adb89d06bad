"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class DebtCategory(str, Enum):
    """Fixed set of business debt categories collected on the debts step"""

    REAL_ESTATE = "REAL_ESTATE"
    VEHICLE_EQUIPMENT = "VEHICLE_EQUIPMENT"
    CREDIT_CARD = "CREDIT_CARD"
    LINE_OF_CREDIT = "LINE_OF_CREDIT"
    OTHER = "OTHER"

    @classmethod
    def from_label(cls, label: Any) -> Optional["DebtCategory"]:
        """Exact lookup; anything outside the enumeration is None"""
        try:
            return cls(label)
        except ValueError:
            return None

    @property
    def is_revolving(self) -> bool:
        return self in (DebtCategory.CREDIT_CARD, DebtCategory.LINE_OF_CREDIT)


@dataclass
class Debt:
    """Single business debt, amounts already parsed to numbers"""

    category: Optional[DebtCategory]  # None when the stored label is unknown
    monthly_payment: float = 0.0
    original_loan_amount: float = 0.0
    outstanding_balance: float = 0.0
    description: str = ""
    notes: str = ""


@dataclass
class CategoryTotals:
    """Sums for one debt category"""

    total_monthly_payment: float = 0.0
    total_original_loan_amount: float = 0.0
    total_outstanding_balance: float = 0.0


@dataclass
class DebtSummary:
    """Derived totals over a debt list, recomputed on every read"""

    monthly_debt_service: float
    annual_debt_service: float
    total_credit_balance: float
    total_credit_limit: float
    credit_utilization_rate: Optional[float]
    category_totals: Dict[DebtCategory, CategoryTotals]
    total_debt_service: Dict[str, float]


@dataclass
class FinancialSummary:
    """Numeric income statement for one year"""

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


@dataclass
class LoanInfo:
    """Requested loan, normalized from stored form fields"""

    business_name: str = ""
    loan_purpose: str = ""
    desired_amount: float = 0.0
    estimated_payment: float = 0.0
    annualized_loan: float = 0.0
    loan_term: int = 0  # months
    interest_rate: float = 0.0  # fraction, 0.075 == 7.5%
    down_payment_percent: float = 0.0  # whole-number percent
    down_payment_amount: float = 0.0
    proposed_loan_amount: float = 0.0


@dataclass
class CashFlowAnalysis:
    """Normalized analysis record handed to report rendering"""

    id: str
    loan_info: LoanInfo
    financials: Dict[str, Any]
    dscr: Optional[float]
    debts: Any  # list of stored debt records, or an unrecognized value passed through
    debt_summary: Optional[Dict[str, Any]] = None


@dataclass
class LoanPurpose:
    """Catalog entry with default terms for a loan purpose"""

    title: str
    description: str
    default_term: int  # months
    default_rate: float  # annual, fraction
    default_down_payment_pct: float = 0.0  # fraction


@dataclass
class LoanTerms:
    """Loan terms derived from a purpose's defaults and a desired amount"""

    loan_purpose: str
    desired_amount: float
    term: int
    interest_rate: float  # whole-number percent
    down_payment_pct: float  # fraction
    down_payment: float
    proposed_loan: float
    estimated_payment: float
    annualized_loan: float
    interest_only: bool = False


@dataclass
class ChatMessage:
    """One turn of a chat conversation"""

    role: str  # "user", "assistant" or "system"
    content: str


@dataclass
class ChatReply:
    content: str
    role: str = "assistant"
