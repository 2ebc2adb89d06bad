"""Debt categorization and debt service aggregation"""

from typing import Any, Dict, Iterable, List, Mapping, Union
from cashflow_gateway.domain.models import Debt, DebtCategory, CategoryTotals, DebtSummary
from cashflow_gateway.utils.currency import parse_currency

MONTHS_PER_YEAR = 12


def parse_debt(raw: Any) -> Debt:
    """
    Build a Debt from a stored record.

    Stored records use the form's camelCase keys with formatted currency text:
        {"category": "CREDIT_CARD", "monthlyPayment": "$50", ...}

    Unknown categories become None and unreadable amounts become 0.
    """
    if isinstance(raw, Debt):
        return raw
    if not isinstance(raw, Mapping):
        return Debt(category=None)

    return Debt(
        category=DebtCategory.from_label(raw.get("category")),
        monthly_payment=parse_currency(raw.get("monthlyPayment")),
        original_loan_amount=parse_currency(raw.get("originalLoanAmount")),
        outstanding_balance=parse_currency(raw.get("outstandingBalance")),
        description=str(raw.get("description") or ""),
        notes=str(raw.get("notes") or ""),
    )


def calculate_debt_summary(
    debts: Iterable[Union[Debt, Mapping[str, Any]]],
    ytd_months: int = 0,
) -> DebtSummary:
    """
    Aggregate debts into per-category totals and overall debt service.

    Requirements:
    - Per-category sums of monthly payment, original amount, outstanding balance
    - Monthly debt service = sum of the category monthly payment subtotals
    - Annual debt service = 12 x monthly
    - Credit utilization over revolving debt (credit cards + lines of credit):
      outstanding / original, None when there is no revolving limit
    - Debts with a category outside DebtCategory are left out of every total

    Args:
        debts: Debt objects or stored debt records
        ytd_months: Months elapsed in the year-to-date period, used for the
            2025YTD debt service figure

    Example:
        [{"category": "CREDIT_CARD", "outstandingBalance": "$500",
          "originalLoanAmount": "$1000", "monthlyPayment": "$50"}]
        -> monthly 50, annual 600, utilization 0.5
    """
    parsed: List[Debt] = [parse_debt(d) for d in debts]

    category_totals: Dict[DebtCategory, CategoryTotals] = {}
    monthly_debt_service = 0.0
    total_credit_balance = 0.0
    total_credit_limit = 0.0

    for category in DebtCategory:
        in_category = [d for d in parsed if d.category is category]
        totals = CategoryTotals(
            total_monthly_payment=sum(d.monthly_payment for d in in_category),
            total_original_loan_amount=sum(d.original_loan_amount for d in in_category),
            total_outstanding_balance=sum(d.outstanding_balance for d in in_category),
        )
        category_totals[category] = totals
        monthly_debt_service += totals.total_monthly_payment

        if category.is_revolving:
            total_credit_balance += totals.total_outstanding_balance
            total_credit_limit += totals.total_original_loan_amount

    annual_debt_service = monthly_debt_service * MONTHS_PER_YEAR
    credit_utilization_rate = (
        total_credit_balance / total_credit_limit if total_credit_limit > 0 else None
    )

    return DebtSummary(
        monthly_debt_service=monthly_debt_service,
        annual_debt_service=annual_debt_service,
        total_credit_balance=total_credit_balance,
        total_credit_limit=total_credit_limit,
        credit_utilization_rate=credit_utilization_rate,
        category_totals=category_totals,
        total_debt_service={
            "2023": monthly_debt_service * MONTHS_PER_YEAR,
            "2024": monthly_debt_service * MONTHS_PER_YEAR,
            "2025YTD": monthly_debt_service * ytd_months,
        },
    )
