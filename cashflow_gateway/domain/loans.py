"""Loan purpose catalog and payment estimates"""

import math
from typing import Dict
from cashflow_gateway.domain.models import LoanPurpose, LoanTerms
from cashflow_gateway.domain.exceptions import UnknownLoanPurposeError

LINE_OF_CREDIT = "Line of Credit"

LOAN_PURPOSES: Dict[str, LoanPurpose] = {
    purpose.title: purpose
    for purpose in (
        LoanPurpose(
            title="Working Capital",
            description="To cover day-to-day operational expenses, including payroll, inventory, and other recurring costs.",
            default_term=24,
            default_rate=0.08,
        ),
        LoanPurpose(
            title="Equipment Purchase",
            description="For acquiring machinery, tools, or other business equipment to improve operations.",
            default_term=60,
            default_rate=0.07,
            default_down_payment_pct=0.1,
        ),
        LoanPurpose(
            title="Vehicle Purchase",
            description="To finance company vehicles, delivery trucks, or other business-related transportation.",
            default_term=60,
            default_rate=0.065,
            default_down_payment_pct=0.15,
        ),
        LoanPurpose(
            title="Inventory Purchase",
            description="To stock up on inventory, raw materials, or supplies for your business.",
            default_term=12,
            default_rate=0.08,
        ),
        LoanPurpose(
            title="Debt Refinancing",
            description="To consolidate existing business debts into a single loan with better terms.",
            default_term=60,
            default_rate=0.075,
        ),
        LoanPurpose(
            title="Real Estate Acquisition or Development",
            description="For purchasing, renovating, or developing commercial real estate.",
            default_term=120,
            default_rate=0.06,
            default_down_payment_pct=0.2,
        ),
        LoanPurpose(
            title="Business Acquisition",
            description="To finance the purchase of an existing business or franchise.",
            default_term=84,
            default_rate=0.075,
            default_down_payment_pct=0.2,
        ),
        LoanPurpose(
            title="Unexpected Expenses",
            description="To cover unforeseen business costs or emergency situations.",
            default_term=36,
            default_rate=0.09,
        ),
        LoanPurpose(
            title=LINE_OF_CREDIT,
            description="Flexible access to funds with interest-only payments. Draw from as needed to manage expenses or seize business opportunities.",
            default_term=12,
            default_rate=0.10,
        ),
    )
}


def amortized_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """
    Fully amortizing monthly payment.

    Args:
        principal: Loan amount
        annual_rate: Nominal yearly rate as a fraction (0.075 for 7.5%)
        term_months: Number of monthly payments

    Returns 0 when any input is 0 or the result is not finite.
    """
    if not principal or not annual_rate or not term_months:
        return 0.0

    monthly_rate = annual_rate / 12
    growth = (1 + monthly_rate) ** term_months
    payment = principal * monthly_rate * growth / (growth - 1)
    return payment if math.isfinite(payment) else 0.0


def interest_only_payment(principal: float, annual_rate: float) -> float:
    """Monthly interest on a drawn line of credit"""
    if not principal or not annual_rate:
        return 0.0
    return principal * annual_rate / 12


def get_loan_purpose(purpose: str) -> LoanPurpose:
    """
    Raises:
        UnknownLoanPurposeError: When the purpose is not in the catalog
    """
    try:
        return LOAN_PURPOSES[purpose]
    except KeyError:
        raise UnknownLoanPurposeError(f"Unknown loan purpose: {purpose}") from None


def build_loan_terms(purpose: str, desired_amount: float) -> LoanTerms:
    """
    Fill in loan terms from a purpose's defaults.

    Payments are rounded to whole dollars. Lines of credit are quoted
    interest-only; everything else amortizes the full desired amount over
    the default term.

    Example:
        "Equipment Purchase", 100000 -> down 10000, proposed 90000,
        payment 1980, annualized 23760
    """
    loan_purpose = get_loan_purpose(purpose)
    amount = max(desired_amount, 0.0)

    down_payment = round(amount * loan_purpose.default_down_payment_pct)
    interest_only = loan_purpose.title == LINE_OF_CREDIT
    if interest_only:
        payment = interest_only_payment(amount, loan_purpose.default_rate)
    else:
        payment = amortized_payment(amount, loan_purpose.default_rate, loan_purpose.default_term)
    payment = round(payment)

    return LoanTerms(
        loan_purpose=loan_purpose.title,
        desired_amount=amount,
        term=loan_purpose.default_term,
        interest_rate=round(loan_purpose.default_rate * 100, 1),
        down_payment_pct=loan_purpose.default_down_payment_pct,
        down_payment=down_payment,
        proposed_loan=amount - down_payment,
        estimated_payment=payment,
        annualized_loan=payment * 12,
        interest_only=interest_only,
    )


# The quick DSCR calculator quotes every purpose at one flat rate
QUICK_CALCULATOR_RATE = 0.075


def quick_payment_estimate(loan_amount: float, purpose: str) -> float:
    """
    Whole-dollar amortized payment at the flat quick-calculator rate over the
    purpose's default term. An unknown purpose quotes no payment.
    """
    loan_purpose = LOAN_PURPOSES.get(purpose)
    if loan_purpose is None:
        return 0.0
    return round(amortized_payment(loan_amount, QUICK_CALCULATOR_RATE, loan_purpose.default_term))
