"""Debt Service Coverage Ratio (DSCR) calculations"""

from typing import Any, Dict, Mapping, Optional
from cashflow_gateway.utils.currency import parse_currency

# Most recent year-to-date first, then full years newest to oldest
YEAR_PRIORITY = ("2025YTD", "2024", "2023")
YEAR_PREFIX = "year"

# Most lenders want at least 1.25x coverage
LENDER_MINIMUM_DSCR = 1.25


def _year_entry(financials: Mapping[str, Any], year: str) -> Mapping[str, Any]:
    """Look a year up under its normalized ("2024") or stored ("year2024") key"""
    entry = financials.get(year)
    if entry is None:
        entry = financials.get(f"{YEAR_PREFIX}{year}")
    return entry if isinstance(entry, Mapping) else {}


def _summary_figure(financials: Mapping[str, Any], year: str, name: str) -> float:
    summary = _year_entry(financials, year).get("summary")
    if not isinstance(summary, Mapping):
        return 0.0
    return parse_currency(summary.get(name))


def calculate_dscr(
    financials: Optional[Mapping[str, Any]],
    annual_debt_service: float,
    annualized_loan_payment: float,
) -> Optional[float]:
    """
    DSCR = EBITDA / (existing annual debt service + annualized new loan payment)

    Years are scanned in YEAR_PRIORITY order and the first year with a
    positive EBITDA wins, as long as the combined debt service is positive.
    A year-to-date figure is used on its own when it is the first match.

    Returns None when no year qualifies.

    Example:
        {"year2024": {"summary": {"ebitda": 1000}}}, 0, 500 -> 2.0
    """
    if not financials:
        return None

    obligations = parse_currency(annual_debt_service) + parse_currency(annualized_loan_payment)
    if obligations <= 0:
        return None

    for year in YEAR_PRIORITY:
        ebitda = _summary_figure(financials, year, "ebitda")
        if ebitda > 0:
            return ebitda / obligations

    return None


def calculate_dscr_by_year(
    financials: Optional[Mapping[str, Any]],
    annual_debt_services: Mapping[str, Any],
    annualized_loan_payments: Mapping[str, Any],
) -> Dict[str, Optional[float]]:
    """
    Per-year DSCR from adjusted EBITDA, as shown on the review step.

    Each year uses its own debt service and loan payment figures. A year
    without positive adjusted EBITDA or positive obligations is None.
    """
    financials = financials or {}
    result: Dict[str, Optional[float]] = {}

    for year in YEAR_PRIORITY:
        adjusted_ebitda = _summary_figure(financials, year, "adjustedEbitda")
        obligations = parse_currency(annual_debt_services.get(year)) + parse_currency(
            annualized_loan_payments.get(year)
        )
        if adjusted_ebitda > 0 and obligations > 0:
            result[year] = adjusted_ebitda / obligations
        else:
            result[year] = None

    return result


def quick_dscr(
    monthly_net_income: float,
    monthly_debt_payments: float,
    estimated_loan_payment: float = 0.0,
) -> Optional[float]:
    """High-level monthly DSCR: income over existing payments plus the new loan payment"""
    total_monthly_debt = monthly_debt_payments + estimated_loan_payment
    if total_monthly_debt == 0 or monthly_net_income == 0:
        return None
    return monthly_net_income / total_monthly_debt


def dscr_band(dscr: Optional[float]) -> str:
    """
    Bucket a DSCR for logs and metrics.

    Bands:
    - none:      not computable
    - below_1.0: cash flow does not cover debt service
    - 1.0-1.25:  covers debt service, under the usual lender minimum
    - 1.25+:     meets the usual lender minimum
    """
    if dscr is None:
        return "none"
    elif dscr < 1.0:
        return "below_1.0"
    elif dscr < LENDER_MINIMUM_DSCR:
        return "1.0-1.25"
    else:
        return "1.25+"
