"""Rehydrate stored cash flow analyses into normalized records

Stored rows have changed shape over time: amounts appear as numbers or as
formatted currency text, the financials blob may be a JSON object or a JSON
string, and debts may be wrapped in {"entries": [...]} or stored as a bare
list. Each shape is recognized explicitly and mapped to one output form.
"""

import json
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from cashflow_gateway.domain.models import CashFlowAnalysis, LoanInfo
from cashflow_gateway.domain.debts import calculate_debt_summary
from cashflow_gateway.domain.dscr import calculate_dscr, YEAR_PREFIX
from cashflow_gateway.utils.currency import parse_currency, parse_int, parse_number, parse_percent

logger = logging.getLogger(__name__)


class DebtsShape(str, Enum):
    ENTRIES_WRAPPER = "entries_wrapper"  # {"entries": [...]}
    LIST = "list"  # [...]
    OPAQUE = "opaque"  # anything else truthy, passed through untouched
    ABSENT = "absent"


class FinancialsShape(str, Enum):
    MAPPING = "mapping"
    JSON_TEXT = "json_text"
    ABSENT = "absent"


def classify_debts_shape(raw: Any) -> DebtsShape:
    if isinstance(raw, Mapping) and isinstance(raw.get("entries"), list):
        return DebtsShape.ENTRIES_WRAPPER
    if isinstance(raw, list):
        return DebtsShape.LIST
    if raw:
        return DebtsShape.OPAQUE
    return DebtsShape.ABSENT


def resolve_debts(raw: Any) -> Any:
    """
    Unwrap the stored debts column.

    Returns the inner list for {"entries": [...]}, the list itself for a bare
    list, the value unchanged for any other truthy value, None otherwise.
    """
    shape = classify_debts_shape(raw)
    if shape is DebtsShape.ENTRIES_WRAPPER:
        return raw["entries"]
    if shape is DebtsShape.ABSENT:
        return None
    return raw


def classify_financials_shape(raw: Any) -> FinancialsShape:
    if isinstance(raw, Mapping):
        return FinancialsShape.MAPPING if raw else FinancialsShape.ABSENT
    if isinstance(raw, str) and raw.strip():
        return FinancialsShape.JSON_TEXT
    return FinancialsShape.ABSENT


def strip_year_prefix(key: str) -> str:
    """'year2025YTD' -> '2025YTD'"""
    return key[len(YEAR_PREFIX):] if key.startswith(YEAR_PREFIX) else key


def resolve_financials(raw: Any) -> Dict[str, Any]:
    """
    Decode the stored financials blob and key it by year label.

    Text that is not a JSON object yields an empty mapping.
    """
    shape = classify_financials_shape(raw)
    if shape is FinancialsShape.ABSENT:
        return {}

    if shape is FinancialsShape.JSON_TEXT:
        try:
            decoded = json.loads(raw)
        except ValueError as e:
            logger.warning("Undecodable financials blob", extra={"step": "resolve_financials", "error": str(e)})
            return {}
        if not isinstance(decoded, Mapping):
            logger.warning("Financials blob is not an object", extra={"step": "resolve_financials"})
            return {}
        raw = decoded

    return {strip_year_prefix(str(key)): value for key, value in raw.items()}


def reconstruct_loan_info(raw: Mapping[str, Any]) -> LoanInfo:
    """Normalize the stored loan request columns; interest rate is stored as a whole-number percent"""
    proposed = raw.get("proposed_loan")
    if proposed is None:
        proposed = raw.get("desired_amount")

    return LoanInfo(
        business_name=raw.get("business_name") or "",
        loan_purpose=raw.get("loan_purpose") or "",
        desired_amount=parse_currency(raw.get("desired_amount")),
        estimated_payment=parse_currency(raw.get("estimated_payment")),
        annualized_loan=parse_currency(raw.get("annualized_loan")),
        loan_term=parse_int(raw.get("term")),
        interest_rate=parse_percent(raw.get("interest_rate")) / 100,
        down_payment_percent=parse_percent(raw.get("down_payment293")),
        down_payment_amount=parse_currency(raw.get("down_payment")),
        proposed_loan_amount=parse_currency(proposed),
    )


def reconstruct_analysis(raw: Optional[Mapping[str, Any]]) -> Optional[CashFlowAnalysis]:
    """
    Build the normalized analysis from a stored row.

    Returns None when there is no row. The DSCR is the stored figure when
    there is one, otherwise it is computed from the financial years, the
    debts and the annualized loan payment.
    """
    if raw is None:
        return None

    loan_info = reconstruct_loan_info(raw)
    financials = resolve_financials(raw.get("financials"))
    debts = resolve_debts(raw.get("debts"))

    dscr = parse_number(raw.get("dscr"))
    if dscr is None:
        annual_debt_service = (
            calculate_debt_summary(debts).annual_debt_service if isinstance(debts, list) else 0.0
        )
        dscr = calculate_dscr(financials, annual_debt_service, loan_info.annualized_loan)

    debt_summary = raw.get("debt_summary")

    return CashFlowAnalysis(
        id=str(raw.get("id") or ""),
        loan_info=loan_info,
        financials=financials,
        dscr=dscr,
        debts=debts,
        debt_summary=debt_summary if isinstance(debt_summary, Mapping) else None,
    )
