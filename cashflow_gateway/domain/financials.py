"""Income statement summary from form inputs"""

from typing import Any, Mapping
from cashflow_gateway.domain.models import FinancialSummary
from cashflow_gateway.utils.currency import parse_currency


def summarize_financials(inputs: Mapping[str, Any]) -> FinancialSummary:
    """
    Turn one year's income statement inputs into numeric summary figures.

    Formulas:
    - gross profit    = revenue - cogs
    - ebitda          = gross profit - opex - depreciation - amortization
                        + non-recurring income - non-recurring expenses
    - adjusted ebitda = ebitda - non-recurring income + non-recurring expenses
    - net income      = ebitda - interest - taxes

    Blank or unreadable inputs count as 0.
    """
    revenue = parse_currency(inputs.get("revenue"))
    cogs = parse_currency(inputs.get("cogs"))
    opex = parse_currency(inputs.get("operatingExpenses"))
    depreciation = parse_currency(inputs.get("depreciation"))
    amortization = parse_currency(inputs.get("amortization"))
    non_recurring_income = parse_currency(inputs.get("nonRecurringIncome"))
    non_recurring_expenses = parse_currency(inputs.get("nonRecurringExpenses"))
    interest = parse_currency(inputs.get("interest"))
    taxes = parse_currency(inputs.get("taxes"))

    gross_profit = revenue - cogs
    ebitda = (
        gross_profit
        - opex
        - depreciation
        - amortization
        + non_recurring_income
        - non_recurring_expenses
    )
    adjusted_ebitda = ebitda - non_recurring_income + non_recurring_expenses

    return FinancialSummary(
        revenue=revenue,
        cogs=cogs,
        operating_expenses=opex,
        gross_profit=gross_profit,
        ebitda=ebitda,
        adjusted_ebitda=adjusted_ebitda,
        net_income=ebitda - interest - taxes,
        interest=interest,
        taxes=taxes,
        expenses=opex,
        depreciation=depreciation,
        amortization=amortization,
        non_recurring_income=non_recurring_income,
        non_recurring_expenses=non_recurring_expenses,
    )
