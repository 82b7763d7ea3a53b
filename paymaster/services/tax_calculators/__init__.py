"""
PayMaster - Tax Calculators Package

Modules:
- income_tax_service: progressive annual income tax (0%-30% in 400,000 slabs)
  and PF rate resolution
"""

from decimal import Decimal

from paymaster.services.tax_calculators.income_tax_service import (
    DEFAULT_PF_PERCENT,
    INCOME_TAX_BANDS,
    IncomeTaxCalculator,
    PayComputation,
    TaxBand,
    quantize_money,
    resolve_pf_percent,
)


# ===========================================
# CONVENIENCE FUNCTIONS
# ===========================================

def calculate_annual_tax(annual_income: Decimal) -> Decimal:
    """
    Calculate income tax on annual gross income.

    Args:
        annual_income: Annual gross income

    Returns:
        Total annual tax (unrounded)
    """
    return IncomeTaxCalculator().calculate_annual_tax(annual_income)


__all__ = [
    "DEFAULT_PF_PERCENT",
    "INCOME_TAX_BANDS",
    "IncomeTaxCalculator",
    "PayComputation",
    "TaxBand",
    "calculate_annual_tax",
    "quantize_money",
    "resolve_pf_percent",
]
