"""
PayMaster - Income Tax Calculator

Progressive annual income tax and provident fund (PF) calculation used by
the payroll engine.

Annual Income Tax Bands (slab width 400,000):
- 0 - 400,000: 0%
- 400,001 - 800,000: 5%
- 800,001 - 1,200,000: 10%
- 1,200,001 - 1,600,000: 15%
- 1,600,001 - 2,000,000: 20%
- 2,000,001 - 2,400,000: 25%
- Above 2,400,000: 30%

Each band taxes only the income inside it. Income exactly on a boundary
belongs to the lower band.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional


TWO_PLACES = Decimal("0.01")
MONTHS_PER_YEAR = 12

# Used when neither the salary structure nor the policy supplies a PF rate
DEFAULT_PF_PERCENT = Decimal("12")


def quantize_money(amount: Decimal) -> Decimal:
    """Round a monetary amount to 2 decimal places (half up)."""
    return Decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class TaxBand:
    """Tax band definition."""
    lower: Decimal
    upper: Optional[Decimal]
    rate: Decimal

    def calculate_tax(self, annual_income: Decimal) -> Decimal:
        """Calculate tax for the part of the income inside this band."""
        if annual_income <= self.lower:
            return Decimal("0")

        if self.upper is None:
            # Top band (no upper limit)
            taxable_in_band = annual_income - self.lower
        else:
            taxable_in_band = min(annual_income, self.upper) - self.lower

        return taxable_in_band * (self.rate / 100)


INCOME_TAX_BANDS = [
    TaxBand(Decimal("0"), Decimal("400000"), Decimal("0")),
    TaxBand(Decimal("400000"), Decimal("800000"), Decimal("5")),
    TaxBand(Decimal("800000"), Decimal("1200000"), Decimal("10")),
    TaxBand(Decimal("1200000"), Decimal("1600000"), Decimal("15")),
    TaxBand(Decimal("1600000"), Decimal("2000000"), Decimal("20")),
    TaxBand(Decimal("2000000"), Decimal("2400000"), Decimal("25")),
    TaxBand(Decimal("2400000"), None, Decimal("30")),
]


def resolve_pf_percent(*candidates: Optional[Decimal]) -> Decimal:
    """
    Return the first PF percentage that is present.

    Candidates are checked in order (salary structure, policy, configured
    default); the built-in 12% applies when none is set. Zero is a valid rate.
    """
    for candidate in candidates:
        if candidate is not None:
            return Decimal(candidate)
    return DEFAULT_PF_PERCENT


@dataclass(frozen=True)
class PayComputation:
    """Monthly pay figures for one employee and period."""
    gross_pay: Decimal
    employee_pf: Decimal
    employer_pf: Decimal
    annual_gross: Decimal
    annual_tax: Decimal
    income_tax: Decimal
    net_pay: Decimal
    pf_percent: Decimal


class IncomeTaxCalculator:
    """
    Income tax and PF calculator.

    All arithmetic is done in Decimal. Stored amounts are rounded to 2
    places and net pay is derived from the rounded parts, so
    net_pay == gross_pay - employee_pf - income_tax holds exactly.
    """

    def __init__(self, tax_bands: List[TaxBand] = None):
        self.tax_bands = tax_bands or INCOME_TAX_BANDS

    def calculate_annual_tax(self, annual_income: Decimal) -> Decimal:
        """Exact progressive tax on annual gross income (unrounded)."""
        annual_income = Decimal(annual_income)
        total_tax = Decimal("0")
        for band in self.tax_bands:
            total_tax += band.calculate_tax(annual_income)
        return total_tax

    def calculate_monthly_tax(self, monthly_gross: Decimal) -> Decimal:
        """Monthly tax deduction: annual tax on gross * 12, spread over 12 months."""
        annual_tax = self.calculate_annual_tax(Decimal(monthly_gross) * MONTHS_PER_YEAR)
        return quantize_money(annual_tax / MONTHS_PER_YEAR)

    def compute_pay(
        self,
        basic_pay: Decimal,
        hra: Optional[Decimal] = None,
        allowances: Optional[Decimal] = None,
        benefit_total: Decimal = Decimal("0"),
        salary_pf_percent: Optional[Decimal] = None,
        policy_pf_percent: Optional[Decimal] = None,
        default_pf_percent: Optional[Decimal] = None,
    ) -> PayComputation:
        """
        Compute the monthly payroll figures.

        gross       = basic + hra + allowances + benefits
        employee PF = basic * pf_rate
        employer PF = basic * pf_rate
        income tax  = annual_tax(gross * 12) / 12
        net         = gross - employee PF - income tax
        """
        basic_pay = Decimal(basic_pay)
        gross = quantize_money(
            basic_pay
            + (Decimal(hra) if hra is not None else Decimal("0"))
            + (Decimal(allowances) if allowances is not None else Decimal("0"))
            + Decimal(benefit_total)
        )

        pf_percent = resolve_pf_percent(salary_pf_percent, policy_pf_percent, default_pf_percent)
        pf_rate = pf_percent / 100
        employee_pf = quantize_money(basic_pay * pf_rate)
        # Employer share mirrors the employee share
        employer_pf = quantize_money(basic_pay * pf_rate)

        annual_gross = gross * MONTHS_PER_YEAR
        annual_tax = self.calculate_annual_tax(annual_gross)
        income_tax = self.calculate_monthly_tax(gross)

        net_pay = gross - employee_pf - income_tax

        return PayComputation(
            gross_pay=gross,
            employee_pf=employee_pf,
            employer_pf=employer_pf,
            annual_gross=annual_gross,
            annual_tax=quantize_money(annual_tax),
            income_tax=income_tax,
            net_pay=net_pay,
            pf_percent=pf_percent,
        )
