"""
PayMaster - Tax Calculator Tests

Unit tests for the progressive income tax bands and payroll computation.
"""

import pytest
from decimal import Decimal

from paymaster.services.tax_calculators import (
    DEFAULT_PF_PERCENT,
    IncomeTaxCalculator,
    calculate_annual_tax,
    quantize_money,
    resolve_pf_percent,
)


class TestIncomeTaxBands:
    """Test the 400,000-wide progressive bands."""

    @pytest.mark.parametrize("annual_income,expected", [
        (Decimal("0"), Decimal("0")),
        (Decimal("400000"), Decimal("0")),
        (Decimal("800000"), Decimal("20000")),
        (Decimal("1200000"), Decimal("60000")),
        (Decimal("1600000"), Decimal("120000")),
        (Decimal("2000000"), Decimal("200000")),
        (Decimal("2400000"), Decimal("300000")),
    ])
    def test_tax_at_band_boundaries(self, annual_income, expected):
        """Income exactly on a boundary is taxed entirely by the lower bands."""
        assert calculate_annual_tax(annual_income) == expected

    def test_first_unit_above_exemption_is_taxed_at_5_percent(self):
        assert calculate_annual_tax(Decimal("400001")) == Decimal("0.05")

    def test_top_band_is_30_percent_of_excess(self):
        """Above 2,400,000 every extra unit costs 30%."""
        assert calculate_annual_tax(Decimal("2500000")) == Decimal("330000")

    def test_tax_is_monotonic(self):
        calculator = IncomeTaxCalculator()
        incomes = [Decimal(n) for n in range(0, 3_000_001, 150_000)]
        taxes = [calculator.calculate_annual_tax(i) for i in incomes]

        assert taxes == sorted(taxes)

    def test_monthly_tax_spreads_annual_tax(self):
        calculator = IncomeTaxCalculator()

        assert calculator.calculate_monthly_tax(Decimal("65000")) == Decimal("1583.33")


class TestPFResolution:
    """Test PF rate fallback order."""

    def test_salary_rate_wins(self):
        assert resolve_pf_percent(Decimal("8"), Decimal("10"), Decimal("12")) == Decimal("8")

    def test_policy_rate_used_when_salary_has_none(self):
        assert resolve_pf_percent(None, Decimal("10"), Decimal("12")) == Decimal("10")

    def test_builtin_default_when_nothing_set(self):
        assert resolve_pf_percent(None, None, None) == DEFAULT_PF_PERCENT == Decimal("12")

    def test_zero_is_a_valid_rate(self):
        assert resolve_pf_percent(Decimal("0"), Decimal("10")) == Decimal("0")


class TestComputePay:
    """Test the monthly payroll figures."""

    def test_reference_salary(self):
        """basic 50,000 + HRA 10,000 + allowances 5,000 at 12% PF."""
        result = IncomeTaxCalculator().compute_pay(
            basic_pay=Decimal("50000"),
            hra=Decimal("10000"),
            allowances=Decimal("5000"),
            salary_pf_percent=Decimal("12"),
        )

        assert result.gross_pay == Decimal("65000.00")
        assert result.employee_pf == Decimal("6000.00")
        assert result.employer_pf == Decimal("6000.00")
        assert result.annual_gross == Decimal("780000.00")
        assert result.income_tax == Decimal("1583.33")
        assert result.net_pay == Decimal("57416.67")

    def test_net_pay_is_gross_minus_deductions(self):
        result = IncomeTaxCalculator().compute_pay(
            basic_pay=Decimal("123456.78"),
            hra=Decimal("9876.54"),
            allowances=Decimal("333.33"),
            salary_pf_percent=Decimal("11.5"),
        )

        assert result.net_pay == result.gross_pay - result.employee_pf - result.income_tax
        assert result.net_pay == quantize_money(result.net_pay)

    def test_income_tax_matches_monthly_tax(self):
        calculator = IncomeTaxCalculator()
        result = calculator.compute_pay(
            basic_pay=Decimal("180000"),
            hra=Decimal("25000"),
            allowances=Decimal("7500.55"),
        )

        assert result.income_tax == calculator.calculate_monthly_tax(result.gross_pay)
        assert result.annual_tax == quantize_money(calculator.calculate_annual_tax(result.annual_gross))

    def test_benefits_count_towards_gross(self):
        result = IncomeTaxCalculator().compute_pay(
            basic_pay=Decimal("50000"),
            hra=Decimal("10000"),
            allowances=Decimal("5000"),
            benefit_total=Decimal("2000"),
            salary_pf_percent=Decimal("12"),
        )

        assert result.gross_pay == Decimal("67000.00")
        # PF is on basic pay only
        assert result.employee_pf == Decimal("6000.00")
        assert result.income_tax == Decimal("1700.00")

    def test_missing_components_are_zero(self):
        result = IncomeTaxCalculator().compute_pay(basic_pay=Decimal("30000"))

        assert result.gross_pay == Decimal("30000.00")
        assert result.pf_percent == Decimal("12")
        assert result.employee_pf == Decimal("3600.00")
        assert result.income_tax == Decimal("0.00")
        assert result.net_pay == Decimal("26400.00")

    def test_policy_rate_applies_without_salary_rate(self):
        result = IncomeTaxCalculator().compute_pay(
            basic_pay=Decimal("50000"),
            policy_pf_percent=Decimal("10"),
            default_pf_percent=Decimal("12"),
        )

        assert result.pf_percent == Decimal("10")
        assert result.employee_pf == Decimal("5000.00")

    def test_zero_salary(self):
        result = IncomeTaxCalculator().compute_pay(basic_pay=Decimal("0"))

        assert result.gross_pay == Decimal("0.00")
        assert result.net_pay == Decimal("0.00")
