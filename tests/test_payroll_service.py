"""
PayMaster - Payroll Service Tests

Tests for payroll generation and the verify / mark-paid lifecycle.
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from paymaster.models.payroll import PaymentMode
from paymaster.services.benefit_service import BenefitService
from paymaster.services.payroll_policy_service import PayrollPolicyService
from paymaster.services.payroll_service import PayrollService
from paymaster.services.salary_service import SalaryStructureService
from paymaster.utils.error_handling import (
    DuplicatePayrollException,
    NoSalaryStructureException,
)


class TestPayrollGeneration:
    """Test generate_payroll."""

    @pytest.mark.asyncio
    async def test_generates_reference_payroll(self, db_session, test_salary, processor_user):
        payroll = await PayrollService(db_session).generate_payroll(
            test_salary.employee_id, 1, 2025, processed_by=processor_user.id
        )

        assert payroll.id is not None
        assert payroll.gross_pay == Decimal("65000.00")
        assert payroll.employee_pf == Decimal("6000.00")
        assert payroll.employer_pf == Decimal("6000.00")
        assert payroll.income_tax == Decimal("1583.33")
        assert payroll.net_pay == Decimal("57416.67")
        assert payroll.processed_by == processor_user.id
        assert payroll.processed_date is not None
        assert payroll.is_verified is False
        assert payroll.is_paid is False

    @pytest.mark.asyncio
    async def test_duplicate_period_is_rejected(self, db_session, test_salary):
        service = PayrollService(db_session)
        await service.generate_payroll(test_salary.employee_id, 1, 2025)

        with pytest.raises(DuplicatePayrollException) as exc_info:
            await service.generate_payroll(test_salary.employee_id, 1, 2025)

        assert exc_info.value.status_code == 409
        assert len(await service.get_history(test_salary.employee_id)) == 1

    @pytest.mark.asyncio
    async def test_unique_constraint_stops_concurrent_duplicate(self, db_session, test_salary, monkeypatch):
        """Two generations that both pass the existence check still yield one row."""
        employee_id = test_salary.employee_id
        service = PayrollService(db_session)

        async def never_exists(*args, **kwargs):
            return False

        monkeypatch.setattr(service, "exists", never_exists)

        first = await service.generate_payroll(employee_id, 3, 2025)
        first_id = first.id

        with pytest.raises(DuplicatePayrollException) as exc_info:
            await service.generate_payroll(employee_id, 3, 2025)

        assert exc_info.value.status_code == 409

        history = await service.get_history(employee_id)
        assert [p.id for p in history] == [first_id]

        # Session is usable again after the rollback
        april = await PayrollService(db_session).generate_payroll(employee_id, 4, 2025)
        assert april.net_pay == Decimal("57416.67")
        assert len(await service.get_history(employee_id)) == 2

    @pytest.mark.asyncio
    async def test_same_month_other_year_is_allowed(self, db_session, test_salary):
        service = PayrollService(db_session)
        await service.generate_payroll(test_salary.employee_id, 1, 2025)
        await service.generate_payroll(test_salary.employee_id, 1, 2026)

        assert len(await service.get_history(test_salary.employee_id)) == 2

    @pytest.mark.asyncio
    async def test_missing_salary_structure(self, db_session, test_employee):
        with pytest.raises(NoSalaryStructureException) as exc_info:
            await PayrollService(db_session).generate_payroll(test_employee.id, 1, 2025)

        assert exc_info.value.status_code == 422
        assert exc_info.value.details["employee_id"] == str(test_employee.id)

    @pytest.mark.asyncio
    async def test_duplicate_checked_before_salary(self, db_session, test_salary):
        """An existing payroll wins over a later salary lookup problem."""
        service = PayrollService(db_session)
        await service.generate_payroll(test_salary.employee_id, 2, 2025)

        await db_session.delete(test_salary)
        await db_session.commit()

        with pytest.raises(DuplicatePayrollException):
            await service.generate_payroll(test_salary.employee_id, 2, 2025)

    @pytest.mark.asyncio
    async def test_uses_latest_salary_structure(self, db_session, test_salary):
        await SalaryStructureService(db_session).assign({
            "employee_id": test_salary.employee_id,
            "basic_pay": Decimal("60000"),
            "hra": Decimal("0"),
            "allowances": Decimal("0"),
            "pf_percentage": Decimal("10"),
            "effective_from": date(2025, 1, 1),
        })

        payroll = await PayrollService(db_session).generate_payroll(test_salary.employee_id, 3, 2025)

        assert payroll.gross_pay == Decimal("60000.00")
        assert payroll.employee_pf == Decimal("6000.00")

    @pytest.mark.asyncio
    async def test_policy_rate_used_when_salary_has_none(self, db_session, test_employee):
        await SalaryStructureService(db_session).assign({
            "employee_id": test_employee.id,
            "basic_pay": Decimal("50000"),
            "effective_from": date(2024, 1, 1),
        })
        await PayrollPolicyService(db_session).set_policy(Decimal("10"))

        payroll = await PayrollService(db_session).generate_payroll(test_employee.id, 1, 2025)

        assert payroll.employee_pf == Decimal("5000.00")
        assert payroll.employer_pf == Decimal("5000.00")

    @pytest.mark.asyncio
    async def test_default_rate_without_salary_rate_or_policy(self, db_session, test_employee):
        await SalaryStructureService(db_session).assign({
            "employee_id": test_employee.id,
            "basic_pay": Decimal("50000"),
            "effective_from": date(2024, 1, 1),
        })

        payroll = await PayrollService(db_session).generate_payroll(test_employee.id, 1, 2025)

        assert payroll.employee_pf == Decimal("6000.00")

    @pytest.mark.asyncio
    async def test_benefits_included_at_generation_only(self, db_session, test_salary):
        benefits = BenefitService(db_session)
        benefit = await benefits.add({
            "employee_id": test_salary.employee_id,
            "benefit_type": "Meal Allowance",
            "amount": Decimal("2000"),
        })

        service = PayrollService(db_session)
        payroll = await service.generate_payroll(test_salary.employee_id, 4, 2025)
        assert payroll.gross_pay == Decimal("67000.00")

        # Later benefit changes do not touch generated payrolls
        await benefits.update(benefit.id, {"amount": Decimal("9000")})
        stored = await service.get_by_period(test_salary.employee_id, 4, 2025)
        assert stored.gross_pay == Decimal("67000.00")

    @pytest.mark.asyncio
    async def test_net_pay_identity(self, db_session, test_salary):
        payroll = await PayrollService(db_session).generate_payroll(test_salary.employee_id, 5, 2025)

        assert payroll.net_pay == payroll.gross_pay - payroll.employee_pf - payroll.income_tax


class TestPayrollLifecycle:
    """Test verify and mark-paid transitions."""

    @pytest.mark.asyncio
    async def test_verify_then_pay(self, db_session, test_salary, manager_user, processor_user):
        service = PayrollService(db_session)
        payroll = await service.generate_payroll(test_salary.employee_id, 1, 2025)

        assert await service.verify_payroll(payroll.id, manager_user.id) is True
        assert await service.mark_as_paid(payroll.id, PaymentMode.BANK_TRANSFER, processor_user.id) is True

        stored = await service.get_payroll(payroll.id)
        assert stored.is_verified is True
        assert stored.verified_by == manager_user.id
        assert stored.verified_date is not None
        assert stored.is_paid is True
        assert stored.paid_by == processor_user.id
        assert stored.paid_date is not None
        assert stored.payment_mode == PaymentMode.BANK_TRANSFER

    @pytest.mark.asyncio
    async def test_verify_twice_declined(self, db_session, test_salary, manager_user, admin_user):
        service = PayrollService(db_session)
        payroll = await service.generate_payroll(test_salary.employee_id, 1, 2025)

        assert await service.verify_payroll(payroll.id, manager_user.id) is True
        assert await service.verify_payroll(payroll.id, admin_user.id) is False

        stored = await service.get_payroll(payroll.id)
        assert stored.verified_by == manager_user.id

    @pytest.mark.asyncio
    async def test_pay_before_verify_declined(self, db_session, test_salary, processor_user):
        service = PayrollService(db_session)
        payroll = await service.generate_payroll(test_salary.employee_id, 1, 2025)

        assert await service.mark_as_paid(payroll.id, PaymentMode.CASH, processor_user.id) is False

        stored = await service.get_payroll(payroll.id)
        assert stored.is_paid is False
        assert stored.payment_mode is None

    @pytest.mark.asyncio
    async def test_pay_twice_declined(self, db_session, test_salary, manager_user, processor_user):
        service = PayrollService(db_session)
        payroll = await service.generate_payroll(test_salary.employee_id, 1, 2025)
        await service.verify_payroll(payroll.id, manager_user.id)

        assert await service.mark_as_paid(payroll.id, PaymentMode.CHEQUE, processor_user.id) is True
        assert await service.mark_as_paid(payroll.id, PaymentMode.CASH, processor_user.id) is False

        stored = await service.get_payroll(payroll.id)
        assert stored.payment_mode == PaymentMode.CHEQUE

    @pytest.mark.asyncio
    async def test_unknown_payroll_declined(self, db_session, admin_user):
        service = PayrollService(db_session)

        assert await service.verify_payroll(uuid4(), admin_user.id) is False
        assert await service.mark_as_paid(uuid4(), PaymentMode.CASH, admin_user.id) is False


class TestPayrollQueries:
    """Test history and detail queries."""

    @pytest.mark.asyncio
    async def test_history_most_recent_first(self, db_session, test_salary):
        service = PayrollService(db_session)
        for month, year in [(11, 2024), (2, 2025), (12, 2024), (1, 2025)]:
            await service.generate_payroll(test_salary.employee_id, month, year)

        history = await service.get_history(test_salary.employee_id)

        assert [(p.year, p.month) for p in history] == [(2025, 2), (2025, 1), (2024, 12), (2024, 11)]

    @pytest.mark.asyncio
    async def test_get_by_period_missing(self, db_session, test_employee):
        assert await PayrollService(db_session).get_by_period(test_employee.id, 1, 2025) is None

    @pytest.mark.asyncio
    async def test_all_details_resolves_names(self, db_session, test_salary, processor_user, manager_user):
        service = PayrollService(db_session)
        verified = await service.generate_payroll(
            test_salary.employee_id, 1, 2025, processed_by=processor_user.id
        )
        await service.verify_payroll(verified.id, manager_user.id)
        await service.generate_payroll(test_salary.employee_id, 2, 2025, processed_by=processor_user.id)

        details = await service.get_all_details()

        assert len(details) == 2
        latest, earlier = details
        assert latest["payroll"].month == 2
        assert latest["employee_name"] == "Ada Lovelace"
        assert latest["processed_by_name"] == "processor"
        assert latest["verified_by_name"] is None
        assert earlier["verified_by_name"] == "manager"
