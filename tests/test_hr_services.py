"""
PayMaster - HR Service Tests

Tests for employees, salary structures, benefits, policies, timesheets,
leave requests and audit logging.
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from paymaster.models.audit import AuditAction
from paymaster.models.leave import LeaveStatus
from paymaster.services.audit_service import AuditService
from paymaster.services.benefit_service import BenefitService
from paymaster.services.employee_service import EmployeeService
from paymaster.services.leave_service import LeaveService
from paymaster.services.payroll_policy_service import PayrollPolicyService
from paymaster.services.salary_service import SalaryStructureService
from paymaster.services.timesheet_service import TimesheetService
from paymaster.utils.error_handling import (
    BusinessRuleException,
    DuplicateEntryException,
    EmployeeNotFoundException,
    InvalidDateRangeException,
    NotFoundException,
)


# ===========================================
# EMPLOYEES
# ===========================================

class TestEmployeeService:
    """Test employee records."""

    @pytest.mark.asyncio
    async def test_add_employee(self, db_session, admin_user, manager_employee):
        employee = await EmployeeService(db_session).add({
            "user_id": admin_user.id,
            "first_name": "Alan",
            "last_name": "Turing",
            "email": "alan.turing@example.com",
            "department": "Research",
            "manager_id": manager_employee.id,
        })

        assert employee.id is not None
        assert employee.full_name == "Alan Turing"
        assert employee.date_of_joining == date.today()

    @pytest.mark.asyncio
    async def test_add_employee_twice_for_same_user(self, db_session, test_employee, employee_user):
        with pytest.raises(DuplicateEntryException):
            await EmployeeService(db_session).add({
                "user_id": employee_user.id,
                "first_name": "Ada",
                "last_name": "Again",
                "email": "ada.again@example.com",
            })

    @pytest.mark.asyncio
    async def test_add_employee_unknown_user(self, db_session):
        with pytest.raises(NotFoundException):
            await EmployeeService(db_session).add({
                "user_id": uuid4(),
                "first_name": "Nobody",
                "last_name": "Here",
                "email": "nobody@example.com",
            })

    @pytest.mark.asyncio
    async def test_add_employee_unknown_manager(self, db_session, admin_user):
        with pytest.raises(NotFoundException):
            await EmployeeService(db_session).add({
                "user_id": admin_user.id,
                "first_name": "Alan",
                "last_name": "Turing",
                "email": "alan.turing@example.com",
                "manager_id": uuid4(),
            })

    @pytest.mark.asyncio
    async def test_search_by_name_is_case_insensitive(self, db_session, test_employee, other_employee):
        results = await EmployeeService(db_session).search(name="LOVE")

        assert [e.id for e in results] == [test_employee.id]

    @pytest.mark.asyncio
    async def test_search_filters_combine(self, db_session, test_employee, manager_employee, other_employee):
        service = EmployeeService(db_session)

        engineering = await service.search(department="engineering")
        assert {e.id for e in engineering} == {test_employee.id, manager_employee.id}

        reports = await service.search(department="Engineering", manager_id=manager_employee.id)
        assert [e.id for e in reports] == [test_employee.id]

        assert await service.search(name="ada", department="Finance") == []

    @pytest.mark.asyncio
    async def test_update_employee(self, db_session, test_employee):
        updated = await EmployeeService(db_session).update(
            test_employee.id, {"designation": "Staff Engineer", "department": None}
        )

        assert updated.designation == "Staff Engineer"
        assert updated.department == "Engineering"

    @pytest.mark.asyncio
    async def test_employee_cannot_manage_self(self, db_session, test_employee):
        with pytest.raises(BusinessRuleException):
            await EmployeeService(db_session).update(test_employee.id, {"manager_id": test_employee.id})

    @pytest.mark.asyncio
    async def test_update_unknown_employee(self, db_session):
        with pytest.raises(EmployeeNotFoundException):
            await EmployeeService(db_session).update(uuid4(), {"designation": "Ghost"})

    @pytest.mark.asyncio
    async def test_update_personal_info(self, db_session, test_employee, employee_user):
        updated = await EmployeeService(db_session).update_personal_info(
            employee_user.id, phone="+44 20 0000 1111", address="12 Analytical Row"
        )

        assert updated.id == test_employee.id
        assert updated.phone == "+44 20 0000 1111"
        assert updated.address == "12 Analytical Row"
        assert updated.email == "ada.lovelace@example.com"

    @pytest.mark.asyncio
    async def test_update_personal_info_without_employee_record(self, db_session, admin_user):
        assert await EmployeeService(db_session).update_personal_info(admin_user.id, phone="1") is None


# ===========================================
# SALARY, BENEFITS, POLICY
# ===========================================

class TestSalaryStructureService:
    """Test salary assignment and history."""

    @pytest.mark.asyncio
    async def test_latest_is_newest_effective_date(self, db_session, test_salary):
        service = SalaryStructureService(db_session)
        raise_ = await service.assign({
            "employee_id": test_salary.employee_id,
            "basic_pay": Decimal("55000"),
            "effective_from": date(2025, 4, 1),
        })

        assert (await service.latest_for(test_salary.employee_id)).id == raise_.id
        history = await service.history_for(test_salary.employee_id)
        assert [s.id for s in history] == [raise_.id, test_salary.id]

    @pytest.mark.asyncio
    async def test_no_salary(self, db_session, test_employee):
        assert await SalaryStructureService(db_session).latest_for(test_employee.id) is None

    @pytest.mark.asyncio
    async def test_assign_unknown_employee(self, db_session):
        with pytest.raises(EmployeeNotFoundException):
            await SalaryStructureService(db_session).assign({
                "employee_id": uuid4(),
                "basic_pay": Decimal("1000"),
                "effective_from": date(2025, 1, 1),
            })


class TestBenefitService:
    """Test benefit CRUD and totals."""

    @pytest.mark.asyncio
    async def test_total_sums_all_benefits(self, db_session, test_employee):
        service = BenefitService(db_session)
        assert await service.total_for(test_employee.id) == Decimal("0")

        await service.add({"employee_id": test_employee.id, "benefit_type": "Meal", "amount": Decimal("1500.50")})
        await service.add({"employee_id": test_employee.id, "benefit_type": "Transport", "amount": Decimal("499.50")})

        assert await service.total_for(test_employee.id) == Decimal("2000")

    @pytest.mark.asyncio
    async def test_update_and_delete(self, db_session, test_employee):
        service = BenefitService(db_session)
        benefit = await service.add({
            "employee_id": test_employee.id,
            "benefit_type": "Gym",
            "amount": Decimal("300"),
            "description": None,
        })
        assert benefit.assigned_date == date.today()

        updated = await service.update(benefit.id, {"amount": Decimal("350"), "benefit_type": None})
        assert updated.amount == Decimal("350")
        assert updated.benefit_type == "Gym"

        assert await service.delete(benefit.id) is True
        assert await service.delete(benefit.id) is False
        assert await service.update(benefit.id, {"amount": Decimal("1")}) is None


class TestPayrollPolicyService:
    """Test payroll policies."""

    @pytest.mark.asyncio
    async def test_latest_policy(self, db_session):
        service = PayrollPolicyService(db_session)
        assert await service.latest() is None

        await service.set_policy(Decimal("10"))
        newest = await service.set_policy(Decimal("11"), Decimal("250"))

        latest = await service.latest()
        assert latest.id == newest.id
        assert latest.default_pf_percent == Decimal("11")
        assert latest.overtime_rate_per_hour == Decimal("250")


# ===========================================
# TIMESHEETS & LEAVE
# ===========================================

class TestTimesheetService:
    """Test timesheet submission and approval."""

    @pytest.mark.asyncio
    async def test_submit_and_approve(self, db_session, test_employee, manager_employee, manager_user):
        service = TimesheetService(db_session)
        timesheet = await service.submit({
            "employee_id": test_employee.id,
            "work_date": date(2025, 1, 6),
            "hours_worked": Decimal("8"),
            "task_description": "Difference engine notes",
        })
        assert timesheet.is_approved is False

        pending = await service.pending_for_manager(manager_employee.id)
        assert [t.id for t in pending] == [timesheet.id]

        assert await service.approve(timesheet.id, manager_user.id) is True
        assert await service.approve(timesheet.id, manager_user.id) is False

        stored = await service.get(timesheet.id)
        assert stored.is_approved is True
        assert stored.approved_by == manager_user.id
        assert await service.pending_for_manager(manager_employee.id) == []

    @pytest.mark.asyncio
    async def test_approve_unknown(self, db_session, manager_user):
        assert await TimesheetService(db_session).approve(uuid4(), manager_user.id) is False

    @pytest.mark.asyncio
    async def test_submit_unknown_employee(self, db_session):
        with pytest.raises(EmployeeNotFoundException):
            await TimesheetService(db_session).submit({
                "employee_id": uuid4(),
                "work_date": date(2025, 1, 6),
                "hours_worked": Decimal("8"),
            })

    @pytest.mark.asyncio
    async def test_report_filters_by_date(self, db_session, test_employee):
        service = TimesheetService(db_session)
        for day in (6, 7, 8):
            await service.submit({
                "employee_id": test_employee.id,
                "work_date": date(2025, 1, day),
                "hours_worked": Decimal("7.5"),
            })

        rows = await service.report(from_date=date(2025, 1, 7), to_date=date(2025, 1, 8))

        assert [r["work_date"] for r in rows] == [date(2025, 1, 7), date(2025, 1, 8)]
        assert rows[0]["employee_name"] == "Ada Lovelace"


class TestLeaveService:
    """Test leave submission and review."""

    async def _submit(self, db_session, employee_id, start, end, leave_type="Annual"):
        return await LeaveService(db_session).submit({
            "employee_id": employee_id,
            "leave_type": leave_type,
            "start_date": start,
            "end_date": end,
            "reason": "Family visit",
        })

    @pytest.mark.asyncio
    async def test_submit_is_pending(self, db_session, test_employee):
        leave = await self._submit(db_session, test_employee.id, date(2025, 3, 3), date(2025, 3, 7))

        assert leave.status == LeaveStatus.PENDING
        assert leave.applied_date is not None
        assert leave.days == 5

    @pytest.mark.asyncio
    async def test_end_before_start_rejected(self, db_session, test_employee):
        with pytest.raises(InvalidDateRangeException):
            await self._submit(db_session, test_employee.id, date(2025, 3, 7), date(2025, 3, 3))

    @pytest.mark.parametrize("action,expected", [
        ("approve", LeaveStatus.APPROVED),
        ("deny", LeaveStatus.REJECTED),
        ("Reject", LeaveStatus.REJECTED),
    ])
    @pytest.mark.asyncio
    async def test_review_actions(self, db_session, test_employee, manager_user, action, expected):
        service = LeaveService(db_session)
        leave = await self._submit(db_session, test_employee.id, date(2025, 3, 3), date(2025, 3, 4))

        assert await service.review(leave.id, manager_user.id, action) is True

        stored = await service.get(leave.id)
        assert stored.status == expected
        assert stored.approved_by == manager_user.id
        assert stored.approved_date is not None

    @pytest.mark.asyncio
    async def test_review_only_once(self, db_session, test_employee, manager_user):
        service = LeaveService(db_session)
        leave = await self._submit(db_session, test_employee.id, date(2025, 3, 3), date(2025, 3, 4))

        assert await service.review(leave.id, manager_user.id, "approve") is True
        assert await service.review(leave.id, manager_user.id, "reject") is False
        assert (await service.get(leave.id)).status == LeaveStatus.APPROVED

    @pytest.mark.asyncio
    async def test_unknown_action_declined(self, db_session, test_employee, manager_user):
        service = LeaveService(db_session)
        leave = await self._submit(db_session, test_employee.id, date(2025, 3, 3), date(2025, 3, 4))

        assert await service.review(leave.id, manager_user.id, "maybe") is False
        assert (await service.get(leave.id)).status == LeaveStatus.PENDING

    @pytest.mark.asyncio
    async def test_search_by_overlap_and_status(self, db_session, test_employee, manager_user):
        service = LeaveService(db_session)
        march = await self._submit(db_session, test_employee.id, date(2025, 3, 3), date(2025, 3, 7))
        april = await self._submit(db_session, test_employee.id, date(2025, 4, 28), date(2025, 5, 2), "Sick")
        await service.review(march.id, manager_user.id, "approve")

        overlapping = await service.search(from_date=date(2025, 5, 1), to_date=date(2025, 5, 31))
        assert [r.id for r in overlapping] == [april.id]

        approved = await service.search(status=LeaveStatus.APPROVED)
        assert [r.id for r in approved] == [march.id]

        sick = await service.search(employee_id=test_employee.id, leave_type="Sick")
        assert [r.id for r in sick] == [april.id]

    @pytest.mark.asyncio
    async def test_team_pending(self, db_session, test_employee, other_employee, manager_employee):
        mine = await self._submit(db_session, test_employee.id, date(2025, 6, 2), date(2025, 6, 3))
        await self._submit(db_session, other_employee.id, date(2025, 6, 2), date(2025, 6, 3))

        pending = await LeaveService(db_session).team_pending(manager_employee.id)

        assert [r.id for r in pending] == [mine.id]


# ===========================================
# AUDIT
# ===========================================

class TestAuditService:
    """Test audit logging."""

    @pytest.mark.asyncio
    async def test_log_and_list(self, db_session, admin_user):
        service = AuditService(db_session)
        await service.log_action(admin_user.id, AuditAction.LOGIN, "first")
        await service.log_action(admin_user.id, AuditAction.GENERATE_PAYROLL, "second")

        logs = await service.list_for_user(admin_user.id)

        assert [log.action for log in logs] == ["Generate Payroll", "Login"]
        assert logs[0].description == "second"
