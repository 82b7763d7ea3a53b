"""
PayMaster - Payroll Service

Payroll engine: generates monthly payroll records and moves them through
the verify and mark-paid transitions.

Generation:
1. One payroll per (employee, month, year). A second request for the same
   period fails with DuplicatePayrollException.
2. The employee must have a salary structure, otherwise
   NoSalaryStructureException.
3. The latest payroll policy is optional and only supplies the fallback
   PF rate.

Lifecycle:
    generated --verify--> verified --mark paid--> paid

Both transitions are conditional UPDATEs, so concurrent callers see at
most one winner. A declined transition returns False instead of raising.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from paymaster.config import settings
from paymaster.models.employee import Employee
from paymaster.models.payroll import Payroll, PaymentMode
from paymaster.models.user import User
from paymaster.services.benefit_service import BenefitService
from paymaster.services.payroll_policy_service import PayrollPolicyService
from paymaster.services.salary_service import SalaryStructureService
from paymaster.services.tax_calculators.income_tax_service import IncomeTaxCalculator
from paymaster.utils.error_handling import (
    DuplicatePayrollException,
    NoSalaryStructureException,
)

logger = logging.getLogger(__name__)


class PayrollService:
    """
    Payroll service for generating and processing payroll records.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tax_calculator = IncomeTaxCalculator()
        self.salary_service = SalaryStructureService(db)
        self.benefit_service = BenefitService(db)
        self.policy_service = PayrollPolicyService(db)

    # ===========================================
    # GENERATION
    # ===========================================

    async def exists(self, employee_id: uuid.UUID, month: int, year: int) -> bool:
        """Check whether a payroll has already been generated for the period."""
        result = await self.db.execute(
            select(Payroll.id).where(
                Payroll.employee_id == employee_id,
                Payroll.month == month,
                Payroll.year == year,
            )
        )
        return result.first() is not None

    async def generate_payroll(
        self,
        employee_id: uuid.UUID,
        month: int,
        year: int,
        processed_by: Optional[uuid.UUID] = None,
    ) -> Payroll:
        """
        Generate the payroll for an employee and period.

        Raises:
            DuplicatePayrollException: payroll already exists for the period
            NoSalaryStructureException: employee has no salary structure
        """
        if await self.exists(employee_id, month, year):
            logger.warning(
                f"Duplicate payroll rejected for employee {employee_id} ({month:02d}/{year})"
            )
            raise DuplicatePayrollException(employee_id, month, year)

        salary = await self.salary_service.latest_for(employee_id)
        if salary is None:
            raise NoSalaryStructureException(employee_id)

        policy = await self.policy_service.latest()
        benefit_total = await self.benefit_service.total_for(employee_id)

        computation = self.tax_calculator.compute_pay(
            basic_pay=salary.basic_pay,
            hra=salary.hra,
            allowances=salary.allowances,
            benefit_total=benefit_total,
            salary_pf_percent=salary.pf_percentage,
            policy_pf_percent=policy.default_pf_percent if policy else None,
            default_pf_percent=settings.default_pf_percent,
        )

        payroll = Payroll(
            employee_id=employee_id,
            month=month,
            year=year,
            gross_pay=computation.gross_pay,
            employee_pf=computation.employee_pf,
            employer_pf=computation.employer_pf,
            income_tax=computation.income_tax,
            net_pay=computation.net_pay,
            processed_by=processed_by,
            processed_date=datetime.now(timezone.utc),
            is_verified=False,
            is_paid=False,
        )
        self.db.add(payroll)

        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent generation for the same period
            await self.db.rollback()
            logger.warning(
                f"Duplicate payroll rejected by constraint for employee {employee_id} ({month:02d}/{year})"
            )
            raise DuplicatePayrollException(employee_id, month, year)

        await self.db.refresh(payroll)

        logger.info(
            f"Generated payroll {payroll.id} for employee {employee_id} ({month:02d}/{year}): "
            f"gross={computation.gross_pay} pf={computation.employee_pf} "
            f"tax={computation.income_tax} net={computation.net_pay}"
        )
        return payroll

    # ===========================================
    # LIFECYCLE
    # ===========================================

    async def verify_payroll(self, payroll_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """
        Mark a payroll as verified.

        Returns False if the payroll does not exist or is already verified.
        """
        result = await self.db.execute(
            update(Payroll)
            .where(
                Payroll.id == payroll_id,
                Payroll.is_verified == False,  # noqa: E712
            )
            .values(
                is_verified=True,
                verified_by=user_id,
                verified_date=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session="evaluate")
        )
        await self.db.commit()

        applied = result.rowcount == 1
        if applied:
            logger.info(f"Payroll {payroll_id} verified by {user_id}")
        else:
            logger.info(f"Verify declined for payroll {payroll_id}: missing or already verified")
        return applied

    async def mark_as_paid(
        self,
        payroll_id: uuid.UUID,
        payment_mode: PaymentMode,
        user_id: uuid.UUID,
    ) -> bool:
        """
        Mark a verified payroll as paid.

        Returns False if the payroll does not exist, is not verified yet or
        is already paid.
        """
        result = await self.db.execute(
            update(Payroll)
            .where(
                Payroll.id == payroll_id,
                Payroll.is_verified == True,  # noqa: E712
                Payroll.is_paid == False,  # noqa: E712
            )
            .values(
                is_paid=True,
                paid_by=user_id,
                paid_date=datetime.now(timezone.utc),
                payment_mode=PaymentMode(payment_mode),
            )
            .execution_options(synchronize_session="evaluate")
        )
        await self.db.commit()

        applied = result.rowcount == 1
        if applied:
            logger.info(f"Payroll {payroll_id} paid by {user_id} via {PaymentMode(payment_mode).value}")
        else:
            logger.info(f"Mark paid declined for payroll {payroll_id}: missing, unverified or already paid")
        return applied

    # ===========================================
    # QUERIES
    # ===========================================

    async def get_payroll(self, payroll_id: uuid.UUID) -> Optional[Payroll]:
        return await self.db.get(Payroll, payroll_id)

    async def get_by_period(
        self,
        employee_id: uuid.UUID,
        month: int,
        year: int,
    ) -> Optional[Payroll]:
        """Payroll for an employee and period, or None."""
        result = await self.db.execute(
            select(Payroll).where(
                Payroll.employee_id == employee_id,
                Payroll.month == month,
                Payroll.year == year,
            )
        )
        return result.scalar_one_or_none()

    async def get_history(self, employee_id: uuid.UUID) -> List[Payroll]:
        """All payrolls for an employee, most recent period first."""
        result = await self.db.execute(
            select(Payroll)
            .where(Payroll.employee_id == employee_id)
            .order_by(Payroll.year.desc(), Payroll.month.desc())
        )
        return list(result.scalars().all())

    async def get_all_details(self) -> List[Dict[str, Any]]:
        """
        All payrolls with employee, processor and verifier names.

        Ordered like get_history but across all employees.
        """
        processor = aliased(User)
        verifier = aliased(User)

        result = await self.db.execute(
            select(
                Payroll,
                Employee.first_name,
                Employee.last_name,
                processor.username,
                verifier.username,
            )
            .join(Employee, Payroll.employee_id == Employee.id)
            .outerjoin(processor, Payroll.processed_by == processor.id)
            .outerjoin(verifier, Payroll.verified_by == verifier.id)
            .order_by(Payroll.year.desc(), Payroll.month.desc(), Employee.last_name)
        )

        details = []
        for payroll, first_name, last_name, processed_by_name, verified_by_name in result.all():
            details.append({
                "payroll": payroll,
                "employee_name": f"{first_name} {last_name}",
                "processed_by_name": processed_by_name,
                "verified_by_name": verified_by_name,
            })
        return details
