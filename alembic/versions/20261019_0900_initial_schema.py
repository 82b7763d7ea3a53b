"""Initial PayMaster schema

Revision ID: 20261019_0900_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates:
1. users, refresh_tokens
2. employees (self-referencing manager)
3. salary_structures, benefits, payroll_policies, payrolls
4. timesheets, leave_requests
5. audit_logs
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '20261019_0900_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    # ===========================================
    # CREATE ENUMS
    # ===========================================

    user_role_enum = postgresql.ENUM(
        'ADMIN', 'MANAGER', 'HR_MANAGER', 'PAYROLL_PROCESSOR', 'EMPLOYEE', 'SUPERVISOR',
        name='userrole',
        create_type=False
    )
    user_role_enum.create(op.get_bind(), checkfirst=True)

    payment_mode_enum = postgresql.ENUM(
        'BANK_TRANSFER', 'CASH', 'CHEQUE', 'DIGITAL_WALLET',
        name='paymentmode',
        create_type=False
    )
    payment_mode_enum.create(op.get_bind(), checkfirst=True)

    leave_status_enum = postgresql.ENUM(
        'PENDING', 'APPROVED', 'REJECTED',
        name='leavestatus',
        create_type=False
    )
    leave_status_enum.create(op.get_bind(), checkfirst=True)

    # ===========================================
    # USERS
    # ===========================================

    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', user_role_enum, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'refresh_tokens',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('token', sa.String(128), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_refresh_tokens_user_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_refresh_tokens')),
    )
    op.create_index(op.f('ix_refresh_tokens_user_id'), 'refresh_tokens', ['user_id'], unique=False)
    op.create_index(op.f('ix_refresh_tokens_token'), 'refresh_tokens', ['token'], unique=True)

    # ===========================================
    # EMPLOYEES
    # ===========================================

    op.create_table(
        'employees',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('designation', sa.String(100), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('date_of_joining', sa.Date(), nullable=False),
        sa.Column('manager_id', postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_employees_user_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['manager_id'], ['employees.id'], name=op.f('fk_employees_manager_id_employees'), ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_employees')),
        sa.UniqueConstraint('user_id', name=op.f('uq_employees_user_id')),
    )
    op.create_index(op.f('ix_employees_email'), 'employees', ['email'], unique=False)
    op.create_index(op.f('ix_employees_department'), 'employees', ['department'], unique=False)
    op.create_index(op.f('ix_employees_manager_id'), 'employees', ['manager_id'], unique=False)

    # ===========================================
    # SALARY, BENEFITS, POLICIES
    # ===========================================

    op.create_table(
        'salary_structures',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('basic_pay', sa.Numeric(18, 2), nullable=False),
        sa.Column('hra', sa.Numeric(18, 2), nullable=True, comment='House rent allowance'),
        sa.Column('allowances', sa.Numeric(18, 2), nullable=True),
        sa.Column('pf_percentage', sa.Numeric(5, 2), nullable=True,
                  comment='Provident fund rate; falls back to the latest policy'),
        sa.Column('effective_from', sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('basic_pay >= 0', name=op.f('ck_salary_structures_basic_pay_non_negative')),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], name=op.f('fk_salary_structures_employee_id_employees'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_salary_structures')),
    )
    op.create_index(op.f('ix_salary_structures_employee_id'), 'salary_structures', ['employee_id'], unique=False)

    op.create_table(
        'benefits',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('benefit_type', sa.String(100), nullable=False),
        sa.Column('amount', sa.Numeric(18, 2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('assigned_date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], name=op.f('fk_benefits_employee_id_employees'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_benefits')),
    )
    op.create_index(op.f('ix_benefits_employee_id'), 'benefits', ['employee_id'], unique=False)

    op.create_table(
        'payroll_policies',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('default_pf_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('overtime_rate_per_hour', sa.Numeric(18, 2), nullable=False),
        sa.Column('effective_from', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_payroll_policies')),
    )
    op.create_index(op.f('ix_payroll_policies_effective_from'), 'payroll_policies', ['effective_from'], unique=False)

    # ===========================================
    # PAYROLLS
    # ===========================================

    op.create_table(
        'payrolls',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('gross_pay', sa.Numeric(18, 2), nullable=False),
        sa.Column('employee_pf', sa.Numeric(18, 2), nullable=False),
        sa.Column('employer_pf', sa.Numeric(18, 2), nullable=False),
        sa.Column('income_tax', sa.Numeric(18, 2), nullable=False),
        sa.Column('net_pay', sa.Numeric(18, 2), nullable=False),
        sa.Column('processed_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('processed_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('verified_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('verified_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_paid', sa.Boolean(), nullable=False),
        sa.Column('paid_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('paid_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_mode', payment_mode_enum, nullable=True),
        *_timestamps(),
        sa.CheckConstraint('month >= 1 AND month <= 12', name=op.f('ck_payrolls_payroll_month_range')),
        sa.CheckConstraint('NOT is_paid OR is_verified', name=op.f('ck_payrolls_payroll_paid_requires_verified')),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], name=op.f('fk_payrolls_employee_id_employees'), ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['processed_by'], ['users.id'], name=op.f('fk_payrolls_processed_by_users'), ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['verified_by'], ['users.id'], name=op.f('fk_payrolls_verified_by_users'), ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['paid_by'], ['users.id'], name=op.f('fk_payrolls_paid_by_users'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_payrolls')),
        sa.UniqueConstraint('employee_id', 'month', 'year', name='uq_payroll_employee_period'),
    )
    op.create_index(op.f('ix_payrolls_employee_id'), 'payrolls', ['employee_id'], unique=False)

    # ===========================================
    # TIMESHEETS & LEAVE
    # ===========================================

    op.create_table(
        'timesheets',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('hours_worked', sa.Numeric(5, 2), nullable=False),
        sa.Column('task_description', sa.Text(), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False),
        sa.Column('approved_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('approved_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('hours_worked > 0 AND hours_worked <= 24', name=op.f('ck_timesheets_hours_worked_range')),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], name=op.f('fk_timesheets_employee_id_employees'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['approved_by'], ['users.id'], name=op.f('fk_timesheets_approved_by_users'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_timesheets')),
    )
    op.create_index(op.f('ix_timesheets_employee_id'), 'timesheets', ['employee_id'], unique=False)

    op.create_table(
        'leave_requests',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('leave_type', sa.String(50), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', leave_status_enum, nullable=False),
        sa.Column('applied_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('approved_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('approved_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('end_date >= start_date', name=op.f('ck_leave_requests_leave_date_order')),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], name=op.f('fk_leave_requests_employee_id_employees'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['approved_by'], ['users.id'], name=op.f('fk_leave_requests_approved_by_users'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_leave_requests')),
    )
    op.create_index(op.f('ix_leave_requests_employee_id'), 'leave_requests', ['employee_id'], unique=False)
    op.create_index(op.f('ix_leave_requests_status'), 'leave_requests', ['status'], unique=False)

    # ===========================================
    # AUDIT LOGS
    # ===========================================

    op.create_table(
        'audit_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_audit_logs_user_id_users'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_audit_logs')),
    )
    op.create_index(op.f('ix_audit_logs_user_id'), 'audit_logs', ['user_id'], unique=False)
    op.create_index(op.f('ix_audit_logs_action'), 'audit_logs', ['action'], unique=False)
    op.create_index(op.f('ix_audit_logs_timestamp'), 'audit_logs', ['timestamp'], unique=False)


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('leave_requests')
    op.drop_table('timesheets')
    op.drop_table('payrolls')
    op.drop_table('payroll_policies')
    op.drop_table('benefits')
    op.drop_table('salary_structures')
    op.drop_table('employees')
    op.drop_table('refresh_tokens')
    op.drop_table('users')

    op.execute("DROP TYPE IF EXISTS leavestatus")
    op.execute("DROP TYPE IF EXISTS paymentmode")
    op.execute("DROP TYPE IF EXISTS userrole")
