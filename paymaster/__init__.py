"""
PayMaster - Payroll & HR Administration API

FastAPI backend for employees, salary structures, benefits, timesheets,
leave requests, payroll processing and audit logging.
"""

__version__ = "0.1.0"
