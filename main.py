"""
PayMaster - FastAPI Application Entry Point

This is the main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paymaster import __version__
from paymaster.config import settings
from paymaster.database import init_db, close_db
from paymaster.utils.error_handling import setup_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.app_env}")

    # Initialize database (dev only - use migrations in production)
    if settings.is_development:
        await init_db()
        logger.info("Database tables initialized")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Payroll and HR management API: employees, salary structures, payroll processing, timesheets and leave",
    version=__version__,
    docs_url="/api/docs" if settings.is_development else None,
    redoc_url="/api/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Standardized error responses
setup_exception_handlers(app)


# ===========================================
# API ROUTES
# ===========================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "database": "connected",
    }


@app.get("/api/v1")
async def api_root():
    """API v1 root endpoint."""
    return {
        "message": f"Welcome to {settings.app_name} API v1",
        "version": __version__,
        "endpoints": {
            "auth": "/api/v1/auth",
            "employees": "/api/v1/employees",
            "salary_structures": "/api/v1/salary-structures",
            "benefits": "/api/v1/benefits",
            "payroll_policies": "/api/v1/payroll-policies",
            "payroll": "/api/v1/payroll",
            "timesheets": "/api/v1/timesheets",
            "leave_requests": "/api/v1/leave-requests",
            "admin": "/api/v1/admin",
            "reports": "/api/v1/reports",
        }
    }


# ===========================================
# INCLUDE ROUTERS
# ===========================================

from paymaster.routers import (  # noqa: E402
    auth, employees, salary_structures, benefits, payroll_policies,
    payroll, timesheets, leave_requests, admin, reports,
)

app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(employees.router, prefix="/api/v1/employees", tags=["Employees"])
app.include_router(salary_structures.router, prefix="/api/v1/salary-structures", tags=["Salary Structures"])
app.include_router(benefits.router, prefix="/api/v1/benefits", tags=["Benefits"])
app.include_router(payroll_policies.router, prefix="/api/v1/payroll-policies", tags=["Payroll Policies"])
app.include_router(payroll.router, prefix="/api/v1/payroll", tags=["Payroll"])
app.include_router(timesheets.router, prefix="/api/v1/timesheets", tags=["Timesheets"])
app.include_router(leave_requests.router, prefix="/api/v1/leave-requests", tags=["Leave Requests"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Administration"])
app.include_router(reports.router, prefix="/api/v1/reports", tags=["Reports"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
