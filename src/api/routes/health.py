"""
Service banner and health check API routes
"""

from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Depends

from services.employees_service import EmployeesService, get_employees_service

router = APIRouter()

SERVICE_NAME = "Employee Management System API"


@router.get("/")
async def service_banner():
    """Static service descriptor"""
    return {"message": SERVICE_NAME}


@router.get("/api/health")
async def health_check(
    employees_service: EmployeesService = Depends(get_employees_service)
):
    """
    Health check - reads from the employees table

    Reports 500 when the store cannot answer, so a missing table or a
    dropped connection shows up here first.
    """
    result = await employees_service.check_health()

    if not result.success:
        raise HTTPException(
            status_code=500,
            detail={
                "message": "Database health check failed",
                "error": result.error
            }
        )

    return {
        "message": "Server is running!",
        "database": "connected",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
