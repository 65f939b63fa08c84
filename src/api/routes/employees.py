"""
Employee management API routes
All database access goes through the employees service.
"""

import math
from typing import Any, List, Optional
from fastapi import APIRouter, Body, HTTPException, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from models.employee import Employee, EmployeeRequest, EmployeeCreatedResponse, MessageResponse
from services.employees_service import EmployeesService, ServiceResult, get_employees_service

router = APIRouter()

EMPLOYEE_NOT_FOUND = "Employee not found"
FIELDS_REQUIRED = "All fields are required"
SALARY_NOT_NUMERIC = "Salary must be a number"


def _parse_body(payload: Any) -> Optional[EmployeeRequest]:
    """Employee fields from a JSON object body; any other body counts as absent"""
    if not isinstance(payload, dict):
        return None
    try:
        return EmployeeRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


def _validated_fields(payload: Any):
    """Return (name, salary, city) or raise 400 before the store is touched"""
    request = _parse_body(payload)
    if request is None or not request.has_required_fields():
        raise HTTPException(status_code=400, detail=FIELDS_REQUIRED)

    try:
        salary = float(request.salary)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=SALARY_NOT_NUMERIC)
    if not math.isfinite(salary):
        raise HTTPException(status_code=400, detail=SALARY_NOT_NUMERIC)

    return request.name, salary, request.city


def _raise_for_failure(result: ServiceResult, action: str):
    if result.error_type == "RESOURCE_NOT_FOUND":
        raise HTTPException(status_code=404, detail=EMPLOYEE_NOT_FOUND)
    raise HTTPException(
        status_code=500,
        detail={"error": f"Failed to {action}", "message": result.error}
    )


@router.get("", response_model=List[Employee])
async def list_employees(
    employees_service: EmployeesService = Depends(get_employees_service)
):
    """List all employees, newest first"""
    result = await employees_service.list_employees()
    if not result.success:
        _raise_for_failure(result, "fetch employees")
    return result.data


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    employees_service: EmployeesService = Depends(get_employees_service)
):
    """Get employee details"""
    result = await employees_service.get_employee(employee_id)
    if not result.success:
        _raise_for_failure(result, "fetch employee")
    return result.data[0]


@router.post("", response_model=EmployeeCreatedResponse)
async def create_employee(
    payload: Any = Body(None),
    employees_service: EmployeesService = Depends(get_employees_service)
):
    """Create a new employee"""
    name, salary, city = _validated_fields(payload)

    result = await employees_service.create_employee(name=name, salary=salary, city=city)
    if not result.success:
        _raise_for_failure(result, "create employee")

    return {
        "id": result.data[0]["id"],
        "message": "Employee created successfully"
    }


@router.put("/{employee_id}", response_model=MessageResponse)
async def update_employee(
    employee_id: str,
    payload: Any = Body(None),
    employees_service: EmployeesService = Depends(get_employees_service)
):
    """Replace name, salary and city of an employee"""
    name, salary, city = _validated_fields(payload)

    result = await employees_service.update_employee(employee_id, name=name, salary=salary, city=city)
    if not result.success:
        _raise_for_failure(result, "update employee")

    return {"message": "Employee updated successfully"}


@router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: str,
    employees_service: EmployeesService = Depends(get_employees_service)
):
    """Delete an employee"""
    result = await employees_service.delete_employee(employee_id)
    if not result.success:
        _raise_for_failure(result, "delete employee")

    return {"message": "Employee deleted successfully"}
