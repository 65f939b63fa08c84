"""
Employees service - one SQL round-trip per operation against the record store
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import Request

from database.connection import RecordStore

logger = logging.getLogger(__name__)

EMPLOYEE_COLUMNS = "id, name, salary, city, created_at"

LIST_EMPLOYEES_SQL = f"SELECT {EMPLOYEE_COLUMNS} FROM employees ORDER BY created_at DESC, id DESC"
GET_EMPLOYEE_SQL = f"SELECT {EMPLOYEE_COLUMNS} FROM employees WHERE id = $1"
INSERT_EMPLOYEE_SQL = "INSERT INTO employees (name, salary, city) VALUES ($1, $2, $3) RETURNING id"
UPDATE_EMPLOYEE_SQL = "UPDATE employees SET name = $1, salary = $2, city = $3 WHERE id = $4"
DELETE_EMPLOYEE_SQL = "DELETE FROM employees WHERE id = $1"
HEALTH_CHECK_SQL = "SELECT 1 FROM employees LIMIT 1"

MAX_EMPLOYEE_ID = 2 ** 31 - 1


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


def parse_employee_id(employee_id: Any) -> Optional[int]:
    """Integer form of a path identifier, or None when it cannot match any row"""
    try:
        value = int(str(employee_id).strip())
    except (TypeError, ValueError):
        return None
    # SERIAL ids are 32-bit
    if not 0 < value <= MAX_EMPLOYEE_ID:
        return None
    return value


def serialize_employee(row: Dict[str, Any]) -> Dict[str, Any]:
    """Make a database row JSON-friendly"""
    data = dict(row)
    if isinstance(data.get("salary"), Decimal):
        data["salary"] = float(data["salary"])
    for key, value in data.items():
        if hasattr(value, 'isoformat'):
            data[key] = value.isoformat()
    return data


def _not_found(employee_id: Any) -> ServiceResult:
    return ServiceResult(
        success=False,
        error=f"Employee not found with ID: {employee_id}",
        error_type="RESOURCE_NOT_FOUND"
    )


def _database_error(operation: str, e: Exception) -> ServiceResult:
    logger.error(f"{operation} failed: {e}")
    return ServiceResult(
        success=False,
        error=str(e),
        error_type="DATABASE_ERROR"
    )


class EmployeesService:
    """Service for employee record operations"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_employees(self) -> ServiceResult:
        """All employees, newest first"""
        try:
            rows = await self.store.fetch(LIST_EMPLOYEES_SQL)
        except Exception as e:
            return _database_error("List employees", e)

        data = [serialize_employee(row) for row in rows]
        return ServiceResult(success=True, data=data)

    async def get_employee(self, employee_id: str) -> ServiceResult:
        """
        Get an employee by ID

        Args:
            employee_id: Identifier taken from the request path

        Returns:
            ServiceResult with a single employee, or RESOURCE_NOT_FOUND
        """
        record_id = parse_employee_id(employee_id)
        if record_id is None:
            return _not_found(employee_id)

        try:
            rows = await self.store.fetch(GET_EMPLOYEE_SQL, record_id)
        except Exception as e:
            return _database_error("Get employee", e)

        if not rows:
            return _not_found(employee_id)

        return ServiceResult(success=True, data=[serialize_employee(rows[0])])

    async def create_employee(self, name: str, salary: float, city: str) -> ServiceResult:
        """
        Create a new employee

        Args:
            name: Employee name
            salary: Salary, stored with two decimal places
            city: City

        Returns:
            ServiceResult with [{"id": <generated id>}]
        """
        logger.info(f"Creating employee: {name}")
        try:
            result = await self.store.execute(
                INSERT_EMPLOYEE_SQL, name, Decimal(str(salary)), city
            )
        except Exception as e:
            return _database_error("Create employee", e)

        return ServiceResult(success=True, data=[{"id": result.inserted_id}])

    async def update_employee(self, employee_id: str, name: str, salary: float, city: str) -> ServiceResult:
        """Overwrite name, salary and city of an employee"""
        record_id = parse_employee_id(employee_id)
        if record_id is None:
            return _not_found(employee_id)

        try:
            result = await self.store.execute(
                UPDATE_EMPLOYEE_SQL, name, Decimal(str(salary)), city, record_id
            )
        except Exception as e:
            return _database_error("Update employee", e)

        if result.affected_rows == 0:
            return _not_found(employee_id)

        logger.info(f"Updated employee {record_id}")
        return ServiceResult(success=True)

    async def delete_employee(self, employee_id: str) -> ServiceResult:
        """Hard delete an employee"""
        record_id = parse_employee_id(employee_id)
        if record_id is None:
            return _not_found(employee_id)

        try:
            result = await self.store.execute(DELETE_EMPLOYEE_SQL, record_id)
        except Exception as e:
            return _database_error("Delete employee", e)

        if result.affected_rows == 0:
            return _not_found(employee_id)

        logger.info(f"Deleted employee {record_id}")
        return ServiceResult(success=True)

    async def check_health(self) -> ServiceResult:
        """Trivial read against the employees table"""
        try:
            await self.store.fetch(HEALTH_CHECK_SQL)
        except Exception as e:
            return _database_error("Health check", e)
        return ServiceResult(success=True)


def get_employees_service(request: Request) -> EmployeesService:
    """Dependency provider - the service is owned by the running app"""
    return request.app.state.employees_service
