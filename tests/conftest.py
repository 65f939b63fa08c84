"""
pytest configuration and fixtures for the Employee Records API test suite
The database is replaced by an in-memory store that answers the statements
the service and bootstrap issue.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app import create_app
from database.bootstrap import CREATE_EMPLOYEES_TABLE_SQL, COUNT_EMPLOYEES_SQL, SEED_EMPLOYEES_SQL
from database.connection import WriteResult
from services.employees_service import (
    LIST_EMPLOYEES_SQL,
    GET_EMPLOYEE_SQL,
    INSERT_EMPLOYEE_SQL,
    UPDATE_EMPLOYEE_SQL,
    DELETE_EMPLOYEE_SQL,
    HEALTH_CHECK_SQL,
)


class InMemoryRecordStore:
    """Stand-in for RecordStore holding the employees table in a dict"""

    def __init__(self, table_exists: bool = False, connect_error: Optional[Exception] = None):
        self.table_exists = table_exists
        self.connect_error = connect_error
        self.fail_with: Optional[Exception] = None
        self.rows: Dict[int, Dict[str, Any]] = {}
        self.statements: List[str] = []
        self.connected = False
        self.closed = False
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, 9, 0, 0)

    @property
    def is_connected(self) -> bool:
        return self.connected

    async def connect(self) -> None:
        if self.connect_error:
            raise self.connect_error
        self.connected = True

    async def close(self) -> None:
        self.connected = False
        self.closed = True

    def _check(self, query: str):
        if not self.connected:
            raise RuntimeError("Database connection not initialized")
        if self.fail_with:
            raise self.fail_with
        self.statements.append(query)
        if query != CREATE_EMPLOYEES_TABLE_SQL and not self.table_exists:
            raise RuntimeError('relation "employees" does not exist')

    def _insert(self, name, salary, city, created_at) -> int:
        employee_id = self._next_id
        self._next_id += 1
        self.rows[employee_id] = {
            "id": employee_id,
            "name": name,
            "salary": salary,
            "city": city,
            "created_at": created_at,
        }
        return employee_id

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    @property
    def mutations(self) -> List[str]:
        return [s for s in self.statements if s in (INSERT_EMPLOYEE_SQL, UPDATE_EMPLOYEE_SQL, DELETE_EMPLOYEE_SQL)]

    async def fetch(self, query: str, *params: Any) -> List[Dict[str, Any]]:
        self._check(query)
        if query == LIST_EMPLOYEES_SQL:
            ordered = sorted(self.rows.values(), key=lambda r: (r["created_at"], r["id"]), reverse=True)
            return [dict(row) for row in ordered]
        if query == GET_EMPLOYEE_SQL:
            row = self.rows.get(params[0])
            return [dict(row)] if row else []
        if query == HEALTH_CHECK_SQL:
            return [{"?column?": 1}] if self.rows else []
        raise AssertionError(f"Unexpected query: {query}")

    async def fetchval(self, query: str, *params: Any) -> Any:
        self._check(query)
        if query == COUNT_EMPLOYEES_SQL:
            return len(self.rows)
        raise AssertionError(f"Unexpected query: {query}")

    async def execute(self, query: str, *params: Any) -> WriteResult:
        self._check(query)
        if query == CREATE_EMPLOYEES_TABLE_SQL:
            self.table_exists = True
            return WriteResult()
        if query == SEED_EMPLOYEES_SQL:
            # One statement, one transaction timestamp
            created_at = self._tick()
            for i in range(0, len(params), 3):
                self._insert(*params[i:i + 3], created_at)
            return WriteResult(affected_rows=len(params) // 3)
        if query == INSERT_EMPLOYEE_SQL:
            employee_id = self._insert(*params, self._tick())
            return WriteResult(affected_rows=1, inserted_id=employee_id)
        if query == UPDATE_EMPLOYEE_SQL:
            name, salary, city, employee_id = params
            row = self.rows.get(employee_id)
            if row is None:
                return WriteResult(affected_rows=0)
            row.update(name=name, salary=salary, city=city)
            return WriteResult(affected_rows=1)
        if query == DELETE_EMPLOYEE_SQL:
            removed = self.rows.pop(params[0], None)
            return WriteResult(affected_rows=1 if removed else 0)
        raise AssertionError(f"Unexpected statement: {query}")


@pytest.fixture
def store():
    """Fresh in-memory store with no employees table yet"""
    return InMemoryRecordStore()


@pytest.fixture
def client(store):
    """Test client running the full app lifespan against the in-memory store"""
    with TestClient(create_app(store=store)) as test_client:
        yield test_client


@pytest.fixture
def employee_payload():
    return {"name": "Ada Lovelace", "salary": 72000.5, "city": "London"}


@pytest.fixture
def unreachable_store():
    """Store whose connection attempt fails at startup"""
    return InMemoryRecordStore(connect_error=OSError("Connection refused"))
