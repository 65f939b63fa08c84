"""
Employee-related Pydantic models
"""

from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel


class EmployeeRequest(BaseModel):
    """Body for create and update. Presence is checked by the route, not here."""
    name: Optional[str] = None
    salary: Optional[Union[float, str]] = None
    city: Optional[str] = None

    def has_required_fields(self) -> bool:
        """All of name, salary and city are present and truthy (a zero salary counts as missing)"""
        return bool(self.name and self.salary and self.city)


class Employee(BaseModel):
    id: int
    name: str
    salary: float
    city: str
    created_at: Optional[datetime] = None


class EmployeeCreatedResponse(BaseModel):
    id: int
    message: str


class MessageResponse(BaseModel):
    message: str
