import re
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# matches the String(255) columns of the employees table
MAX_FIELD_LENGTH = 255


class EmployeeInput(BaseModel):
    """POST /api/employees and PUT /api/employees/{id} request body.

    Every field is optional here so that missing values are reported together
    by validate_employee() rather than one by one by pydantic.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None

    def cleaned(self) -> dict:
        return {
            "name": (self.name or "").strip(),
            "email": (self.email or "").strip(),
            "position": (self.position or "").strip(),
        }


class Employee(BaseModel):
    """Response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    position: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def mark_utc(cls, value: datetime) -> datetime:
        # columns hold naive UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class EmployeeDeleted(BaseModel):
    message: str = "Employee deleted successfully"


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Union[List[str], str]] = None


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _too_long(value: str) -> bool:
    return len(value.strip()) > MAX_FIELD_LENGTH


def validate_employee(payload: EmployeeInput) -> List[str]:
    """Return every violated rule, in field order. Empty list means valid."""
    errors: List[str] = []

    if _is_blank(payload.name):
        errors.append("Name is required")
    elif _too_long(payload.name):
        errors.append(f"Name must be at most {MAX_FIELD_LENGTH} characters")

    if _is_blank(payload.email):
        errors.append("Email is required")
    elif _too_long(payload.email):
        errors.append(f"Email must be at most {MAX_FIELD_LENGTH} characters")
    elif not EMAIL_PATTERN.match(payload.email.strip()):
        errors.append("Invalid email format")

    if _is_blank(payload.position):
        errors.append("Position is required")
    elif _too_long(payload.position):
        errors.append(f"Position must be at most {MAX_FIELD_LENGTH} characters")

    return errors
