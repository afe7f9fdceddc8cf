import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from employee_directory.core.db import Base


def generate_employee_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # stored naive so SQLite and MySQL round-trip the same value
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=generate_employee_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    position = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Employee id={self.id!r} email={self.email!r}>"
