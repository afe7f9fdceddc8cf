import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_directory.core.errors import ConstraintViolation, StoreError
from employee_directory.models.employee import Employee, generate_employee_id, utcnow

logger = logging.getLogger(__name__)


class EmployeeStore:
    """Reads and writes rows of the employees table. No business validation."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning("Constraint violated during %s: %s", operation, exc.orig)
            raise ConstraintViolation(f"Constraint violated during {operation}", exc) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Store failure during %s: %s", operation, exc)
            raise StoreError(f"Failed to {operation}", exc) from exc

    async def list_all(self) -> List[Employee]:
        async with self._guard("fetch employees"):
            result = await self.session.execute(
                select(Employee).order_by(Employee.created_at.desc())
            )
            return list(result.scalars().all())

    async def find_by_id(self, employee_id: str) -> Optional[Employee]:
        async with self._guard("fetch employee"):
            result = await self.session.execute(
                select(Employee).where(Employee.id == employee_id)
            )
            return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[Employee]:
        async with self._guard("fetch employee"):
            result = await self.session.execute(
                select(Employee).where(Employee.email == email)
            )
            return result.scalar_one_or_none()

    async def search(self, term: str) -> List[Employee]:
        """Case-insensitive substring match on name, email or position."""
        stmt = (
            select(Employee)
            .where(
                or_(
                    Employee.name.icontains(term, autoescape=True),
                    Employee.email.icontains(term, autoescape=True),
                    Employee.position.icontains(term, autoescape=True),
                )
            )
            .order_by(Employee.created_at.desc())
        )
        async with self._guard("search employees"):
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def insert(
        self,
        *,
        name: str,
        email: str,
        position: str,
        id: Optional[str] = None,
    ) -> Employee:
        now = utcnow()
        employee = Employee(
            id=id or generate_employee_id(),
            name=name,
            email=email,
            position=position,
            created_at=now,
            updated_at=now,
        )
        async with self._guard("create employee"):
            self.session.add(employee)
            await self.session.commit()
            await self.session.refresh(employee)
        return employee

    async def update(
        self,
        employee_id: str,
        *,
        name: str,
        email: str,
        position: str,
    ) -> Optional[Employee]:
        """Rewrite the editable fields. Returns None when no row has this id."""
        async with self._guard("update employee"):
            employee = await self.session.get(Employee, employee_id)
            if employee is None:
                return None

            employee.name = name
            employee.email = email
            employee.position = position
            # never move updated_at backwards, even if the clock does
            employee.updated_at = max(utcnow(), employee.updated_at)

            await self.session.commit()
            await self.session.refresh(employee)
        return employee

    async def delete_by_id(self, employee_id: str) -> bool:
        """Hard delete. Returns False when there was nothing to remove."""
        async with self._guard("delete employee"):
            result = await self.session.execute(
                delete(Employee).where(Employee.id == employee_id)
            )
            await self.session.commit()
        return result.rowcount > 0
