from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_directory.core.db import get_db
from employee_directory.store.employees import EmployeeStore


async def get_employee_store(db: AsyncSession = Depends(get_db)) -> EmployeeStore:
    """
    Build a per-request EmployeeStore on top of the request's session.
    Routes depend on this rather than on the raw session.
    """
    return EmployeeStore(db)
