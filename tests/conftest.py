"""Shared fixtures: a fresh SQLite file database per test and an ASGI client."""

import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from httpx import ASGITransport, AsyncClient

import employee_directory.core.db as db_module
from employee_directory.core.db import close_db, init_db
from employee_directory.main import app
from employee_directory.store.employees import EmployeeStore


@pytest.fixture
async def database(tmp_path):
    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}")
    yield
    await close_db()


@pytest.fixture
async def store(database):
    async with db_module.AsyncSessionLocal() as session:
        yield EmployeeStore(session)


@pytest.fixture
async def client(database):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def john():
    return {"name": "John Doe", "email": "john@example.com", "position": "Engineer"}


@pytest.fixture
def jane():
    return {"name": "Jane Smith", "email": "jane@example.com", "position": "Designer"}
