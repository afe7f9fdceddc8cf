import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from employee_directory.api.employees import router as employees_router
from employee_directory.api.health import router as health_router
from employee_directory.core.config import get_settings
from employee_directory.core.db import close_db, init_db
from employee_directory.core.errors import (
    EmployeeDirectoryError,
    StoreError,
    status_code_for,
)
from employee_directory.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    # creates the employees table if it does not exist yet
    await init_db(settings.DATABASE_URL)
    logger.info("Employee Directory started")
    yield
    await close_db()
    logger.info("Employee Directory stopped")


app = FastAPI(
    title="Employee Directory",
    version="0.1.0",
    description="Employee directory CRUD service (REST + SQLAlchemy)",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EmployeeDirectoryError)
async def employee_directory_error_handler(request: Request, exc: EmployeeDirectoryError):
    status_code = status_code_for(exc)
    content = exc.to_response()

    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        if exc.cause is not None and get_settings().is_development:
            content["details"] = str(exc.cause)
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, status_code, exc.message)

    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"error": "Internal server error"}
    if get_settings().is_development:
        content["details"] = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


@app.get("/")
async def root():
    return {
        "message": "Employee Directory is running",
        "docs": "/docs",
    }


app.include_router(health_router)
app.include_router(employees_router)
