from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from employee_directory.core.db import ping_db

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("")
async def health_check():
    return {
        "status": "ok",
        "service": "employee-directory",
    }


@router.get("/ready")
async def readiness_check():
    if not await ping_db():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready"},
        )
    return {"status": "ready"}
