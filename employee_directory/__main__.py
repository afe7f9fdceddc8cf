import uvicorn

from employee_directory.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "employee_directory.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
