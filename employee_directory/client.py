import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class EmployeeClientError(Exception):
    def __init__(self, status_code: int, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class EmployeeClient:
    """
    Async REST client for the Employee Directory API.

    async with EmployeeClient("http://localhost:8000") as client:
        employees = await client.list_employees(search="john")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "EmployeeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, fallback: str, **kwargs) -> Any:
        resp = await self._client.request(method, url, **kwargs)
        if resp.is_success:
            return resp.json()

        message, details = fallback, None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error") or fallback
            details = body.get("details")

        logger.debug("%s %s failed with %s: %s", method, url, resp.status_code, message)
        raise EmployeeClientError(resp.status_code, message, details)

    async def list_employees(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"search": search} if search else None
        return await self._request(
            "GET", "/api/employees", "Failed to fetch employees", params=params
        )

    async def get_employee(self, employee_id: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/api/employees/{employee_id}", "Failed to fetch employee"
        )

    async def create_employee(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "POST", "/api/employees", "Failed to create employee", json=data
        )

    async def update_employee(self, employee_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/api/employees/{employee_id}", "Failed to update employee", json=data
        )

    async def delete_employee(self, employee_id: str) -> Dict[str, Any]:
        return await self._request(
            "DELETE", f"/api/employees/{employee_id}", "Failed to delete employee"
        )
