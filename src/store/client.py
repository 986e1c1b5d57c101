"""Async client for the hosted fact table (PostgREST dialect)."""

from typing import Any, Optional

import httpx
import structlog

from observability import StoreMetrics

logger = structlog.get_logger().bind(source="fact_store")


class StoreError(Exception):
    """Backend or transport failure, carrying a human-readable message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Pull the backend's message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "error_description", "error", "msg"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class FactStoreClient:
    """Select/insert/update against ``{base_url}/rest/v1/{table}``.

    Every call returns the affected rows as a list of dicts or raises
    ``StoreError``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        table: str = "facts",
        timeout: float = 10.0,
        metrics: Optional[StoreMetrics] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.table = table
        self.metrics = metrics or StoreMetrics()
        headers = {"Accept": "application/json"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        self.client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self):
        await self.client.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        prefer_representation: bool = False,
    ) -> list[dict]:
        headers = {"Prefer": "return=representation"} if prefer_representation else None
        with self.metrics.track(operation):
            try:
                response = await self.client.request(
                    method, f"/{self.table}", params=params, json=json, headers=headers
                )
            except httpx.TimeoutException as e:
                self.metrics.error(operation)
                logger.warning("store.timeout", operation=operation, error=str(e))
                raise StoreError("The fact store did not respond in time") from e
            except httpx.RequestError as e:
                self.metrics.error(operation)
                logger.warning("store.request_error", operation=operation, error=str(e))
                raise StoreError(f"Could not reach the fact store: {e}") from e

        if response.is_error:
            self.metrics.error(operation)
            message = _error_message(response)
            logger.warning(
                "store.http_error",
                operation=operation,
                status_code=response.status_code,
                message=message,
            )
            raise StoreError(message, status_code=response.status_code)

        try:
            rows = response.json()
        except ValueError as e:
            self.metrics.error(operation)
            raise StoreError("The fact store returned an unreadable response") from e
        if isinstance(rows, dict):
            rows = [rows]
        if not isinstance(rows, list):
            self.metrics.error(operation)
            logger.warning("store.unexpected_body", operation=operation, body_type=type(rows).__name__)
            raise StoreError("The fact store returned an unexpected response")
        logger.debug("store.ok", operation=operation, rows=len(rows))
        return rows

    async def select(
        self,
        filters: Optional[dict[str, Any]] = None,
        order: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Filtered select; ``filters`` are exact-match column equalities."""
        params: dict[str, Any] = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)
        return await self._request("select", "GET", params=params)

    async def insert(self, record: dict[str, Any]) -> list[dict]:
        return await self._request(
            "insert", "POST", params={"select": "*"}, json=[record], prefer_representation=True
        )

    async def update(self, row_id: int | str, patch: dict[str, Any]) -> list[dict]:
        return await self._request(
            "update",
            "PATCH",
            params={"id": f"eq.{row_id}", "select": "*"},
            json=patch,
            prefer_representation=True,
        )
