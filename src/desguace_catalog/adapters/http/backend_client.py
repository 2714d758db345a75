"""
Thin async client for the dismantling backend REST API.

Wraps a single ``httpx.AsyncClient`` and translates transport and HTTP
failures into domain errors. There is no retry policy: a failed or
timed-out request is surfaced once and the caller decides whether to fall
back to a cached snapshot or propagate.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from desguace_catalog.domain.errors import (
    BackendRejectedError,
    BackendUnavailableError,
    ConflictError,
    InvalidResponseError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class BackendClient:
    """
    Client for the backend REST API.

    One instance is shared by all resource gateways of the process so that
    connections are pooled. Call ``aclose()`` on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Backend API root (e.g. ``http://localhost:3001/api``)
            timeout: Fixed per-request timeout in seconds
            transport: Optional transport override (tests use ``httpx.MockTransport``)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        logger.info("BackendClient initialized", extra={"base_url": self.base_url, "timeout": timeout})

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        resource: str,
        entity_id: int | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body (``None`` for empty bodies).

        Raises:
            BackendUnavailableError: Connection failure, timeout or 5xx answer
            NotFoundError: 404 answer
            ConflictError: 409 answer
            BackendRejectedError: Any other 4xx answer
            InvalidResponseError: Body is not valid JSON
        """
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                files=files,
                data=data,
            )
        except httpx.TimeoutException as exc:
            logger.error(
                "Backend request timed out",
                extra={"method": method, "path": path, "base_url": self.base_url},
            )
            raise BackendUnavailableError(
                "Timeout connecting to the backend", resource=resource, path=path
            ) from exc
        except httpx.TransportError as exc:
            logger.error(
                "Could not connect to the backend",
                extra={"method": method, "path": path, "base_url": self.base_url, "error": str(exc)},
            )
            raise BackendUnavailableError(
                "Could not connect to the backend", resource=resource, path=path
            ) from exc

        if response.is_error:
            self._raise_for_status(response, resource=resource, entity_id=entity_id)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseError(
                "Backend answered with a non-JSON body", resource=resource, path=path
            ) from exc

    def _raise_for_status(
        self, response: httpx.Response, *, resource: str, entity_id: int | None
    ) -> None:
        status_code = response.status_code
        message = _error_message(response)
        logger.error(
            "Backend error response",
            extra={
                "status_code": status_code,
                "reason": response.reason_phrase,
                "path": response.request.url.path,
                "resource": resource,
            },
        )

        if status_code == 404:
            raise NotFoundError(resource, str(entity_id) if entity_id is not None else None)
        if status_code == 409:
            raise ConflictError(message, resource=resource, status_code=status_code)
        if status_code >= 500:
            raise BackendUnavailableError(message, resource=resource, status_code=status_code)
        raise BackendRejectedError(message, resource=resource, status_code=status_code)

    async def check_status(self) -> bool:
        """Whether the backend answers its health endpoint. Never raises."""
        try:
            await self.request("GET", "/health", resource="health")
            return True
        except Exception as exc:
            logger.warning("Backend is not available", extra={"error": str(exc)})
            return False


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return f"Error {response.status_code}: {response.reason_phrase}"
