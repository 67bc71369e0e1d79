from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from types import TracebackType
from typing import Any

import httpx

from .api_response import ApiResponse
from .errors import HttpError, ResponseError
from .externals import DEFAULT_EXTERNALS, Externals

logger = logging.getLogger(__name__)


class HttpClient:
    """Thin async httpx wrapper that injects Authorization, retries, and decodes responses."""

    def __init__(
        self,
        base_url: str,
        token_getter: Callable[[], str | None] | None = None,
        default_headers: dict[str, str] | None = None,
        timeout: float = 60.0,
        max_retries: int = 2,
        retry_statuses: Iterable[int] | None = None,
        backoff_factor: float = 0.5,
        externals: Externals | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token_getter = token_getter
        self._client = httpx.AsyncClient(timeout=timeout)
        self._default_headers = default_headers or {}
        self._max_retries = max_retries
        self._retry_statuses: set[int] = set(retry_statuses or {429, 500, 502, 503, 504})
        self._backoff_factor = backoff_factor
        self._externals = externals or DEFAULT_EXTERNALS

    def _auth_header(self) -> dict[str, str]:
        if not self._token_getter:
            return {}
        token = self._token_getter()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
        content: bytes | str | None = None,
    ) -> ApiResponse:
        url = self._url(path)
        merged_headers = {**self._default_headers, **(headers or {}), **self._auth_header()}
        attempt = 0
        while True:
            request = httpx.Request(
                method,
                url,
                params=params,
                headers=merged_headers,
                json=json,
                content=content,
            )
            api_response = ApiResponse(self._externals, request=request)
            try:
                resp = await self._client.send(request)
                await api_response.receive_response(resp)
            except httpx.TransportError as e:
                if attempt < self._max_retries:
                    logger.debug("Transport error on %s %s: %s; retrying", method, url, e)
                    await asyncio.sleep(self._backoff_factor * (2**attempt))
                    attempt += 1
                    continue
                raise HttpError(0, f"Transport error: {e}") from e

            if resp.status_code in self._retry_statuses and attempt < self._max_retries:
                ra = resp.headers.get("Retry-After")
                delay = float(ra) if ra and ra.isdigit() else self._backoff_factor * (2**attempt)
                logger.debug("HTTP %s from %s %s; retrying in %.2fs", resp.status_code, method, url, delay)
                await asyncio.sleep(delay)
                attempt += 1
                continue

            if not api_response.ok:
                raise HttpError(
                    resp.status_code,
                    api_response.error() or resp.reason_phrase,
                    details=_error_details(api_response),
                    response=api_response,
                )
            return api_response

    async def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""

        await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _error_details(api_response: ApiResponse) -> Any:
    try:
        return api_response.json()
    except (ResponseError, ValueError):
        try:
            return api_response.text() or None
        except ResponseError:
            return None
