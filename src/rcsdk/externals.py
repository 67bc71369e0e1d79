"""Host capabilities used to build headers and responses without a live network stack."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

import httpx


class HeadersLike(Protocol):
    def get(self, key: str, default: str | None = None) -> str | None:
        ...


class ResponseLike(Protocol):
    status_code: int

    @property
    def reason_phrase(self) -> str:
        ...

    @property
    def headers(self) -> HeadersLike:
        ...

    @property
    def is_success(self) -> bool:
        ...

    @property
    def text(self) -> str:
        ...

    async def aread(self) -> bytes:
        ...


class ResponseFactory(Protocol):
    def __call__(
        self,
        body: str | None,
        *,
        headers: HeadersLike,
        status: int,
        status_text: str,
    ) -> ResponseLike:
        ...


HeaderPairs = Iterable[tuple[str, str]]


@dataclass(frozen=True)
class Externals:
    """Constructors supplied by the host environment.

    Attributes:
        headers: Builds a case-insensitive header collection from ordered
            ``(name, value)`` pairs. Repeated names must be kept.
        response: Builds a response object from a text body (or ``None``),
            a header collection, a status code and a status text.
    """

    headers: Callable[[HeaderPairs], HeadersLike]
    response: ResponseFactory


def httpx_headers(pairs: HeaderPairs) -> httpx.Headers:
    return httpx.Headers(list(pairs))


def httpx_response(
    body: str | None,
    *,
    headers: HeadersLike,
    status: int,
    status_text: str,
) -> httpx.Response:
    """Build an :class:`httpx.Response` that keeps the given status text.

    The body is already decoded text, so the headers are attached after
    construction: httpx must not apply ``Content-Encoding`` to it or add
    ``Content-Length``/``Content-Type`` headers the part never declared.
    """

    response = httpx.Response(
        status,
        content=body.encode("utf-8") if body is not None else None,
        extensions={"reason_phrase": status_text.encode("ascii", errors="replace")},
    )
    response.headers = httpx.Headers(headers)  # type: ignore[arg-type]
    return response


DEFAULT_EXTERNALS = Externals(headers=httpx_headers, response=httpx_response)


__all__ = [
    "DEFAULT_EXTERNALS",
    "Externals",
    "HeaderPairs",
    "HeadersLike",
    "ResponseFactory",
    "ResponseLike",
    "httpx_headers",
    "httpx_response",
]
