"""Issue a GET against the platform and print every decoded result."""

from __future__ import annotations

import asyncio
from typing import Any

import typer

from ..api_response import ApiResponse
from ..config import ClientSettings, resolve_server
from ..http_client import HttpClient
from .common import (
    TokenGetter,
    get_settings_from_context,
    handle_cli_errors,
    render_results,
    resolve_token_getter,
)


def register(app: typer.Typer) -> None:
    app.command("get")(get)


def parse_params(values: list[str] | None) -> dict[str, Any]:
    """Turn ``key=value`` options into a query dict; repeated keys become lists."""

    params: dict[str, Any] = {}
    for raw in values or []:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{raw}'")
        if key in params:
            existing = params[key]
            params[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


async def fetch(
    path: str,
    *,
    server: str,
    settings: ClientSettings,
    token_getter: TokenGetter,
    params: dict[str, Any] | None = None,
) -> ApiResponse:
    async with HttpClient(
        server,
        token_getter=token_getter,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        backoff_factor=settings.backoff_factor,
    ) as client:
        return await client.get(path, params=params)


@handle_cli_errors
def get(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="API path, e.g. /restapi/v1.0/account/~"),
    server: str | None = typer.Option(
        None, help="Platform URL or alias (sandbox, production); defaults to config"
    ),
    param: list[str] = typer.Option(
        [], "--param", "-p", help="Query parameter as key=value (repeatable)"
    ),
    show_errors: bool = typer.Option(False, "--errors", help="Print error() for every result"),
) -> None:
    """Fetch ``path`` and print each logical result, splitting batch responses."""

    settings = get_settings_from_context(ctx)
    base_url = resolve_server(server) if server else settings.server
    api_response = asyncio.run(
        fetch(
            path,
            server=base_url,
            settings=settings,
            token_getter=resolve_token_getter(),
            params=parse_params(param),
        )
    )
    render_results(api_response.to_multipart(), show_errors=show_errors)


__all__ = ["register", "get", "fetch", "parse_params"]
