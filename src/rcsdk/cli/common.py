from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterable
from functools import wraps
from typing import ParamSpec, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from ..api_response import ApiResponse
from ..config import ClientSettings, ConfigStore
from ..errors import HttpError, RcsdkError, ResponseError

console = Console(soft_wrap=True)

BINARY_PLACEHOLDER = "<binary>"


def _render_http_error(exc: HttpError) -> None:
    console.print(f"[red]Error:[/red] {exc}")
    details = getattr(exc, "details", None)
    if details:
        snippet = details
        if isinstance(details, (dict, list)):
            snippet = json.dumps(details, indent=2)
        console.print(str(snippet), markup=False)


CommandParams = ParamSpec("CommandParams")
CommandReturn = TypeVar("CommandReturn")


def handle_cli_errors(
    func: Callable[CommandParams, CommandReturn],
) -> Callable[CommandParams, CommandReturn]:
    @wraps(func)
    def wrapper(*args: CommandParams.args, **kwargs: CommandParams.kwargs) -> CommandReturn:
        try:
            return func(*args, **kwargs)
        except typer.BadParameter:
            raise
        except typer.Exit:
            raise
        except HttpError as exc:
            _render_http_error(exc)
            raise typer.Exit(1) from None
        except ResponseError as exc:
            console.print(f"[red]Error:[/red] Unable to decode response: {exc}")
            raise typer.Exit(1) from None
        except RcsdkError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from None
        except Exception as exc:
            if os.getenv("RCSDK_DEBUG"):
                raise
            console.print(f"[red]Error:[/red] Unexpected failure: {exc}")
            console.print("Set RCSDK_DEBUG=1 for a stack trace.")
            raise typer.Exit(1) from exc

    return wrapper


TokenGetter = Callable[[], str]


def resolve_token_getter() -> TokenGetter:
    """Return a callable reading the access token from ``RCSDK_ACCESS_TOKEN``."""

    token = os.getenv("RCSDK_ACCESS_TOKEN")
    if not token:
        raise typer.BadParameter("RCSDK_ACCESS_TOKEN is not set.")

    def env_getter() -> str:
        return os.getenv("RCSDK_ACCESS_TOKEN") or token

    return env_getter


def get_settings_from_context(
    ctx: typer.Context, *, store: ConfigStore | None = None
) -> ClientSettings:
    """Return a cached :class:`ClientSettings` instance stored on ``ctx``."""

    ctx.ensure_object(dict)
    existing = ctx.obj.get("settings")
    if isinstance(existing, ClientSettings):
        return existing
    settings = (store or ConfigStore()).load()
    ctx.obj["settings"] = settings
    return settings


def _describe_body(part: ApiResponse) -> str:
    if part.is_json():
        payload = part.json()
        return json.dumps(payload, indent=2) if payload is not None else ""
    if part.is_multipart():
        return part.text()
    return BINARY_PLACEHOLDER


def render_results(results: Iterable[ApiResponse], *, show_errors: bool = False) -> None:
    """Print each logical result: status line, then its body."""

    for index, part in enumerate(results, start=1):
        response = part.response
        status = response.status_code if response is not None else 0
        content_type = (response.headers.get("Content-Type") if response is not None else None) or "-"
        colour = "green" if part.ok else "red"
        console.print(f"[bold]#{index}[/bold] [{colour}]{status}[/{colour}] {escape(content_type)}")
        console.print(_describe_body(part), markup=False, highlight=False)
        if show_errors:
            message = part.error()
            if message:
                console.print(f"[red]error:[/red] {escape(message)}")


__all__ = [
    "BINARY_PLACEHOLDER",
    "console",
    "get_settings_from_context",
    "handle_cli_errors",
    "render_results",
    "resolve_token_getter",
]
