"""Decode a captured response body the same way a live exchange is decoded."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from ..api_response import ApiResponse
from ..externals import DEFAULT_EXTERNALS, Externals
from .common import handle_cli_errors, render_results


def register(app: typer.Typer) -> None:
    app.command("decode")(decode)


async def load_captured_response(
    body: str,
    content_type: str,
    *,
    status: int = 200,
    status_text: str = "OK",
    externals: Externals = DEFAULT_EXTERNALS,
) -> ApiResponse:
    """Wrap a captured body in a response object and materialize it."""

    raw = externals.response(
        body,
        headers=externals.headers([("Content-Type", content_type)]),
        status=status,
        status_text=status_text,
    )
    api_response = ApiResponse(externals)
    await api_response.receive_response(raw)
    return api_response


@handle_cli_errors
def decode(
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="File holding the raw response body"
    ),
    content_type: str = typer.Option(
        ..., "--content-type", "-t", help="Content-Type header the body was served with"
    ),
    status: int = typer.Option(200, help="HTTP status of the captured response"),
    status_text: str = typer.Option("OK", help="HTTP status text of the captured response"),
    show_errors: bool = typer.Option(False, "--errors", help="Print error() for every result"),
) -> None:
    """Split a captured response into its logical results and print them.

    Args:
        path: File containing the body exactly as received.
        content_type: Declared ``Content-Type``; multipart bodies need the boundary.
        status: Status code of the outer response.
        status_text: Status text of the outer response.
        show_errors: When ``True`` print the derived error message of each result.
    """

    body = path.read_bytes().decode("utf-8", errors="replace")
    api_response = asyncio.run(
        load_captured_response(body, content_type, status=status, status_text=status_text)
    )
    render_results(api_response.to_multipart(), show_errors=show_errors)


__all__ = ["register", "decode", "load_captured_response"]
