"""Commands for inspecting and persisting client settings."""

from __future__ import annotations

from dataclasses import asdict

import typer
from rich import print

from ..config import ConfigStore, resolve_server
from .common import handle_cli_errors

app = typer.Typer(help="Client settings")


@app.command("show")
@handle_cli_errors
def config_show() -> None:
    """Display the effective client settings."""

    settings = ConfigStore().load()
    for key, value in asdict(settings).items():
        print(f"{key}: {value}")


@app.command("set")
@handle_cli_errors
def config_set(
    server: str | None = typer.Option(None, help="Platform URL or alias (sandbox, production)"),
    timeout: float | None = typer.Option(None, help="Request timeout in seconds"),
    max_retries: int | None = typer.Option(None, help="Retries for transient failures"),
) -> None:
    """Persist one or more client settings."""

    if server is None and timeout is None and max_retries is None:
        raise typer.BadParameter("Pass at least one of --server, --timeout or --max-retries.")

    store = ConfigStore()
    settings = store.load(apply_env=False)
    if server is not None:
        settings.server = resolve_server(server)
    if timeout is not None:
        settings.timeout = timeout
    if max_retries is not None:
        settings.max_retries = max_retries
    store.save(settings)
    print(f"Saved settings to {store.path}")


__all__ = ["app", "config_show", "config_set"]
