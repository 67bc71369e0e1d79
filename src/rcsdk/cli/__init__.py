from __future__ import annotations

import typer

from . import decode, request, settings

app = typer.Typer(help="RCSDK CLI")

app.add_typer(settings.app, name="config")
decode.register(app)
request.register(app)


@app.callback()
def common(ctx: typer.Context) -> None:
    """Initialize shared Typer context state."""

    ctx.ensure_object(dict)


__all__ = ["app", "decode", "request", "settings"]
