"""Unified CLI entry point for the quote worker.

Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml -> env vars (QW_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

from typing import Optional

import typer

from quote_worker import __version__
from quote_worker.cli.settings_cmd import settings_app
from quote_worker.cli.submit_cmd import submit

APP_HELP = (
    "quote-worker — carrier quote form automation. "
    "Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml -> "
    "env vars (QW_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.add_typer(settings_app, name="settings")
app.command("submit")(submit)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: QW_API__HOST)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: QW_API__PORT)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from quote_worker.log_config import configure_logging
    from quote_worker.settings import get_settings

    settings = get_settings()
    configure_logging(settings.log.level, json_format=settings.log.json_format)
    bind_host = host or settings.api.host
    bind_port = port or settings.api.port
    typer.echo(f"quote-worker ready on :{bind_port}")
    uvicorn.run("quote_worker.api.app:app", host=bind_host, port=bind_port, log_config=None)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context, version: bool = typer.Option(False, "--version", help="Show version and exit.")) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"quote-worker {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
