"""CLI commands for inspecting and validating quote-worker settings."""

from __future__ import annotations

import json

import typer
from rich.console import Console

settings_app = typer.Typer(help="Inspect and validate quote-worker configuration.")
console = Console()


@settings_app.command("show")
def show_settings() -> None:
    """Display the currently resolved settings (passwords masked)."""
    from quote_worker.settings import get_settings

    data = get_settings().model_dump(mode="json")
    for carrier in data.get("carriers", {}).values():
        if carrier.get("password"):
            carrier["password"] = "********"
    console.print_json(json.dumps(data, indent=2, default=str))


@settings_app.command("validate")
def validate_settings() -> None:
    """Validate settings and report any issues."""
    from quote_worker.carriers import build_registry
    from quote_worker.settings import get_settings

    try:
        settings = get_settings()
        carriers = build_registry(settings)
    except Exception as e:
        console.print(f"[red]✗[/red] Settings validation failed: {e}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Settings are valid.")
    console.print(f"  Environment: {settings.env}")
    console.print(f"  Mode: {'dry run' if settings.dry_run else 'live'}")
    for carrier in carriers:
        creds = "credentials set" if carrier.has_credentials else "[yellow]missing credentials[/yellow]"
        console.print(f"  Carrier {carrier.name}: {carrier.login_url} ({creds})")
