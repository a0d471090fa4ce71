"""CLI command for running a submission in-process, without the HTTP server."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()


def submit(
    payload_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON payload with contact and address."),
    live: Optional[bool] = typer.Option(
        None,
        "--live/--dry-run",
        help="Override the configured mode (QW_DRY_RUN).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result."),
) -> None:
    """Validate a payload file and run every configured carrier against it."""
    from quote_worker.api.app import build_orchestrator
    from quote_worker.exceptions import PayloadValidationError
    from quote_worker.models.submission import build_submission, new_submission_id
    from quote_worker.settings import get_settings

    try:
        payload = json.loads(payload_file.read_text())
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid JSON in {payload_file}: {e}")
        raise typer.Exit(code=1)

    try:
        submission = build_submission(payload, new_submission_id())
    except PayloadValidationError as e:
        console.print("[red]✗[/red] Payload rejected:")
        for error in e.errors:
            console.print(f"  - {error}")
        raise typer.Exit(code=1)

    orchestrator = build_orchestrator(get_settings())
    result = orchestrator.submit(submission, dry_run=None if live is None else not live)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    table = Table(title=f"Submission {result.id}")
    table.add_column("Carrier")
    table.add_column("OK")
    table.add_column("Mode")
    table.add_column("Premium / Error")
    for outcome in result.results:
        detail = outcome.error or outcome.premium or outcome.message or ""
        table.add_row(
            outcome.backend,
            "[green]yes[/green]" if outcome.ok else "[red]no[/red]",
            outcome.mode or "live",
            detail,
        )
    console.print(table)
