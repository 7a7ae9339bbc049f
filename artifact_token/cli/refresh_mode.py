"""Refresh mode: one non-interactive refresh cycle."""

import typer

from artifact_token.utils.logger import bind_context, clear_context

from . import shared


def refresh() -> None:
    """Runs a single, non-interactive refresh cycle."""
    settings = shared.get_settings()
    bind_context(command="refresh")
    try:
        result = shared.build_services(settings).orchestrator.refresh()
    finally:
        clear_context()
    if not result.ok:
        shared.console.print(f"[red]Refresh failed: {result.status.value}[/red]")
        raise typer.Exit(1)
    shared.console.print("[green]NuGet source updated.[/green]")
