"""Check mode: refresh with a deadline, offering the interactive login if it does not succeed."""

import typer

from artifact_token.utils.logger import bind_context, clear_context

from . import shared


def check() -> None:
    """Refreshes with a timeout; on failure asks whether to run the interactive login."""
    settings = shared.get_settings()
    log = shared.logger.bind(command="check", timeout=settings.refresh_timeout)
    log.info("check.start")
    bind_context(command="check")
    try:
        result = shared.build_services(settings).guard.run(settings.refresh_timeout)
    finally:
        clear_context()
    if not result.ok:
        shared.console.print(f"[red]Timed refresh did not succeed ({result.status.value}).[/red]")
        raise typer.Exit(1)
    log.info("check.ok")
