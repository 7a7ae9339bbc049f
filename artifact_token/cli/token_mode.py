"""gt: show the token currently stored in the global NuGet config."""

import typer

from artifact_token.errors import ConfigNotFoundError, TokenNotFoundError

from . import shared


def gt() -> None:
    """Extracts and displays the current token from your NuGet config."""
    settings = shared.get_settings()
    inspector = shared.build_services(settings).inspector
    console = shared.console

    console.print("Searching for AWS CodeArtifact token in global NuGet config...")
    console.print(f"   ({inspector.config_path})\n", highlight=False)
    try:
        token = inspector.require_token()
    except ConfigNotFoundError:
        console.print("[red]Global NuGet config file not found.[/red]")
        raise typer.Exit(1)
    except TokenNotFoundError:
        console.print("[red]Token not found in NuGet config.[/red]")
        console.print("Run 'artifact-token refresh' to generate and store a new token.")
        raise typer.Exit(1)

    console.print("[green]Token found![/green]")
    console.rule()
    console.print(token, soft_wrap=True, highlight=False, markup=False)
    console.rule()
    console.print(f"Token length: {len(token)} characters")
