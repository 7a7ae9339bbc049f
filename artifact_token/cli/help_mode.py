"""Help text; also the target for no argument or an unknown command."""

from . import shared

COMMAND_HELP = [
    ("refresh", "Runs a single, non-interactive refresh cycle."),
    ("login", "Runs an interactive login to refresh AWS credentials via MFA."),
    ("check", "Refreshes with a timeout and offers the interactive login on failure."),
    ("gt", "Extracts and displays the current token from your NuGet config."),
    ("show-config", "Shows the effective settings."),
    ("help", "Shows this help message."),
]


def help_() -> None:
    """Shows this help message."""
    settings = shared.get_settings()
    console = shared.console
    console.print("[bold]AWS Token Utility[/bold]")
    console.print("A tool to manage AWS CodeArtifact tokens for NuGet.\n")
    console.print("Usage: artifact-token {command}\n")
    console.print("Commands:")
    for name, text in COMMAND_HELP:
        console.print(f"  {name:<13} - {text}", highlight=False)
    console.print(f"\nLogs are stored in: {settings.log_file}", highlight=False)
