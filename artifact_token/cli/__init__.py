"""CLI commands: one module per command (refresh, login, check, gt, help, show-config)."""

import sys

from typer import Typer

from artifact_token.cli import check_mode, help_mode, login_mode, refresh_mode, show_config, token_mode

app = Typer(help="AWS CodeArtifact token utility for NuGet", add_completion=False)

COMMANDS = ("refresh", "login", "check", "gt", "help", "show-config")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(refresh_mode.refresh)
    app.command()(login_mode.login)
    app.command()(check_mode.check)
    app.command()(token_mode.gt)
    app.command(name="help")(help_mode.help_)
    app.command(name="show-config")(show_config.show_config)


register_commands()


def normalize_args(args: list[str]) -> list[str]:
    """No argument or an unknown command routes to help."""
    if not args or args[0] not in COMMANDS:
        return ["help"]
    return args


def run(args: list[str] | None = None) -> None:
    app(args=normalize_args(list(sys.argv[1:] if args is None else args)), prog_name="artifact-token")
