"""Login mode: interactive saml2aws login (MFA), followed by a refresh."""

import typer

from artifact_token.utils.logger import bind_context, clear_context

from . import shared


def login() -> None:
    """Runs an interactive login to refresh AWS credentials via MFA."""
    settings = shared.get_settings()
    bind_context(command="login")
    try:
        ok = shared.build_services(settings).login.login()
    finally:
        clear_context()
    if not ok:
        raise typer.Exit(1)
