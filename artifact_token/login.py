"""Interactive login: saml2aws with MFA, then an immediate refresh cycle."""

from rich.console import Console

from artifact_token.refresh import RefreshOrchestrator
from artifact_token.tools.protocol import IdentityClient
from artifact_token.utils.logger import get_logger

logger = get_logger("artifact_token.login")


class InteractiveLogin:
    """The only operation allowed to block on human input."""

    def __init__(
        self,
        identity: IdentityClient,
        orchestrator: RefreshOrchestrator,
        profile: str,
        console: Console | None = None,
    ):
        self._identity = identity
        self._orchestrator = orchestrator
        self._profile = profile
        self._console = console or Console()

    def login(self) -> bool:
        log = logger.bind(profile=self._profile)
        log.info("login.start")
        self._console.print(f"[bold]Logging in to AWS with saml2aws for profile '{self._profile}'[/bold]")
        self._console.print("Please have your authenticator app ready for MFA.\n")

        result = self._identity.login(interactive=True)
        if not result.ok:
            self._console.print("\n[red]Login failed.[/red]")
            log.warning("login.failed", returncode=result.returncode, error=result.detail)
            return False

        self._console.print("\n[green]Login successful! AWS credentials refreshed.[/green]")
        self._console.print("Refreshing NuGet token...")
        log.info("login.ok")
        refreshed = self._orchestrator.refresh()
        log.info("login.refresh_done", status=refreshed.status.value)
        return refreshed.ok
