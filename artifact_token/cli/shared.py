"""Shared CLI helpers: console, logger, settings and the wired-up tool adapters."""

from rich.console import Console

from artifact_token.config import Settings, load_settings
from artifact_token.guard import GuardedRunner
from artifact_token.inspector import TokenInspector
from artifact_token.login import InteractiveLogin
from artifact_token.refresh import RefreshOrchestrator
from artifact_token.tools import (
    AwsIdentityClient,
    CodeArtifactTokenIssuer,
    CommandRunner,
    DesktopNotifier,
    NugetSourceStore,
)
from artifact_token.utils.logger import configure_logging, get_logger

console = Console()
logger = get_logger("artifact_token.cli")

_settings: Settings | None = None


def get_settings() -> Settings:
    """Settings for this process; logging is pointed at settings.log_file on first use."""
    global _settings
    if _settings is None:
        set_settings(load_settings())
    return _settings


def set_settings(settings: Settings) -> None:
    global _settings
    _settings = settings
    configure_logging(settings.log_file)


class Services:
    """Every operation, wired against the real external tools."""

    def __init__(
        self,
        orchestrator: RefreshOrchestrator,
        login: InteractiveLogin,
        guard: GuardedRunner,
        inspector: TokenInspector,
    ):
        self.orchestrator = orchestrator
        self.login = login
        self.guard = guard
        self.inspector = inspector


def build_services(settings: Settings) -> Services:
    runner = CommandRunner(settings)
    identity = AwsIdentityClient(settings, runner)
    notifier = DesktopNotifier(runner)
    orchestrator = RefreshOrchestrator(
        identity=identity,
        issuer=CodeArtifactTokenIssuer(settings, runner),
        store=NugetSourceStore(settings, runner),
        notifier=notifier,
        source_name=settings.source_name,
    )
    return Services(
        orchestrator=orchestrator,
        login=InteractiveLogin(identity, orchestrator, settings.profile, console=console),
        guard=GuardedRunner(notifier),
        inspector=TokenInspector.from_settings(settings),
    )
