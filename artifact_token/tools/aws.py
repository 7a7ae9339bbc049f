"""AWS adapters: sts identity probe, saml2aws login and CodeArtifact token issuing."""

from artifact_token.config import Settings
from artifact_token.models import CommandResult
from artifact_token.tools.runner import CommandRunner


class AwsIdentityClient:
    """Identity probe via `aws sts get-caller-identity`, re-authentication via saml2aws."""

    def __init__(self, settings: Settings, runner: CommandRunner):
        self._settings = settings
        self._runner = runner

    def probe(self) -> CommandResult:
        return self._runner.run(
            ["aws", "sts", "get-caller-identity"],
            timeout=self._settings.probe_timeout,
            extra_env={"AWS_PROFILE": self._settings.profile},
        )

    def login(self, interactive: bool = False) -> CommandResult:
        args = ["saml2aws", "login", "-a", self._settings.profile]
        if interactive:
            return self._runner.run(args, interactive=True)
        # --skip-prompt reuses the keychain entry and never asks for input
        return self._runner.run([*args, "--skip-prompt"], timeout=self._settings.probe_timeout)


class CodeArtifactTokenIssuer:
    """`aws codeartifact get-authorization-token` scoped to the configured domain."""

    def __init__(self, settings: Settings, runner: CommandRunner):
        self._settings = settings
        self._runner = runner

    def fetch_token(self) -> CommandResult:
        s = self._settings
        return self._runner.run(
            [
                "aws", "codeartifact", "get-authorization-token",
                "--domain", s.domain,
                "--domain-owner", s.owner,
                "--region", s.region,
                "--query", "authorizationToken",
                "--output", "text",
            ],
            timeout=s.probe_timeout,
            extra_env={"AWS_PROFILE": s.profile},
        )
