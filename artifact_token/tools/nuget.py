"""NuGet credential store adapter (dotnet CLI)."""

from artifact_token.config import Settings
from artifact_token.models import CommandResult
from artifact_token.tools.runner import CommandRunner


class NugetSourceStore:
    """Writes the token into the named NuGet source with `dotnet nuget update source`."""

    def __init__(self, settings: Settings, runner: CommandRunner):
        self._settings = settings
        self._runner = runner

    def update(self, token: str) -> CommandResult:
        result = self._runner.run(
            [
                "dotnet", "nuget", "update", "source", self._settings.source_name,
                "--username", self._settings.nuget_username,
                "--password", token,
                "--store-password-in-clear-text",
            ],
            timeout=self._settings.probe_timeout,
        )
        # never keep the token in the recorded argv
        result.args = [("***" if a == token else a) for a in result.args]
        return result
