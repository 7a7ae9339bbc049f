"""Exceptions raised by the token tooling."""

from pathlib import Path


class ArtifactTokenError(Exception):
    """Base class for errors raised by artifact_token."""


class ToolNotFoundError(ArtifactTokenError):
    """An external executable could not be found on the configured PATH."""

    def __init__(self, executable: str):
        super().__init__(f"Executable not found: {executable}")
        self.executable = executable


class ConfigNotFoundError(ArtifactTokenError):
    """The NuGet config file does not exist."""

    def __init__(self, path: Path):
        super().__init__(f"NuGet config file not found: {path}")
        self.path = path


class TokenNotFoundError(ArtifactTokenError):
    """The NuGet config has no stored password for the configured source."""

    def __init__(self, path: Path, credential_key: str):
        super().__init__(f"No token for {credential_key!r} in {path}")
        self.path = path
        self.credential_key = credential_key
