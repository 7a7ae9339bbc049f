"""Narrow interfaces over the external tools (identity, token issuer, credential store, desktop)."""

from pathlib import Path
from typing import Protocol

from artifact_token.models import CommandResult


class IdentityClient(Protocol):
    """Checks and renews cloud credentials for the configured profile."""

    def probe(self) -> CommandResult:
        """Call the identity endpoint once; ok iff current credentials are valid."""
        ...

    def login(self, interactive: bool = False) -> CommandResult:
        """Re-authenticate. Non-interactive logins must not wait on user input."""
        ...


class TokenIssuer(Protocol):
    """Requests a short-lived repository access token."""

    def fetch_token(self) -> CommandResult:
        """Return a result whose output is the token on success, or the raw error text."""
        ...


class TokenStore(Protocol):
    """Package-manager credential slot for the configured source."""

    def update(self, token: str) -> CommandResult:
        """Overwrite the stored password for the source with token."""
        ...


class TokenReader(Protocol):
    """One strategy for reading the stored token back out of the package-manager config."""

    name: str

    def read(self, path: Path) -> str | None:
        ...


class Notifier(Protocol):
    """Desktop feedback. Implementations must not raise."""

    def notify(self, subtitle: str, message: str) -> None:
        ...

    def prompt_login(self, login_command: list[str]) -> bool:
        """Offer the interactive login without waiting for the answer; True if the offer was made."""
        ...
