"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

HOME = Path.home()

# AWS / CodeArtifact
AWS_PROFILE = os.getenv("AWS_TOKEN_PROFILE", "tlb-dev-2")
CODEARTIFACT_DOMAIN = os.getenv("CODEARTIFACT_DOMAIN", "tlb-test-code-artifact-domain")
CODEARTIFACT_OWNER = os.getenv("CODEARTIFACT_OWNER", "690772145391")
CODEARTIFACT_REGION = os.getenv("CODEARTIFACT_REGION", "eu-west-2")

# NuGet
NUGET_SOURCE_NAME = os.getenv("NUGET_SOURCE_NAME", "tlb-test-code-artifact-domain/internal-nuget-repo")
NUGET_USERNAME = os.getenv("NUGET_USERNAME", "aws")
NUGET_CONFIG_PATH = Path(os.getenv("NUGET_CONFIG_PATH", str(HOME / ".nuget" / "NuGet" / "NuGet.Config")))

# Timeouts (seconds)
REFRESH_TIMEOUT_SECONDS = float(os.getenv("REFRESH_TIMEOUT_SECONDS", "120"))
PROBE_TIMEOUT_SECONDS = float(os.getenv("PROBE_TIMEOUT_SECONDS", "60"))

# Lines searched after the domain marker when XPath lookup yields nothing
FALLBACK_SCAN_LINES = int(os.getenv("FALLBACK_SCAN_LINES", "5"))

# Logging
LOG_FILE = Path(os.getenv("AWS_TOKEN_LOG_FILE", str(HOME / "awstok.log")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# Homebrew (Apple Silicon and Intel) and .NET tool locations, searched before PATH
EXTRA_TOOL_DIRS = (
    Path("/opt/homebrew/bin"),
    Path("/usr/local/bin"),
    Path("/usr/local/share/dotnet"),
    HOME / ".dotnet" / "tools",
)


class Settings(BaseModel):
    """Immutable settings shared by every operation; built once at startup."""

    model_config = {"frozen": True}

    profile: str = AWS_PROFILE
    domain: str = CODEARTIFACT_DOMAIN
    owner: str = CODEARTIFACT_OWNER
    region: str = CODEARTIFACT_REGION
    source_name: str = NUGET_SOURCE_NAME
    nuget_username: str = NUGET_USERNAME
    nuget_config_path: Path = NUGET_CONFIG_PATH
    log_file: Path = LOG_FILE
    refresh_timeout: float = Field(default=REFRESH_TIMEOUT_SECONDS, gt=0)
    probe_timeout: float = Field(default=PROBE_TIMEOUT_SECONDS, gt=0)
    fallback_scan_lines: int = Field(default=FALLBACK_SCAN_LINES, ge=1)
    extra_tool_dirs: tuple[Path, ...] = EXTRA_TOOL_DIRS

    @property
    def credential_key(self) -> str:
        """Element name NuGet uses for this source under <packageSourceCredentials>."""
        return self.source_name.replace("/", "-")

    def tool_path(self, base_path: str | None = None) -> str:
        """PATH for external tools: extra tool dirs first, then the inherited PATH."""
        base = os.environ.get("PATH", "") if base_path is None else base_path
        parts = [str(p) for p in self.extra_tool_dirs]
        if base:
            parts.append(base)
        return os.pathsep.join(parts)


def load_settings(**overrides) -> Settings:
    """Return settings from environment defaults, with explicit overrides applied."""
    return Settings(**overrides)
