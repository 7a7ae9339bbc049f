"""External tool adapters: protocols plus the AWS, NuGet and desktop implementations."""

from artifact_token.tools.aws import AwsIdentityClient, CodeArtifactTokenIssuer
from artifact_token.tools.desktop import DesktopNotifier
from artifact_token.tools.nuget import NugetSourceStore
from artifact_token.tools.protocol import IdentityClient, Notifier, TokenIssuer, TokenReader, TokenStore
from artifact_token.tools.runner import CommandRunner

__all__ = [
    "AwsIdentityClient",
    "CodeArtifactTokenIssuer",
    "CommandRunner",
    "DesktopNotifier",
    "IdentityClient",
    "Notifier",
    "NugetSourceStore",
    "TokenIssuer",
    "TokenReader",
    "TokenStore",
]
