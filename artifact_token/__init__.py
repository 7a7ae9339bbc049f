"""Refresh AWS CodeArtifact tokens into the NuGet credential store."""

__version__ = "0.1.0"
