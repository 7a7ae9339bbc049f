"""Print the effective settings as a table."""

from rich.table import Table

from . import shared


def show_config() -> None:
    """Shows the effective settings (environment and .env applied)."""
    settings = shared.get_settings()
    shared.logger.bind(command="show-config").info("show_config.start")

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    rows = [
        ("AWS profile", settings.profile),
        ("CodeArtifact domain", settings.domain),
        ("Domain owner", settings.owner),
        ("Region", settings.region),
        ("NuGet source", settings.source_name),
        ("Credential key", settings.credential_key),
        ("NuGet username", settings.nuget_username),
        ("NuGet config", str(settings.nuget_config_path)),
        ("Log file", str(settings.log_file)),
        ("Refresh timeout (s)", f"{settings.refresh_timeout:g}"),
        ("Probe timeout (s)", f"{settings.probe_timeout:g}"),
        ("Fallback scan lines", str(settings.fallback_scan_lines)),
    ]
    for name, value in rows:
        table.add_row(name, value)
    shared.console.print(table)
