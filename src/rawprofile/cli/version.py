"""CLI version command for rawprofile."""

import copy
import json
import sys
from pathlib import Path

import click

from rawprofile.cli.exit_codes import ExitCode
from rawprofile.profile_io import ProfileReadError, load_profile
from rawprofile.versioning import (
    CURRENT_VERSION,
    get_profile_version,
    try_upgrade_raw_profile,
)


@click.command("version")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
def version_command(file: Path, output_format: str) -> None:
    """Show the format version of a raw profile.

    Reports the version FILE declares, the current version, and whether
    the profile can be upgraded. FILE is not modified.
    """
    if not file.exists():
        click.echo(f"Error: File not found: {file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        profile = load_profile(file)
    except ProfileReadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.PARSE_ERROR)

    declared = get_profile_version(profile)
    # Trial upgrade on a copy to find out whether the real one would succeed
    result = try_upgrade_raw_profile(copy.deepcopy(profile))

    if result.success:
        status = "current" if declared == CURRENT_VERSION else "upgradable"
    else:
        status = result.error_kind.value

    if output_format == "json":
        data = {
            "file": str(file),
            "version": declared,
            "current_version": CURRENT_VERSION,
            "status": status,
            "error": result.error,
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"File:            {file}")
    click.echo(f"Version:         {declared}")
    click.echo(f"Current version: {CURRENT_VERSION}")
    click.echo(f"Status:          {status}")
    if result.error:
        click.echo(f"Reason:          {result.error}")
