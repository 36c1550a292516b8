"""CLI upgrade command for rawprofile."""

import logging
import sys
from pathlib import Path

import click

from rawprofile.cli.exit_codes import UPGRADE_ERROR_EXIT_CODES, ExitCode
from rawprofile.config import RawProfileConfig
from rawprofile.logging import profile_context
from rawprofile.profile_io import (
    ProfileReadError,
    dump_profile,
    load_profile,
    save_profile,
)
from rawprofile.versioning import (
    CURRENT_VERSION,
    ProfileUpgradeError,
    get_profile_version,
    upgrade_raw_profile,
)

logger = logging.getLogger(__name__)


@click.command("upgrade")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the upgraded profile here (default: stdout). "
    "A .gz suffix writes a gzip-compressed file.",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=None,
    help="Indent the written JSON by this many spaces (default: compact).",
)
@click.option(
    "--sort-keys",
    is_flag=True,
    help="Sort object keys in the written JSON.",
)
@click.option(
    "--check",
    is_flag=True,
    help="Only report whether the profile can be upgraded; write nothing.",
)
@click.pass_context
def upgrade_command(
    ctx: click.Context,
    file: Path,
    output: Path | None,
    indent: int | None,
    sort_keys: bool,
    check: bool,
) -> None:
    """Upgrade a raw profile to the current format version.

    FILE is a raw profile (.json or .json.gz) written by the Gecko profiler.
    """
    config: RawProfileConfig = (ctx.obj or {}).get("config") or RawProfileConfig()

    if not file.exists():
        click.echo(f"Error: File not found: {file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        profile = load_profile(file)
    except ProfileReadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.PARSE_ERROR)

    from_version = get_profile_version(profile)
    with profile_context(file.name):
        try:
            upgrade_raw_profile(profile)
        except ProfileUpgradeError as e:
            logger.error(
                "Upgrade failed: %s",
                e,
                extra={"from_version": from_version, "error_kind": e.kind.value},
            )
            click.echo(f"Error: {e}", err=True)
            sys.exit(UPGRADE_ERROR_EXIT_CODES[e.kind])

    if check:
        if from_version == CURRENT_VERSION:
            click.echo(f"{file}: already at version {CURRENT_VERSION}")
        else:
            click.echo(
                f"{file}: can be upgraded from version {from_version} "
                f"to {CURRENT_VERSION}"
            )
        return

    indent = indent if indent is not None else config.output.indent
    sort_keys = sort_keys or config.output.sort_keys

    if output is None:
        click.echo(dump_profile(profile, indent=indent, sort_keys=sort_keys))
        return

    try:
        save_profile(profile, output, indent=indent, sort_keys=sort_keys)
    except OSError as e:
        click.echo(f"Error: Could not write {output}: {e}", err=True)
        sys.exit(ExitCode.GENERAL_ERROR)
    click.echo(f"Upgraded {file} to version {CURRENT_VERSION}: {output}", err=True)
