"""CLI module for rawprofile."""

import logging
from pathlib import Path

import click

from rawprofile.cli.exit_codes import ExitCode
from rawprofile.config import TomlParseError, get_config
from rawprofile.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="rawprofile")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.rawprofile/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Upgrade Gecko raw profiles to the current format version."""
    ctx.ensure_object(dict)

    try:
        config = get_config(
            config_path=config_path,
            log_level=log_level,
            log_file=log_file,
            log_format="json" if log_json else None,
            strict=True,
        )
    except (TomlParseError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    configure_logging(config.logging)
    logger.debug(
        "rawprofile starting: log_level=%s, log_file=%s",
        config.logging.level,
        config.logging.file or "stderr",
    )
    ctx.obj["config"] = config


def _register_commands() -> None:
    from rawprofile.cli.upgrade import upgrade_command
    from rawprofile.cli.version import version_command

    main.add_command(upgrade_command)
    main.add_command(version_command)


_register_commands()
