"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (RAWPROFILE_*)
3. Config file (~/.rawprofile/config.toml)
4. Default values

Environment variables:
- RAWPROFILE_CONFIG_PATH: Path to config file (overrides default location)
- RAWPROFILE_LOG_LEVEL: debug, info, warning or error
- RAWPROFILE_LOG_FILE: Path to log file
- RAWPROFILE_LOG_FORMAT: text or json
- RAWPROFILE_LOG_INCLUDE_STDERR: Also log to stderr when a file is set
- RAWPROFILE_OUTPUT_INDENT: JSON indentation of written profiles
- RAWPROFILE_OUTPUT_SORT_KEYS: Sort keys of written profiles
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from rawprofile.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from rawprofile.config.models import RawProfileConfig
from rawprofile.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".rawprofile"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by RAWPROFILE_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("RAWPROFILE_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()
    return load_toml_file(path, strict=strict)


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    output_indent: int | None = None,
    # Variables to read instead of os.environ
    env: Mapping[str, str] | None = None,
    *,
    strict: bool = False,
) -> RawProfileConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides RAWPROFILE_CONFIG_PATH).
        log_level: CLI override for the log level.
        log_file: CLI override for the log file.
        log_format: CLI override for the log format.
        output_indent: CLI override for output indentation.
        env: Environment variables to read (os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        RawProfileConfig with merged configuration.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        ValueError: If a merged value is invalid.
    """
    file_config = load_config_file(config_path, strict=strict)

    cli_source = ConfigSource(
        logging_level=log_level,
        logging_file=log_file,
        logging_format=log_format,
        output_indent=output_indent,
    )

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config))
    builder.apply(source_from_env(env))
    builder.apply(cli_source)
    return builder.build()
