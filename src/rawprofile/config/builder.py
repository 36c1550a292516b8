"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building RawProfileConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from rawprofile.config.models import LoggingConfig, OutputConfig, RawProfileConfig

logger = logging.getLogger(__name__)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None

    # Output config
    output_indent: int | None = None
    output_sort_keys: bool | None = None


class ConfigBuilder:
    """Builds RawProfileConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env())
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> RawProfileConfig:
        """Build the final RawProfileConfig with defaults for unset values.

        Raises:
            ValueError: If a resolved value fails model validation.
        """
        logging_config = LoggingConfig(
            level=self._get("logging_level", "warning"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        output = OutputConfig(
            indent=self._get("output_indent", None),
            sort_keys=self._get("output_sort_keys", False),
        )

        return RawProfileConfig(logging=logging_config, output=output)


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary from TOML file.

    Returns:
        ConfigSource with values from the config file.
    """
    logging_conf = file_config.get("logging", {})
    output = file_config.get("output", {})

    log_file_str = logging_conf.get("file")
    log_file = Path(log_file_str).expanduser() if log_file_str else None

    return ConfigSource(
        logging_level=logging_conf.get("level"),
        logging_file=log_file,
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
        output_indent=output.get("indent"),
        output_sort_keys=output.get("sort_keys"),
    )


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_path(value: str) -> Path:
    return Path(value).expanduser()


# Environment variable -> (ConfigSource field, parser)
ENV_VARIABLES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "RAWPROFILE_LOG_LEVEL": ("logging_level", str),
    "RAWPROFILE_LOG_FILE": ("logging_file", _parse_path),
    "RAWPROFILE_LOG_FORMAT": ("logging_format", str),
    "RAWPROFILE_LOG_INCLUDE_STDERR": ("logging_include_stderr", _parse_bool),
    "RAWPROFILE_OUTPUT_INDENT": ("output_indent", int),
    "RAWPROFILE_OUTPUT_SORT_KEYS": ("output_sort_keys", _parse_bool),
}


def source_from_env(env: Mapping[str, str] | None = None) -> ConfigSource:
    """Create ConfigSource from RAWPROFILE_* environment variables.

    A value that cannot be parsed (a non-numeric indent) is logged and
    ignored, so the setting falls back to the file or default value.

    Args:
        env: Variables to read; os.environ when None.

    Returns:
        ConfigSource with values from the environment.
    """
    env = os.environ if env is None else env
    values: dict[str, Any] = {}
    for var, (field_name, parse) in ENV_VARIABLES.items():
        raw = env.get(var)
        if raw is None:
            continue
        try:
            values[field_name] = parse(raw)
        except ValueError:
            logger.warning("Ignoring invalid value for %s: %r", var, raw)
    return ConfigSource(**values)
