"""Configuration management for rawprofile.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (RAWPROFILE_*)
3. Config file (~/.rawprofile/config.toml)
4. Default values (lowest priority)
"""

from rawprofile.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from rawprofile.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from rawprofile.config.models import LoggingConfig, OutputConfig, RawProfileConfig
from rawprofile.config.toml_parser import TomlParseError, load_toml_file

__all__ = [
    # Models
    "LoggingConfig",
    "OutputConfig",
    "RawProfileConfig",
    # Loader
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Builder
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    # TOML
    "TomlParseError",
    "load_toml_file",
]
