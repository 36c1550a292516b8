"""Tests for configuration models."""

from __future__ import annotations

import pytest

from rawprofile.config.models import LoggingConfig, OutputConfig, RawProfileConfig


class TestLoggingConfig:
    """Tests for LoggingConfig validation."""

    def test_defaults(self) -> None:
        """Should default to warning-level text logging on stderr."""
        config = LoggingConfig()
        assert config.level == "warning"
        assert config.file is None
        assert config.format == "text"
        assert config.include_stderr is False

    @pytest.mark.parametrize("level", ["debug", "INFO", "Warning", "error"])
    def test_accepts_levels_case_insensitively(self, level: str) -> None:
        """Should accept known levels in any case."""
        assert LoggingConfig(level=level).level == level

    def test_rejects_unknown_level(self) -> None:
        """Should reject an unknown level."""
        with pytest.raises(ValueError, match="level must be one of"):
            LoggingConfig(level="verbose")

    def test_rejects_unknown_format(self) -> None:
        """Should reject an unknown format."""
        with pytest.raises(ValueError, match="format must be one of"):
            LoggingConfig(format="xml")

    def test_rejects_non_positive_max_bytes(self) -> None:
        """Should reject a rotation threshold of zero."""
        with pytest.raises(ValueError, match="max_bytes must be positive"):
            LoggingConfig(max_bytes=0)

    def test_rejects_negative_backup_count(self) -> None:
        """Should reject a negative backup count."""
        with pytest.raises(ValueError, match="backup_count must be non-negative"):
            LoggingConfig(backup_count=-1)


class TestOutputConfig:
    """Tests for OutputConfig validation."""

    def test_defaults_to_compact_unsorted(self) -> None:
        """Should write compact, unsorted JSON by default."""
        config = OutputConfig()
        assert config.indent is None
        assert config.sort_keys is False

    def test_accepts_zero_indent(self) -> None:
        """Should accept an indent of zero."""
        assert OutputConfig(indent=0).indent == 0

    def test_rejects_negative_indent(self) -> None:
        """Should reject a negative indent."""
        with pytest.raises(ValueError, match="indent must be non-negative"):
            OutputConfig(indent=-2)


class TestRawProfileConfig:
    """Tests for the main config container."""

    def test_sections_are_independent(self) -> None:
        """Should give each instance its own section objects."""
        first = RawProfileConfig()
        second = RawProfileConfig()
        first.output.sort_keys = True
        assert second.output.sort_keys is False
