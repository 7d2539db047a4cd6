"""Tests for formatting configuration."""

import pytest

from rbsast.codegen import FormattingConfig
from rbsast.errors import ConfigurationError


class TestFormattingConfig:
    """Test option validation and loading."""

    def test_defaults(self) -> None:
        """Test the default options."""
        config = FormattingConfig()
        assert config.max_width == 80
        assert config.indent_size == 2

    def test_from_dict(self) -> None:
        """Test building options from a mapping."""
        config = FormattingConfig.from_dict({"max_width": 100, "indent_size": 4})
        assert config == FormattingConfig(max_width=100, indent_size=4)

    def test_from_dict_partial(self) -> None:
        """Test that missing options keep their defaults."""
        assert FormattingConfig.from_dict({"indent_size": 4}).max_width == 80

    def test_to_dict(self) -> None:
        """Test conversion back to a mapping."""
        config = FormattingConfig(max_width=60)
        assert FormattingConfig.from_dict(config.to_dict()) == config

    def test_unknown_option(self) -> None:
        """Test that unknown options are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown formatting options: tabs"):
            FormattingConfig.from_dict({"tabs": True})

    @pytest.mark.parametrize("value", [0, -1, "80", 1.5, True, None])
    def test_invalid_width(self, value) -> None:
        """Test values that are not positive integers."""
        with pytest.raises(ConfigurationError, match="max_width must be a positive integer"):
            FormattingConfig(max_width=value)

    def test_invalid_indent(self) -> None:
        """Test a zero indent."""
        with pytest.raises(ConfigurationError, match="indent_size"):
            FormattingConfig.from_dict({"indent_size": 0})


class TestConfigFile:
    """Test loading options from YAML."""

    def test_top_level(self, tmp_path) -> None:
        """Test options at the top level of the file."""
        path = tmp_path / "rbsast.yml"
        path.write_text("max_width: 100\nindent_size: 4\n", encoding="utf-8")

        config = FormattingConfig.from_file(path)
        assert (config.max_width, config.indent_size) == (100, 4)

    def test_format_section(self, tmp_path) -> None:
        """Test options under a `format` key."""
        path = tmp_path / "rbsast.yml"
        path.write_text("format:\n  max_width: 40\n", encoding="utf-8")

        assert FormattingConfig.from_file(str(path)).max_width == 40

    def test_empty_file(self, tmp_path) -> None:
        """Test that an empty file gives the defaults."""
        path = tmp_path / "rbsast.yml"
        path.write_text("", encoding="utf-8")

        assert FormattingConfig.from_file(path) == FormattingConfig()

    def test_not_a_mapping(self, tmp_path) -> None:
        """Test a file holding a list."""
        path = tmp_path / "rbsast.yml"
        path.write_text("- max_width\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="expected a mapping"):
            FormattingConfig.from_file(path)

    def test_invalid_value(self, tmp_path) -> None:
        """Test a bad value in the file."""
        path = tmp_path / "rbsast.yml"
        path.write_text("max_width: wide\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            FormattingConfig.from_file(path)
