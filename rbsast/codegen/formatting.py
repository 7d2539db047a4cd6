"""Formatting configuration for code generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from rbsast.errors import ConfigurationError


@dataclass
class FormattingConfig:
    """Configuration for code formatting."""

    # Lines longer than this are broken where the layout allows it
    max_width: int = 80

    # Spaces per nesting level of class, module and interface bodies
    indent_size: int = 2

    def __post_init__(self) -> None:
        for name in ("max_width", "indent_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                msg = f"{name} must be a positive integer, got {value!r}"
                raise ConfigurationError(msg)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "max_width": self.max_width,
            "indent_size": self.indent_size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FormattingConfig:
        """Create config from dictionary."""
        unknown = set(data) - {"max_width", "indent_size"}
        if unknown:
            msg = f"Unknown formatting options: {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)

        config = {}
        if "max_width" in data:
            config["max_width"] = data["max_width"]
        if "indent_size" in data:
            config["indent_size"] = data["indent_size"]

        return cls(**config)

    @classmethod
    def from_file(cls, path: str | Path) -> FormattingConfig:
        """Load config from a YAML file.

        The options may sit at the top level or under a ``format`` key.
        """
        with Path(path).open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            msg = f"{path}: expected a mapping of formatting options"
            raise ConfigurationError(msg)

        return cls.from_dict(data.get("format", data))
