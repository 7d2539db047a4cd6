"""Command line interface for rbsast."""

from rbsast.cli.main import cli

__all__ = ["cli"]
