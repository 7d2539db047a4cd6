"""CLI interface for RBS AST."""

from __future__ import annotations

import dataclasses
import logging
import sys
from difflib import unified_diff
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.tree import Tree

from rbsast.codegen import FormattingConfig, TreePrinter, format_source
from rbsast.errors import ConfigurationError, FormatterError, RBSSyntaxError
from rbsast.parser import parse as parse_source
from rbsast.serialization import JsonSerializer, YamlSerializer
from rbsast.version import RBSAST_VERSION
from rbsast.visitor import NodeCounter

logger = logging.getLogger(__name__)

console = Console()
error_console = Console(stderr=True)


@click.group()
@click.version_option(version=RBSAST_VERSION, prog_name="rbsast")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """RBS AST - Parse and format RBS signature files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _report_syntax_error(path: Path, error: RBSSyntaxError) -> None:
    error_console.print(
        f"[red]{escape(str(path))}:{error.line}:{error.column}: {escape(error.message)}[/red]",
        soft_wrap=True,
    )


def _report_error(path: Path, error: Exception) -> None:
    error_console.print(f"[red]{escape(str(path))}: {escape(str(error))}[/red]", soft_wrap=True)


def _load_config(config_file: str | None, width: int | None) -> FormattingConfig:
    """Build the formatting options; ``--width`` wins over the file."""
    try:
        config = FormattingConfig.from_file(config_file) if config_file else FormattingConfig()
        if width is not None:
            config = dataclasses.replace(config, max_width=width)
    except ConfigurationError as e:
        error_console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]", soft_wrap=True)
        raise click.Abort from None
    return config


def _print_diff(path: Path, original: str, formatted: str) -> None:
    """Print a unified diff between the file and its formatted text."""
    diff_text = "".join(
        unified_diff(
            original.splitlines(keepends=True),
            formatted.splitlines(keepends=True),
            fromfile=f"{path} (original)",
            tofile=f"{path} (formatted)",
        )
    )
    console.print(Syntax(diff_text, "diff", theme="monokai", word_wrap=True))


@cli.command(name="format")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("-w", "--write", is_flag=True, help="Rewrite files in place")
@click.option("--check", is_flag=True, help="Exit with status 1 if any file would change")
@click.option("--diff", is_flag=True, help="Show a diff instead of the formatted text")
@click.option("--width", type=click.IntRange(min=1), help="Maximum line width")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with formatting options",
)
def format_command(
    files: tuple[str, ...],
    write: bool,
    check: bool,
    diff: bool,
    width: int | None,
    config_file: str | None,
) -> None:
    """Format RBS files.

    Prints the formatted text to stdout unless --write, --check or --diff is
    given.
    """
    config = _load_config(config_file, width)
    failed = False
    changed = []

    for name in files:
        path = Path(name)
        original = path.read_text(encoding="utf-8")
        try:
            formatted = format_source(original, config)
        except RBSSyntaxError as e:
            _report_syntax_error(path, e)
            failed = True
            continue
        except FormatterError as e:
            _report_error(path, e)
            failed = True
            continue

        if formatted != original:
            changed.append(path)

        if diff:
            if formatted != original:
                _print_diff(path, original, formatted)
        elif check:
            if formatted != original:
                console.print(f"[yellow]would reformat {escape(str(path))}[/yellow]", soft_wrap=True)
        elif write:
            if formatted != original:
                path.write_text(formatted, encoding="utf-8")
                console.print(f"[green]reformatted {escape(str(path))}[/green]", soft_wrap=True)
        else:
            click.echo(formatted, nl=False)

    logger.debug("Formatted %d file(s), %d changed", len(files), len(changed))

    if failed or (check and changed):
        sys.exit(1)


def _build_tree(label: str, value: Any, tree: Tree) -> None:
    """Add a serialized node or value under ``tree``."""
    if isinstance(value, dict):
        kind = value.get("type")
        branch = tree.add(f"[bold blue]{escape(label)}[/bold blue]: {kind}" if kind else label)
        for key, item in value.items():
            if key != "type":
                _build_tree(key, item, branch)
    elif isinstance(value, list):
        if not value:
            return
        branch = tree.add(f"[bold]{escape(label)}[/bold] ({len(value)})")
        for index, item in enumerate(value):
            _build_tree(f"[{index}]", item, branch)
    else:
        tree.add(f"{escape(label)} = [green]{escape(repr(value))}[/green]")


def _render_tree(ast: Any) -> Tree:
    data = JsonSerializer(include_metadata=False).visit(ast)
    tree = Tree("[bold]Root[/bold]")
    for index, declaration in enumerate(data.get("declarations", [])):
        _build_tree(f"[{index}]", declaration, tree)
    return tree


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(), help="Output file (default: stdout)")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["sexp", "json", "yaml", "tree"]),
    default="sexp",
    help="Output format",
)
def parse(input_file: str, output: str | None, output_format: str) -> None:
    """Parse an RBS file and dump its tree."""
    path = Path(input_file)
    try:
        ast = parse_source(path.read_text(encoding="utf-8"))
    except RBSSyntaxError as e:
        _report_syntax_error(path, e)
        raise click.Abort from None

    if output_format == "tree":
        tree = _render_tree(ast)
        if output:
            with Path(output).open("w", encoding="utf-8") as f:
                Console(file=f, width=120, legacy_windows=False).print(tree)
            console.print(f"[green]AST tree written to {escape(output)}[/green]", soft_wrap=True)
        else:
            console.print(tree)
        return

    if output_format == "json":
        result = JsonSerializer().serialize(ast) + "\n"
    elif output_format == "yaml":
        result = YamlSerializer().serialize(ast)
    else:
        result = TreePrinter().print(ast)

    if output:
        Path(output).write_text(result, encoding="utf-8")
        console.print(
            f"[green]AST {output_format} written to {escape(output)}[/green]", soft_wrap=True
        )
    else:
        click.echo(result, nl=False)


def _describe_counts(counts: dict[str, int]) -> str:
    parts = [
        f"{counts[key]} {key.replace('_', ' ')}"
        for key in (
            "classes",
            "modules",
            "interfaces",
            "type_aliases",
            "constants",
            "globals",
            "methods",
        )
        if counts.get(key)
    ]
    return ", ".join(parts) if parts else "no declarations"


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def validate(files: tuple[str, ...]) -> None:
    """Check RBS files for syntax errors."""
    failed = False

    for name in files:
        path = Path(name)
        try:
            ast = parse_source(path.read_text(encoding="utf-8"))
        except RBSSyntaxError as e:
            _report_syntax_error(path, e)
            failed = True
            continue

        counts = NodeCounter().count(ast)
        console.print(
            f"[green]✓[/green] {escape(str(path))}: {_describe_counts(counts)}", soft_wrap=True
        )

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
