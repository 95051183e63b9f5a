"""wsfmt command line interface."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from wsfmt import __version__
from wsfmt.config import WsfmtConfig, find_config, load_config
from wsfmt.edits import EditSet
from wsfmt.errors import DiagnosticRenderer, EditError
from wsfmt.formatter import WhitespaceFormatter, explain
from wsfmt.logging_config import configure_logging
from wsfmt.project import init_config
from wsfmt.source import SourceText

logger = logging.getLogger(__name__)


def _load_config(path: Path) -> WsfmtConfig:
    """Load the nearest wsfmt.toml, or defaults when there is none."""
    try:
        config_path = find_config(path)
    except FileNotFoundError:
        logger.debug("no config found above %s, using defaults", path)
        return WsfmtConfig()
    try:
        return load_config(config_path)
    except ValueError as e:
        click.echo(f"error: {config_path}: {e}", err=True)
        raise SystemExit(1)


def _collect_files(target: Path, patterns: list[str]) -> list[Path]:
    if not target.is_dir():
        return [target]
    files: set[Path] = set()
    for pattern in patterns:
        files.update(p for p in target.rglob(pattern) if p.is_file())
    return sorted(files)


def _plan(
    formatter: WhitespaceFormatter, source: SourceText, *, color: bool = True
) -> EditSet:
    """Plan the changes for one source, reporting a broken edit contract and exiting."""
    try:
        return formatter.plan(source.content)
    except EditError as e:
        renderer = DiagnosticRenderer(source, color=color)
        click.echo(renderer.render(e.diagnostic(source)), err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(__version__, prog_name="wsfmt")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Whitespace formatter for plain text and source files."""
    configure_logging(verbose=verbose)


@main.command(name="format")
@click.argument("path", default=".", type=click.Path(exists=True))
@click.option("--check", is_flag=True, help="Check formatting without modifying files.")
@click.option("--stdin", "use_stdin", is_flag=True, help="Read from stdin, write to stdout.")
@click.option("--tab-width", type=click.IntRange(min=1), default=None, help="Override tab width.")
def format_cmd(path: str, check: bool, use_stdin: bool, tab_width: int | None) -> None:
    """Format the whitespace of files."""
    target = Path(path)
    config = _load_config(target)
    if tab_width is not None:
        config.format.tab_width = tab_width
    formatter = WhitespaceFormatter(config.format)

    if use_stdin:
        source = SourceText(sys.stdin.read(), "<stdin>")
        formatted = _plan(formatter, source).render()
        if check:
            if formatted != source.content:
                raise SystemExit(1)
        else:
            sys.stdout.write(formatted)
        return

    files = _collect_files(target, config.files.include)
    if not files:
        click.echo("no files found", err=True)
        return

    needs_formatting = False
    for file in files:
        source = SourceText.from_path(file)
        formatted = _plan(formatter, source).render()
        if formatted != source.content:
            if check:
                click.echo(f"would reformat {file}")
                needs_formatting = True
            else:
                with open(file, "w", encoding="utf-8", newline="") as f:
                    f.write(formatted)
                click.echo(f"formatted {file}")

    if check and needs_formatting:
        raise SystemExit(1)


@main.command(name="explain")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--color/--no-color", default=True, help="Colorize the output.")
def explain_cmd(file: str, color: bool) -> None:
    """Show the changes formatting would make to FILE."""
    path = Path(file)
    config = _load_config(path)
    source = SourceText.from_path(path)
    edits = _plan(WhitespaceFormatter(config.format), source, color=color)

    notes = explain(edits, source)
    if not notes:
        click.echo("no changes")
        return

    renderer = DiagnosticRenderer(source, color=color)
    for note in notes:
        click.echo(renderer.render(note))
    click.echo(f"{len(notes)} change(s)")


@main.command()
@click.argument("path", default=".", type=click.Path(file_okay=False))
def init(path: str) -> None:
    """Write a default wsfmt.toml."""
    try:
        config_path = init_config(Path(path))
        click.echo(f"created {config_path}")
    except FileExistsError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
