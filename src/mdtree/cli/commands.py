"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdtree.config import Settings, load_config
from mdtree.core.errors import MdtreeError
from mdtree.core.parse import Parser
from mdtree.core.pipeline import build_parser, discover_files, parse_file, render, run_export


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then apply its log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _parser(settings: Settings) -> Parser:
    try:
        return build_parser(settings.extensions)
    except MdtreeError as e:
        _fail("Could not load extensions", e)


def parse_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to parse")],
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or md")] = None,
    indent: Annotated[Optional[int], typer.Option("--indent", help="JSON indentation; 0 for compact")] = None,
    no_alias: Annotated[bool, typer.Option("--no-alias", help="snake_case keys instead of camelCase")] = False,
    ):
    """Parse a single file and print its document tree."""
    settings = _settings(overrides={
        "output_format": fmt, "indent": indent, "by_alias": False if no_alias else None,
    })
    parser = _parser(settings)
    try:
        doc = parse_file(Path(path), parser)
        output = render(
            doc, settings.output_format, settings.indent, settings.by_alias,
            parser.registry.renderers,
        )
    except (MdtreeError, OSError, ValueError) as e:
        _fail(f"Could not parse {path}", e)
    typer.echo(output, nl=False)


def export_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to export")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or md")] = None,
    ):
    """Parse a file or directory and write one output file per document."""
    settings = _settings(overrides={"output_dir": out, "output_format": fmt})
    parser = _parser(settings)
    output_dir = Path(settings.output_dir)
    try:
        results = run_export(
            path, output_dir, settings.output_format, parser,
            settings.indent, settings.by_alias,
        )
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No .md/.mdx files found under {path}.")
        raise typer.Exit(1)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to check")],
    ):
    """Parse every document and report block counts; exit 1 if any file fails."""
    settings = _settings()
    parser = _parser(settings)
    files = discover_files(Path(path))
    if not files:
        typer.echo(f"No .md/.mdx files found under {path}.")
        raise typer.Exit(1)

    failed = 0
    for p in files:
        try:
            doc = parse_file(p, parser)
        except (MdtreeError, OSError, ValueError) as e:
            failed += 1
            typer.echo(f"  failed: {p}: {e}", err=True)
            continue
        typer.echo(f"  ok: {p} ({len(doc.blocks)} blocks)")

    typer.echo(f"Checked {len(files)} document(s), {failed} failed")
    if failed:
        raise typer.Exit(1)
