"""CLI entry point: parse, check, run."""

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml

from munge import __version__
from munge.ast_nodes import Program, describe
from munge.checker import check
from munge.config import Settings, load_settings
from munge.document import parse_document
from munge.errors import MungeError, ParseError
from munge.executor import run
from munge.log import get_logger, setup_logging
from munge.parser import parse

app = typer.Typer(
    name="munge",
    help="munge: extract named values from HTML with a tiny selector DSL.",
)

logger = get_logger(__name__)


def _read_file(path: Path) -> str:
    if not path.exists():
        typer.echo(f"Error: file not found: {path}", err=True)
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _settings(config: Optional[Path]) -> Settings:
    try:
        settings = load_settings(config)
    except MungeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    setup_logging(settings)
    return settings


def _parse_and_catch(path: Path) -> Program:
    source = _read_file(path)
    try:
        return parse(source, path=str(path))
    except ParseError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)


def to_plain(value: Any) -> Any:
    """Make a result value serializable; nodes become their outer HTML."""
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    if hasattr(value, "outer_html"):
        return value.outer_html()
    return value


ConfigOption = typer.Option(None, "--config", "-c", help="YAML settings file")


@app.command("parse")
def parse_cmd(
    file: Path = typer.Argument(..., help=".munge file"),
    config: Optional[Path] = ConfigOption,
):
    """Parse file and print its statements."""
    _settings(config)
    program = _parse_and_catch(file)
    typer.echo(f"Parsed {len(program.statements)} statements.")
    for i, s in enumerate(program.statements):
        typer.echo(f"  {i + 1}. {type(s).__name__}: {describe(s)}")


@app.command("check")
def check_cmd(
    file: Path = typer.Argument(..., help=".munge file"),
    config: Optional[Path] = ConfigOption,
):
    """Check the program without running it."""
    _settings(config)
    program = _parse_and_catch(file)
    try:
        check(program)
        typer.echo("OK")
    except MungeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)


@app.command("run")
def run_cmd(
    file: Path = typer.Argument(..., help=".munge file"),
    html: Path = typer.Argument(..., help="HTML document to extract from"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="json or yaml"),
    config: Optional[Path] = ConfigOption,
):
    """Run the program against an HTML document and print the results."""
    settings = _settings(config)
    fmt = output_format or settings.output_format
    if fmt not in ("json", "yaml"):
        typer.echo(f"Error: unknown format {fmt!r}, use json or yaml", err=True)
        raise typer.Exit(1)

    program = _parse_and_catch(file)
    document = parse_document(_read_file(html), settings.html_parser)
    try:
        results = run(program, document)
    except MungeError as e:
        logger.info("run.failed", file=str(file), error=str(e))
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    plain = {name: to_plain(value) for name, value in results.items()}
    if fmt == "yaml":
        typer.echo(yaml.safe_dump(plain, sort_keys=False, allow_unicode=True), nl=False)
    else:
        typer.echo(json.dumps(plain, indent=2, ensure_ascii=False))


@app.command("version")
def version_cmd():
    """Print the munge version."""
    typer.echo(__version__)


@app.callback()
def main():
    """munge: named extractions over HTML documents."""
    pass


if __name__ == "__main__":
    app()
