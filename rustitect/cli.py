"""CLI entry point for Rustitect."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax

from rustitect.config import RustitectConfig, load_config
from rustitect.config.loader import DEFAULT_CONFIG_TEMPLATE
from rustitect.converter import ConversionError
from rustitect.extractor import SourceParseError
from rustitect.output import OutputWriter, preserved_output_name
from rustitect.output.writer import STDIN_MARKER
from rustitect.pipeline import Pipeline
from rustitect.pipeline.models import OutputFormat

app = typer.Typer(
    name="rustitect",
    help="Generate arc42 documentation (Markdown, AsciiDoc, PlantUML) from Rust source.",
)

config_app = typer.Typer(help="Manage Rustitect configuration.")
app.add_typer(config_app, name="config")

# Documents go to stdout; everything human-facing goes to stderr.
err_console = Console(stderr=True)

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


# Global state
_config_path: str | None = None
_config: RustitectConfig | None = None


def _get_config() -> RustitectConfig:
    """Resolve the configuration on first use and set up logging from it."""
    global _config
    if _config is None:
        try:
            _config = load_config(_config_path)
        except ValueError as e:
            raise _fail(str(e))
        _configure_logging(_config)
    return _config


def _configure_logging(cfg: RustitectConfig) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS[cfg.log_level],
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    return typer.Exit(1)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to rustitect.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config, _config_path
    # Loaded lazily: `config init` must work while the current file is invalid.
    _config_path = config
    _config = None


def _read_input(input_file: str | None) -> str:
    if input_file is None or input_file == STDIN_MARKER:
        return sys.stdin.read()
    return Path(input_file).read_text(encoding="utf-8")


@app.command()
def generate(
    input_file: Annotated[
        str | None,
        typer.Argument(help="Input Rust source file. Reads stdin if omitted or '-'."),
    ] = None,
    output_file: Annotated[
        str | None,
        typer.Option("--output-file", "-o", help="Output filename. Prints to stdout if omitted."),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option(
            "--format", "-f",
            help="Output format. 'asciidoc-plantuml' writes the diagram to its own .puml file.",
        ),
    ] = None,
    preserve_names: Annotated[
        bool,
        typer.Option("--preserve-names", help="Name the output after the input file."),
    ] = False,
    prefix: Annotated[
        str | None,
        typer.Option("--prefix", "-p", help="Prefix for output file names."),
    ] = None,
    plantuml_only: Annotated[
        bool, typer.Option("--plantuml-only", help="Only generate the PlantUML diagram.")
    ] = False,
    markdown_only: Annotated[
        bool, typer.Option("--markdown-only", help="Only generate the extracted Markdown.")
    ] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show output paths without writing")
    ] = False,
) -> None:
    """Generate documentation for a Rust source file."""
    cfg = _get_config()
    fmt = output_format or OutputFormat(cfg.output.format)

    if plantuml_only and markdown_only:
        raise typer.BadParameter(
            "--plantuml-only and --markdown-only are mutually exclusive",
            param_hint="'--plantuml-only' / '--markdown-only'",
        )

    if preserve_names:
        try:
            output_file = preserved_output_name(input_file, fmt)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="'--preserve-names'")

    try:
        source = _read_input(input_file)
    except (OSError, UnicodeDecodeError) as e:
        raise _fail(f"Failed to read input: {e}")

    pipeline = Pipeline(cfg)
    try:
        bundle = pipeline.run(
            source,
            fmt,
            plantuml_only=plantuml_only,
            markdown_only=markdown_only,
        )
    except SourceParseError as e:
        raise _fail(f"Unable to parse {input_file or 'stdin'}: {e}")
    except ConversionError as e:
        raise _fail(str(e))

    if output_file is None:
        OutputWriter.write_stdout(bundle)
        return

    writer = OutputWriter(cfg.output)
    try:
        paths = writer.write(bundle, output_file, prefix=prefix, dry_run=dry_run)
    except OSError as e:
        raise _fail(f"Failed to write output: {e}")

    verb = "Would write" if dry_run else "Written"
    for path in paths:
        err_console.print(f"[green]{verb}[/green] {escape(str(path))}", highlight=False)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default rustitect.yaml in current directory."""
    target = Path("rustitect.yaml")
    if target.exists() and not force:
        rprint("[yellow]rustitect.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
