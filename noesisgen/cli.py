# noesisgen/cli.py
"""
noesisgen CLI -- Click commands with a rich terminal UI.

Provides the ``noesisgen`` console entry-point declared in pyproject.toml as
``noesisgen.cli:cli``:

- generate:    structures → NoesisTypes.ts, then data sets → <set>.ts
- structures:  list the loaded registry
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from . import cli_theme as theme
from .batch import DataSetProcessor
from .config import NoesisgenConfig, get_config
from .emitter import write_types_file
from .schema.loader import SchemaLoadError, load_schema_dir
from .schema.models import BuiltInDef, ClassDef, EnumDef
from .schema.registry import Registry
from .utils.logging import get_logger, log_run_summary, setup_logging

console = Console()
logger = get_logger(__name__)


def _print_version(
    ctx: click.Context,
    _param: click.Parameter,
    value: bool,
) -> None:
    if not value or ctx.resilient_parsing:
        return
    theme.print_version(__version__, console)
    ctx.exit()


def _load_registry(cfg: NoesisgenConfig, project_path: Path) -> Registry:
    structures_dir = cfg.structures_dir(project_path)
    try:
        return load_schema_dir(structures_dir)
    except SchemaLoadError as exc:
        raise click.ClickException(str(exc))


# ---------------------------------------------------------------------------
# Main CLI group
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """noesisgen -- generate TypeScript from Noesis project data."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.argument("set_name", required=False)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable verbose logging.")
@click.option("-t", "--types-only", is_flag=True, default=False, help="Only generate TypeScript type definitions.")
@click.option("-i", "--indent-level", type=click.IntRange(min=0), default=None, help="Number of spaces for indentation (default 2).")
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory for session log files.")
@click.pass_context
def generate(
    ctx: click.Context,
    project_path: Path,
    output_dir: Path,
    set_name: Optional[str],
    verbose: bool,
    types_only: bool,
    indent_level: Optional[int],
    log_dir: Optional[Path],
) -> None:
    """Generate TypeScript files from a Noesis project.

    PROJECT_PATH is the project root (containing .noesis/data). SET_NAME
    restricts generation to one data set; all sets are generated if omitted.
    """
    cfg = get_config()
    verbose = verbose or cfg.verbose
    types_only = types_only or cfg.types_only
    indent = cfg.indent_level if indent_level is None else indent_level

    log_file = setup_logging(level=cfg.log_level, log_dir=log_dir or cfg.log_dir, console_output=verbose)
    theme.print_banner(__version__, console)
    if verbose:
        console.print(theme.info(f"Verbose logging enabled · log file {log_file}"))

    theme.section("Structures", console, "01")
    registry = _load_registry(cfg, project_path)
    console.print(theme.ok(f"Loaded {len(registry)} structures"))

    types_path = write_types_file(
        registry,
        output_dir,
        module_name=cfg.types_module,
        indent_level=indent,
        image_module=cfg.image_module,
    )
    console.print(theme.ok(f"Wrote {types_path}"))

    if types_only:
        return

    theme.section("Data sets", console, "02")

    def _on_progress(name: str, success: bool) -> None:
        console.print(theme.ok(name) if success else theme.err(name))

    processor = DataSetProcessor(
        registry,
        indent_level=indent,
        types_module=cfg.types_module,
        data_context_name=cfg.data_context_name,
        default_font=cfg.default_font,
    )
    try:
        summary = processor.process_directory(
            cfg.sets_dir(project_path),
            output_dir,
            set_name=set_name,
            on_progress=_on_progress,
        )
    except FileNotFoundError as exc:
        raise click.ClickException(str(exc))

    log_run_summary(logger, summary)
    console.print()
    console.print(
        theme.info(f"{summary['succeeded']}/{summary['total']} data sets generated")
    )
    for entry in summary["errors"]:
        console.print(theme.warn(escape(f"{entry['file']}: {entry['error']}")))
    if summary["failed"]:
        ctx.exit(1)


# ---------------------------------------------------------------------------
# structures
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory for session log files.")
def structures(project_path: Path, log_dir: Optional[Path]) -> None:
    """List the structures loaded from PROJECT_PATH."""
    cfg = get_config()
    setup_logging(level=cfg.log_level, log_dir=log_dir or cfg.log_dir)
    registry = _load_registry(cfg, project_path)

    table = theme.make_table(title=f"{len(registry)} structures")
    table.add_column("Kind")
    table.add_column("Name", no_wrap=True)
    table.add_column("Members", justify="right")
    for structure in registry:
        if isinstance(structure, ClassDef):
            members = str(len(structure.properties))
        elif isinstance(structure, EnumDef):
            members = str(len(structure.items))
        else:
            members = "-"
        style = "dim" if isinstance(structure, BuiltInDef) else None
        table.add_row(structure.kind, structure.name, members, style=style)
    console.print(table)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
