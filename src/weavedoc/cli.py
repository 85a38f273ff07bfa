"""
CLI for weavedoc.

Provides the command-line interface for generating DataWeave documentation
and for inspecting what gets extracted from a single file.

Usage:
    weavedoc build
    weavedoc build -d src/main/resources/dwl -o target/doc.md --header-table
    weavedoc extract src/main/resources/dwl/modules/Utils.dwl
    weavedoc about
"""

import json
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from weavedoc import __version__
from weavedoc.config import CONFIG_FILE_NAME, WeaveDocConfig
from weavedoc.errors import ConfigError, SourceNotFoundError, WeaveDocError
from weavedoc.logging import configure_logging
from weavedoc.models import Comment, SourceFile
from weavedoc.orchestrator import DocumentationOrchestrator
from weavedoc.parser.assembler import DataWeaveParser
from weavedoc.walker import read_source

console = Console()
err_console = Console(stderr=True)

logger = structlog.get_logger()


def print_about() -> None:
    """Print the program banner."""
    console.print(Panel.fit(
        f"[bold]weavedoc {__version__}[/bold] - DataWeave Document Generator\n"
        "Builds Markdown documentation from /** ... */ doc comments in DataWeave sources.",
        title="weavedoc",
    ))


def load_config(config_path: str | None, project_root: str | None) -> WeaveDocConfig:
    """Load the YAML config (explicit, or weavedoc.yaml in the project root)."""
    if config_path:
        config = WeaveDocConfig.from_yaml(Path(config_path))
    else:
        candidate = Path(project_root or ".") / CONFIG_FILE_NAME
        config = WeaveDocConfig.from_yaml(candidate) if candidate.is_file() else WeaveDocConfig()

    if project_root is not None:
        config = config.with_overrides(project_root=project_root)
    return config


@click.group()
@click.version_option(version=__version__)
def cli():
    """DataWeave documentation generator.

    Extracts /** ... */ doc comments and @annotations from DataWeave
    modules and writes a consolidated Markdown document.
    """
    pass


@cli.command()
@click.option(
    "--project-root", "-p",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Working directory; relative paths resolve against it.",
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help=f"YAML configuration file (defaults to {CONFIG_FILE_NAME} in the project root).",
)
@click.option("--file", "-f", "files", multiple=True, help="DataWeave file to parse (repeatable).")
@click.option("--directory", "-d", "directories", multiple=True, help="Directory to search (repeatable).")
@click.option("--output", "-o", "output_file", help="Output Markdown file.")
@click.option(
    "--header-table/--no-header-table",
    default=None,
    help="Write a module navigation table (overrides the config file).",
)
@click.option("--module", "-m", "module_list", multiple=True, help="Module order for the document (repeatable).")
@click.option("--ext", "file_ext", help="DataWeave file extension (default: dwl).")
@click.option("--header-text", help="Text written at the top of the document.")
@click.option("--footer-text", help="Text written at the bottom of the document.")
@click.option("--workers", "max_workers", type=click.IntRange(min=1), help="Threads used for parsing.")
@click.option("--skip", is_flag=True, help="Skip documentation generation.")
@click.option("--about", "show_about", is_flag=True, help="Print program information.")
@click.option("--verbose", "-v", is_flag=True, help="Log diagnostics for comments that were not attached.")
def build(
    project_root: str | None,
    config_path: str | None,
    files: tuple,
    directories: tuple,
    output_file: str | None,
    header_table: bool | None,
    module_list: tuple,
    file_ext: str | None,
    header_text: str | None,
    footer_text: str | None,
    max_workers: int | None,
    skip: bool,
    show_about: bool,
    verbose: bool,
):
    """Generate the consolidated DataWeave document.

    Examples:
        weavedoc build
        weavedoc build -d src/main/resources/dwl -m Utils -m modules::Mappings --header-table
        weavedoc build -f src/main/resources/dwl/main.dwl -o target/main.md
    """
    try:
        config = load_config(config_path, project_root).with_overrides(
            files=list(files) or None,
            directories=list(directories) or None,
            output_file=output_file,
            write_header_table=header_table,
            module_list=list(module_list) or None,
            file_ext=file_ext,
            output_header_text=header_text,
            output_footer_text=footer_text,
            max_workers=max_workers,
            skip=skip or None,
            show_about=show_about or None,
        )
    except ConfigError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    configure_logging(level="DEBUG" if verbose else config.log_level, fmt=config.log_format)

    if config.show_about:
        print_about()

    console.print("Running weavedoc ...")
    orchestrator = DocumentationOrchestrator(config)

    try:
        result = orchestrator.generate()
    except (ConfigError, SourceNotFoundError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except WeaveDocError as e:
        logger.exception("generation_failed", category=e.category.value)
        err_console.print("[bold red]Error:[/bold red] documentation generation failed.")
        sys.exit(1)
    except Exception:
        logger.exception("generation_failed", category="INTERNAL")
        err_console.print("[bold red]Error:[/bold red] documentation generation failed unexpectedly.")
        sys.exit(1)

    if result.skipped:
        console.print("Info: skipping doc generation. (skip=true)")
        return

    table = Table(title="Generation Summary")
    table.add_column("Modules", justify="right")
    table.add_column("Variables", justify="right")
    table.add_column("Functions", justify="right")
    table.add_column("Tables", justify="right")
    table.add_column("Size", justify="right")
    table.add_row(
        str(len(result.files)),
        str(result.variable_count),
        str(result.function_count),
        str(result.table_count),
        f"{result.size:,} bytes",
    )
    console.print(table)
    console.print(f"Document has been written to '{escape(str(result.output_path))}'.")


def _comment_node(tree: Tree, comment: Comment | None) -> None:
    if comment is None:
        return
    if comment.text:
        tree.add(escape(comment.text.splitlines()[0]))
    for ann in comment.annotations:
        key = f" [cyan]{escape(ann.key)}[/cyan]" if ann.key else ""
        tree.add(f"[magenta]@{escape(ann.name)}[/magenta]{key} {escape(ann.value)}")


def _source_tree(source: SourceFile) -> Tree:
    tree = Tree(f"[bold blue]{escape(source.module_name)}[/bold blue] ({escape(source.file_name)})")
    _comment_node(tree.add("[bold]module comment[/bold]"), source.comment)

    for var in source.variables:
        _comment_node(tree.add(f"[bold]var[/bold] {escape(var.name)} (line {var.line})"), var.comment)

    for fn in source.functions:
        node = tree.add(f"[bold]fun[/bold] {escape(fn.signature)} (line {fn.line})")
        _comment_node(node, fn.comment)
        if fn.table is not None:
            node.add(f"table: {len(fn.table.columns)} columns, {len(fn.table.rows)} rows")

    for entry in source.tables:
        node = tree.add(f"[bold]table[/bold] (line {entry.line})")
        _comment_node(node, entry.comment)
        if entry.table is not None:
            node.add(f"{len(entry.table.columns)} columns, {len(entry.table.rows)} rows")
    return tree


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--ext", "file_ext", help="DataWeave file extension (defaults to the file's suffix).")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def extract(file_path: str, file_ext: str | None, as_json: bool):
    """Show what is extracted from a single DataWeave file.

    Useful for checking comment and annotation formatting.
    """
    configure_logging(level="WARNING")
    path = Path(file_path)
    ext = file_ext or path.suffix.lstrip(".") or "dwl"

    try:
        text = read_source(path)
    except WeaveDocError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    source = DataWeaveParser().parse_text(
        text,
        path.as_posix(),
        root_dir=path.parent.as_posix(),
        file_ext=ext,
    )

    if as_json:
        click.echo(json.dumps(source.to_dict(), indent=2))
    else:
        console.print(_source_tree(source))


@cli.command()
def about():
    """Print program information."""
    print_about()


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
