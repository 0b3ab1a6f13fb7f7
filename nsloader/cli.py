"""Diagnostic command-line interface for nsloader."""

from pathlib import Path

import click
from rich.table import Table
from rich.tree import Tree

from .config import LoaderSettings
from .config import load_settings
from .console import console
from .errors import ConfigurationError
from .logging_setup import init_json_logging
from .resolver import AutoLoader


def _build_loader(config_file: Path | None, base_path: Path | None) -> AutoLoader:
    if config_file is not None:
        try:
            settings = load_settings(config_file)
        except ConfigurationError as e:
            raise click.ClickException(str(e)) from e
    else:
        settings = LoaderSettings()

    if base_path is not None:
        settings.base_path = base_path.resolve()
    return AutoLoader.from_settings(settings)


def _add_modules(tree: Tree, modules: dict) -> None:
    for name, spec in modules.items():
        extensions = f" [dim]{', '.join(spec['extensions'])}[/dim]" if spec.get("extensions") else ""
        branch = tree.add(f"[green]{name}[/green] -> {spec['path'] or '[dim](none)[/dim]'}{extensions}")
        _add_modules(branch, spec.get("modules", {}))


config_option = click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML settings file describing the loader",
)
base_path_option = click.option(
    "--base-path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Override the directory module paths are anchored to",
)


@click.group()
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Write JSONL logs to this file")
@click.option("--log-level", default=None, help="Log level for --log-file (default: INFO)")
def cli(log_file: Path | None, log_level: str | None):
    """Inspect how identifiers resolve to files."""
    if log_file is not None:
        init_json_logging(log_file, log_level)


@cli.command("which")
@click.argument("identifier")
@config_option
@base_path_option
@click.pass_context
def which(ctx: click.Context, identifier: str, config_file: Path | None, base_path: Path | None):
    """Print the file IDENTIFIER resolves to."""
    loader = _build_loader(config_file, base_path)
    found = loader.find(identifier)
    if found is None:
        click.echo(f"{identifier}: not found", err=True)
        ctx.exit(1)
    click.echo(str(found))


@cli.command("show")
@config_option
@base_path_option
def show(config_file: Path | None, base_path: Path | None):
    """Show the loader configuration."""
    info = _build_loader(config_file, base_path).debug_info()

    options = Table(title="Options", show_header=True, header_style="bold cyan")
    options.add_column("Option", style="green")
    options.add_column("Value")
    for key, value in info["options"].items():
        options.add_row(key, str(value))
    options.add_row("delimiters", " ".join(repr(d) for d in info["delimiters"]))
    console.print(options)

    if info["paths"]:
        paths = Table(title="Search Paths", show_header=True, header_style="bold cyan")
        paths.add_column("#", style="dim")
        paths.add_column("Path", style="magenta")
        paths.add_column("Extensions")
        for index, entry in enumerate(info["paths"], 1):
            paths.add_row(str(index), entry["path"], ", ".join(entry["extensions"]) or "(default)")
        console.print(paths)
    else:
        console.print("[dim]No search paths registered[/dim]")

    if info["prefixes"]:
        prefixes = Table(title="Prefixes", show_header=True, header_style="bold cyan")
        prefixes.add_column("Directory", style="magenta")
        prefixes.add_column("Prefixes")
        for directory, values in info["prefixes"].items():
            prefixes.add_row(directory, ", ".join(values))
        console.print(prefixes)

    if info["modules"]:
        tree = Tree("[bold]Modules[/bold]")
        _add_modules(tree, info["modules"])
        console.print(tree)
    else:
        console.print("[dim]No modules declared[/dim]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
