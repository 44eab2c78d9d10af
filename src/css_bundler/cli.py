"""
Command-line interface for css-bundler.

Commands:
- css: Build the minified CSS bundle
- default: Run the default task (css); also runs when no command is given
- inspect: Show which files the build would bundle, without writing anything
"""

import click
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import BundleConfig, find_config, load_config
from .errors import BundleError, ConfigError
from .api import bundle_from_config
from .sources.resolver import resolve_sources

console = Console()


def _load_build_config(config_path: Path | None) -> BundleConfig:
    """Explicit config file, else cssbundle.yaml in the working directory, else defaults."""
    if config_path is None:
        config_path = find_config(Path.cwd())

    if config_path is None:
        return BundleConfig()

    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        raise click.Abort()


@click.group(invoke_without_command=True)
@click.option('-c', '--config', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML build definition (default: ./cssbundle.yaml if present)')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool):
    """CSS Bundler - Concatenate and minify stylesheets into one file."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['verbose'] = verbose

    if ctx.invoked_subcommand is None:
        ctx.invoke(default)


@main.command()
@click.pass_context
def css(ctx: click.Context):
    """Build the minified CSS bundle."""
    config = _load_build_config(ctx.obj['config_path'])
    verbose = ctx.obj['verbose']

    console.print(f"[bold]Bundling CSS into:[/] {config.output_path}")

    try:
        with console.status("Bundling..."):
            result = bundle_from_config(config)
    except BundleError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        raise click.Abort()

    console.print(f"  Matched [cyan]{len(result.source_files)}[/] files")
    if verbose:
        for path in result.source_files:
            console.print(f"    {escape(str(path))}")

    console.print(f"[bold green]✓ Bundle written:[/] {result.output_path}")
    if verbose:
        console.print(f"  Size: {result.size} bytes (from {result.input_size} bytes of source)")


@main.command()
@click.pass_context
def default(ctx: click.Context):
    """Run the default task (css)."""
    ctx.invoke(css)


@main.command()
@click.pass_context
def inspect(ctx: click.Context):
    """Show the files that would be bundled, in order."""
    config = _load_build_config(ctx.obj['config_path'])

    try:
        file_set = resolve_sources(config.sources, config.root, dedupe=config.dedupe)
    except BundleError as e:
        console.print(f"[red]✗ {escape(str(e))}[/]")
        raise click.Abort()

    console.print(f"[bold]Source root:[/] {config.root}")
    console.print(f"[bold]Output:[/] {config.output_path}")
    console.print()

    table = Table(title="Bundle Sources")
    table.add_column("#", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Pattern")
    table.add_column("Size", justify="right")

    for i, source in enumerate(file_set, start=1):
        try:
            size = source.size
        except OSError as e:
            console.print(f"[red]✗ Cannot read {escape(str(source.path))}: {escape(e.strerror or str(e))}[/]")
            raise click.Abort()
        table.add_row(str(i), escape(str(source.path)), escape(source.pattern), f"{size} B")

    console.print(table)

    if not len(file_set):
        console.print("[yellow]⚠ No source files matched[/]")


if __name__ == '__main__':
    main()
