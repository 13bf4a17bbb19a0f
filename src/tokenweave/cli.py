"""
Command line interface for tokenweave.

Thin wrapper over DesignTokenSystem: builds a system from the optional config
file plus flag overrides, then prints CSS, token listings or validation
results.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tokenweave import __version__
from tokenweave.config import TokenSystemConfig, load_config
from tokenweave.core.errors import TokenError
from tokenweave.core.paths import ThemeVariant
from tokenweave.dtcg_export import export_dtcg_file, format_dtcg_summary, generate_dtcg_tokens
from tokenweave.system import DesignTokenSystem

app = typer.Typer(
    help="Resolve design tokens and generate CSS",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Module-level options set by the callback
_options: dict[str, Any] = {}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"tokenweave {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="TOML ([tokens] table) or YAML config file"),
    ] = None,
    theme: Annotated[
        ThemeVariant, typer.Option("--theme", "-t", help="Active theme")
    ] = ThemeVariant.LIGHT,
    minify: Annotated[
        bool | None, typer.Option("--minify/--no-minify", help="Minify generated CSS")
    ] = None,
    prefix: Annotated[
        str | None, typer.Option("--prefix", help="CSS custom property prefix")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = None,
) -> None:
    """Resolve design tokens and generate CSS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _options.clear()
    _options.update(config=config, theme=theme, minify=minify, prefix=prefix)


def _build_system() -> DesignTokenSystem:
    """Create the system described by the global options."""
    try:
        base = load_config(_options["config"]) if _options.get("config") else TokenSystemConfig()
        config = base.with_overrides(minify=_options.get("minify"), prefix=_options.get("prefix"))
    except (TokenError, ValidationError) as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=1) from e

    system = DesignTokenSystem(config)
    system.switch_theme(_options.get("theme", ThemeVariant.LIGHT))
    return system


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    err_console.print(f"[green]Wrote[/green] {output}")


def _fail(error: TokenError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(code=1)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def export(
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write to file instead of stdout")
    ] = None,
    variables_only: Annotated[
        bool, typer.Option("--variables-only", help="Only :root and dark-mode variables")
    ] = False,
) -> None:
    """Generate the theme stylesheet."""
    system = _build_system()
    try:
        css = system.export_css_variables() if variables_only else system.generate_theme_css()
    except TokenError as e:
        _fail(e)
    _emit(css, output)


@app.command()
def component(
    name: Annotated[str, typer.Argument(help="Component name, e.g. button")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file")] = None,
) -> None:
    """Generate class rules for one component."""
    system = _build_system()
    try:
        css = system.generate_component_css(name)
    except TokenError as e:
        _fail(e)
    _emit(css, output)


@app.command()
def utilities(
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file")] = None,
) -> None:
    """Generate color, spacing, font-size and visibility utility classes."""
    system = _build_system()
    try:
        css = system.generate_utility_css()
    except TokenError as e:
        _fail(e)
    _emit(css, output)


@app.command()
def validate() -> None:
    """Resolve every token in every theme and report failures."""
    system = _build_system()
    errors = system.validate_tokens()
    if not errors:
        console.print(f"[green]All {len(system.store)} token entries resolve[/green]")
        return

    table = Table(title=f"{len(errors)} token problem(s)")
    table.add_column("Path", style="cyan")
    table.add_column("Kind", style="yellow")
    table.add_column("Message")
    for error in errors:
        table.add_row(str(error.path or "-"), error.kind.value, error.message)
    console.print(table)
    raise typer.Exit(code=1)


@app.command(name="list")
def list_tokens(
    search: Annotated[
        str | None, typer.Option("--search", "-s", help="Substring filter on token paths")
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List token paths with their CSS variable names."""
    system = _build_system()
    paths = system.search_tokens(search) if search else system.list_tokens()

    if output_json:
        rows = [{"path": p.dotted, "css_var": system.get_css_var_name(p)} for p in paths]
        typer.echo(json.dumps(rows, indent=2))
        return

    table = Table(title=f"Tokens ({system.active_theme})")
    table.add_column("Path", style="cyan")
    table.add_column("CSS variable", style="green")
    for path in paths:
        table.add_row(path.dotted, system.get_css_var_name(path))
    console.print(table)
    console.print(f"{len(paths)} token(s)")


@app.command()
def dtcg(
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write tokens.json to this path")
    ] = None,
) -> None:
    """Export tokens in W3C design-tokens (DTCG) format."""
    system = _build_system()
    if output is not None:
        export_dtcg_file(system, output)
        err_console.print(f"[green]Wrote[/green] {output}")
        return
    tokens = generate_dtcg_tokens(system)
    typer.echo(json.dumps(tokens, indent=2))
    err_console.print(format_dtcg_summary(tokens))


if __name__ == "__main__":
    app()
