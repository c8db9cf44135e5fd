"""Typer-based CLI for inspecting outline documents."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .checkbox_style import CheckboxGlyph, checkmark_points, progress_wedge_points, style_for
from .config import OutlineConfig
from .document import derive_document
from .models import CheckboxState, Document, TokenKind
from .reveal import LineView, caret_visible, reveal_document

app = typer.Typer(
    name="outline-reveal",
    help="Inspect outline parsing, connectors and progressive reveal state",
    add_completion=False,
)

console = Console()

GLYPH_CHARS = {
    CheckboxGlyph.NONE: "○",
    CheckboxGlyph.CHECKMARK: "✓",
    CheckboxGlyph.PROGRESS_WEDGE: "◔",
    CheckboxGlyph.BLOCKED_BAR: "−",
    CheckboxGlyph.EXCLAMATION: "!",
    CheckboxGlyph.QUESTION: "?",
}

PILL_TEXT_COLOR = "#080b11"


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def split_rows(text: str) -> list[str]:
    """Split file text into outline rows on newlines only.

    Form feeds and other Unicode line separators stay inside their row. A
    single trailing newline does not start an extra row.
    """
    if not text:
        return []
    rows = text.split("\n")
    if text.endswith("\n"):
        rows.pop()
    return rows


def _load_document(file: str, config_path: Optional[str], debug: bool) -> Document:
    """Read an outline file and derive its Document, exiting on errors."""
    _configure_logging(debug)

    try:
        config = OutlineConfig.from_env(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    path = Path(file)
    if not path.is_file():
        console.print(f"[red]Error: Outline file does not exist: {path}[/red]")
        raise typer.Exit(code=1)

    try:
        lines = split_rows(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        console.print(f"[red]Error: {path} is not valid UTF-8: {e}[/red]")
        raise typer.Exit(code=1)

    return derive_document(lines, layout=config.layout, palette=config.palette)


def _token_detail(token) -> str:
    inner = token.token
    if token.kind == TokenKind.CHECKBOX:
        return inner.state.value
    if token.kind == TokenKind.TAG:
        return f"name={inner.tag_name!r}"
    if token.kind == TokenKind.SPACE:
        return f"width={inner.width:g}"
    return ""


@app.command()
def tokens(
    file: str = typer.Argument(..., help="Outline markdown file"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a config.toml"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Show every token with its global character range."""
    document = _load_document(file, config_path, debug)

    table = Table(title=f"Tokens: {file}")
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Kind", style="magenta")
    table.add_column("Raw", style="green")
    table.add_column("Detail", style="dim")

    for token in document.flat_tokens():
        table.add_row(
            str(token.line_index),
            str(token.start),
            str(token.end),
            token.kind.value,
            repr(token.raw),
            _token_detail(token),
        )

    console.print(table)
    console.print(f"[dim]Total characters:[/dim] {document.total_characters}")


@app.command()
def tree(
    file: str = typer.Argument(..., help="Outline markdown file"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a config.toml"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Show the indentation hierarchy and resolved connectors."""
    document = _load_document(file, config_path, debug)

    root = Tree(f"[bold]{file}[/bold]")
    nodes: dict[int, Tree] = {}
    for line in document.lines:
        label = Text(f"L{line.index} ", style="dim")
        label.append(line.raw.strip() or "(blank)")
        if line.connector is not None:
            connector = line.connector
            label.append(
                f"  ┃ #{connector.tag_name} children={list(connector.child_indices)} "
                f"height={connector.height:g} offset={connector.offset:g}",
                style=connector.color,
            )
        parent = nodes.get(line.parent_index) if line.parent_index is not None else None
        nodes[line.index] = (parent or root).add(label)

    console.print(root)


def _render_line(view: LineView, gutter_color: Optional[str]) -> Text:
    text = Text()
    text.append("┃ " if gutter_color else "  ", style=gutter_color or "")
    for token_view in view.indent:
        text.append(token_view.text)

    marker = view.marker
    if marker is not None:
        if marker.checkbox_style is not None:
            style = marker.checkbox_style
            text.append(GLYPH_CHARS[style.glyph], style=f"bold {style.stroke or style.fill}")
        else:
            text.append(marker.text)

    for token_view in view.content:
        if token_view.pill:
            text.append(f" {token_view.text} ", style=f"{PILL_TEXT_COLOR} on {token_view.pill_color}")
        else:
            text.append(token_view.text)
    return text


@app.command()
def reveal(
    file: str = typer.Argument(..., help="Outline markdown file"),
    typed: Optional[float] = typer.Option(
        None,
        "--typed",
        "-t",
        help="Characters typed so far (default: fully typed)",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a config.toml"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Preview the visible state of the outline at a reveal cursor."""
    document = _load_document(file, config_path, debug)
    cursor = document.total_characters if typed is None else typed

    views = reveal_document(document, cursor)
    gutter: dict[int, str] = {}
    for view in views:
        if view.connector is not None and view.connector.visible:
            for child in view.connector.covered_children:
                gutter[child] = view.connector.color

    for view in views:
        console.print(_render_line(view, gutter.get(view.index)))

    console.print()
    status = "typing" if caret_visible(document, cursor) else "complete"
    console.print(f"[dim]typed {cursor:g} / {document.total_characters} ({status})[/dim]")


@app.command()
def styles():
    """Show the checkbox style for every state."""
    table = Table(title="Checkbox styles")
    table.add_column("State", style="cyan")
    table.add_column("Fill")
    table.add_column("Stroke")
    table.add_column("Width", justify="right")
    table.add_column("Glyph")

    for state in CheckboxState:
        style = style_for(state)
        table.add_row(
            state.value,
            Text(style.fill, style=style.fill),
            Text(style.stroke or "-", style=style.stroke or ""),
            f"{style.stroke_width:g}",
            f"{GLYPH_CHARS[style.glyph]} {style.glyph.value}",
        )

    console.print(table)


def _format_points(points: list[tuple[float, float]]) -> str:
    return " ".join(f"({x:.1f},{y:.1f})" for x, y in points)


@app.command()
def geometry(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a config.toml"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Show the resolved layout geometry and checkbox icon outlines."""
    _configure_logging(debug)
    try:
        config = OutlineConfig.from_env(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    layout = config.layout
    table = Table(title="Layout geometry")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in layout.model_dump().items():
        table.add_row(name, f"{value:g}")
    table.add_row("checkbox_space_width", f"{layout.checkbox_space_width:g}", style="dim")
    table.add_row("row_pitch", f"{layout.row_pitch:g}", style="dim")
    console.print(table)

    radius = layout.checkbox_circle_size / 2
    console.print(f"[bold]checkmark[/bold] {_format_points(checkmark_points())}")
    console.print(f"[bold]progress wedge[/bold] r={radius:g} {_format_points(progress_wedge_points(radius))}")


@app.command()
def version():
    """Show outline-reveal version."""
    from . import __version__
    console.print(f"outline-reveal v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
