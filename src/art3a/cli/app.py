"""Typer CLI application with command groups."""

import logging
from pathlib import Path
from typing import Annotated, Optional

try:
    import typer
    from rich.console import Console
    from rich.logging import RichHandler
    HAS_TYPER = True
except ImportError:
    HAS_TYPER = False

logger = logging.getLogger(__name__)

# Output format by destination extension
FORMAT_BY_SUFFIX = {
    "ans": "ansi",
    "cast": "cast",
    "svg": "svg",
    "json": "json",
    "txt": "txt",
    "3a": "3a",
}

FORMATS = ("ansi", "cast", "svg", "json", "txt", "3a")


def configure_logging(verbose: bool = False) -> None:
    """Attach a rich handler to the art3a logger."""
    root = logging.getLogger("art3a")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not root.handlers:
        root.addHandler(RichHandler(show_time=False, show_path=False))


def create_app() -> "typer.Typer":
    """Create and configure the CLI application."""
    if not HAS_TYPER:
        raise ImportError("typer and rich are required for CLI. Install with: uv pip install art3a[cli]")

    app = typer.Typer(
        name="art3a",
        help="View, inspect, and convert animated 3a ASCII art.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    def _load(path: Path):
        from art3a.errors import ArtError
        from art3a.io.reader import read

        try:
            return read(path).art
        except ArtError as e:
            console.print(f"[red]Cannot read {path}: {e}[/]")
            raise typer.Exit(1)
        except OSError as e:
            console.print(f"[red]Cannot open {path}: {e.strerror or e}[/]")
            raise typer.Exit(1)

    @app.callback()
    def main(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
    ) -> None:
        configure_logging(verbose)

    @app.command()
    def view(
        path: Annotated[Path, typer.Argument(help="3a file to view")],
        frame: Annotated[Optional[int], typer.Option("--frame", "-n", help="Show a single frame")] = None,
    ) -> None:
        """Print the frames of a 3a file to the terminal."""
        from art3a.errors import FrameOutOfRange
        from art3a.render.ansi import AnsiRenderer

        art = _load(path)
        renderer = AnsiRenderer()

        if frame is None:
            print(renderer.render_string(art))
            return
        try:
            print(renderer.render_frame(art, frame))
        except FrameOutOfRange as e:
            console.print(f"[red]{e}[/]")
            raise typer.Exit(1)

    @app.command()
    def info(
        path: Annotated[Path, typer.Argument(help="3a file to inspect")],
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Show metadata for a 3a file."""
        import json

        art = _load(path)
        header = art.header

        if json_output:
            data = {
                "title": header.title,
                "authors": header.authors,
                "orig_authors": header.orig_authors,
                "src": header.src,
                "license": header.license,
                "frames": len(art.frames),
                "width": art.width,
                "height": art.height,
                "duration": art.duration(),
                "colors": art.has_color(),
                "palette": len(art.palette),
                "tags": header.tags,
            }
            print(json.dumps(data, indent=2))
            return

        console.print(f"[bold cyan]3a metadata for {path.name}[/]")
        console.print(f"  [bold]Title:[/]    {header.title or '(none)'}")
        console.print(f"  [bold]Authors:[/]  {header.authors_line() or '(none)'}")
        if header.src:
            console.print(f"  [bold]Source:[/]   {header.src}")
        if header.license:
            console.print(f"  [bold]License:[/]  {header.license}")
        console.print(f"  [bold]Size:[/]     {art.width}x{art.height}")
        console.print(f"  [bold]Frames:[/]   {len(art.frames)} ({art.duration():.2f}s)")
        console.print(f"  [bold]Colors:[/]   {'yes' if art.has_color() else 'no'} ({len(art.palette)} in palette)")
        if header.tags:
            console.print(f"  [bold]Tags:[/]     {' '.join('#' + t for t in header.tags)}")

    @app.command()
    def convert(
        source: Annotated[Path, typer.Argument(help="Source 3a file")],
        dest: Annotated[Path, typer.Argument(help="Destination file")],
        format: Annotated[Optional[str], typer.Option("--format", "-f", help="Output format (auto-detected from extension)")] = None,
    ) -> None:
        """Convert 3a art to ANSI, asciicast, SVG, JSON, plain text, or current 3a."""
        fmt = (format or FORMAT_BY_SUFFIX.get(dest.suffix.lstrip('.').lower(), "")).lower()
        if fmt not in FORMATS:
            console.print(f"[red]Unknown format: {fmt or dest.suffix or '(none)'}[/]")
            raise typer.Exit(1)

        art = _load(source)
        logger.debug("converting %s to %s", source, fmt)

        if fmt == "3a":
            art.save(dest)
        elif fmt == "ansi":
            dest.write_text(art.render() + "\n", encoding="utf-8")
        elif fmt == "cast":
            dest.write_text(art.render_to_asciicast(), encoding="utf-8")
        elif fmt == "svg":
            dest.write_text(art.render_to_svg(), encoding="utf-8")
        elif fmt == "json":
            dest.write_text(art.render_to_json(), encoding="utf-8")
        else:
            dest.write_text(art.render_to_text() + "\n", encoding="utf-8")

        console.print(f"[green]Converted {source} → {dest}[/]")

    return app
