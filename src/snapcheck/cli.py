# src/snapcheck/cli.py
"""
snapcheck Command Line Interface (CLI).

Inspect recorded snapshots without running the test suite. Built on `typer`
and `rich`; the same snapshotters the engine uses do the reading and diffing.

Usage
-----
    # Table of every slot in the snapshot directory
    $ snapcheck list --dir .snapshots

    # Print one snapshot
    $ snapcheck show test_render-test_page

    # Compare two snapshot files (exit code 1 when they differ)
    $ snapcheck diff old/test_page new/test_page --structural
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from snapcheck.core.config import Config
from snapcheck.core.errors import MalformedSnapshotError
from snapcheck.core.settings import load_settings
from snapcheck.snapshotters.base import Snapshotter
from snapcheck.snapshotters.structural import StructuralSnapshotter
from snapcheck.snapshotters.text import TextSnapshotter

# SNAPCHECK_* values from .env must be visible before settings are read
load_dotenv()

app = typer.Typer(
    help="snapcheck: inspect and compare recorded test snapshots.",
    rich_markup_mode="markdown",
)
console = Console()


def _config(directory: Path | None, extension: str | None) -> Config:
    config = Config.from_settings(load_settings())
    overrides: dict[str, str] = {}
    if directory is not None:
        overrides["subdirectory"] = str(directory)
    if extension is not None:
        overrides["file_extension"] = extension
    return config.with_options(**overrides) if overrides else config


def _detect_format(path: Path) -> str:
    """Return ``structural`` if the file parses as a JSON snapshot, else ``text``."""
    try:
        with path.open("rb") as f:
            StructuralSnapshotter().read_from(f)
    except MalformedSnapshotError:
        return "text"
    return "structural"


@app.command("list")  # type: ignore[misc]
def list_snapshots(
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Snapshot directory (default: settings)."),
    ] = None,
) -> None:
    """List the snapshot files in the snapshot directory."""
    root = Path(_config(directory, None).subdirectory)
    if not root.is_dir():
        console.print(f"[bold red]No snapshot directory at {root}[/bold red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Snapshots in {root}")
    table.add_column("Slot", style="cyan")
    table.add_column("Bytes", justify="right")
    table.add_column("Format", style="magenta")
    files = sorted(p for p in root.iterdir() if p.is_file())
    for path in files:
        table.add_row(path.name, str(path.stat().st_size), _detect_format(path))
    console.print(table)
    console.print(f"[dim]{len(files)} snapshot(s)[/dim]")


@app.command()  # type: ignore[misc]
def show(
    name: Annotated[str, typer.Argument(help="Slot name, e.g. test_module-test_fn.")],
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Snapshot directory (default: settings)."),
    ] = None,
    extension: Annotated[
        str | None,
        typer.Option("--ext", "-e", help="File extension appended to the slot name."),
    ] = None,
) -> None:
    """Print the stored contents of one snapshot."""
    path = _config(directory, extension).snapshot_file_path(name)
    try:
        content = path.read_text(encoding="utf-8", errors="surrogateescape")
    except FileNotFoundError as e:
        console.print(f"[bold red]Snapshot not found:[/bold red] {path}")
        raise typer.Exit(code=1) from e

    console.print(Panel(Text(content), title=str(path), border_style="cyan"))


@app.command()  # type: ignore[misc]
def diff(
    previous: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="Older snapshot file."),
    ],
    current: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="Newer snapshot file."),
    ],
    structural: Annotated[
        bool,
        typer.Option("--structural/--text", help="Read both files as structural JSON snapshots."),
    ] = False,
) -> None:
    """Diff two snapshot files. Exits 1 when they differ, 2 when one is unreadable."""
    snapshotter: Snapshotter = StructuralSnapshotter() if structural else TextSnapshotter()
    try:
        with previous.open("rb") as f:
            prev_snap = snapshotter.read_from(f)
        with current.open("rb") as f:
            cur_snap = snapshotter.read_from(f)
    except MalformedSnapshotError as e:
        console.print(f"[bold red]Malformed snapshot:[/bold red] {e}")
        raise typer.Exit(code=2) from e

    result = snapshotter.diff(prev_snap, cur_snap)
    if not result:
        console.print("[bold green]Snapshots are identical.[/bold green]")
        return

    console.print(Syntax(result, "diff", theme="ansi_dark", word_wrap=True))
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
