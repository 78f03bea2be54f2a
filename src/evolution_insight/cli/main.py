"""Global options shared by every analysis command."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import console


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log: Optional[Path] = typer.Option(
        None,
        "--log",
        "-l",
        exists=True,
        dir_okay=False,
        help="Revision log as JSON array or JSON lines (instead of reading git)",
    ),
    repo: Optional[Path] = typer.Option(
        None,
        "-C",
        "--repo",
        file_okay=False,
        help="Git repository to read history from (default: current directory)",
    ),
    max_commits: int = typer.Option(
        0, "--max-commits", min=0, help="Read at most this many commits from git (0 = all)"
    ),
    complexity: Optional[Path] = typer.Option(
        None,
        "--complexity",
        exists=True,
        dir_okay=False,
        help="Complexity scores as CSV (entity,complexity[,timestamp]) or JSON",
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", exists=True, dir_okay=False, help="TOML configuration file"
    ),
    fmt: str = typer.Option("csv", "--format", "-f", help="Output format: csv | json | rich | html"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", dir_okay=False, help="Write the report to a file instead of stdout"
    ),
    after: Optional[str] = typer.Option(
        None, "--after", "-a", help="Only consider commits on or after YYYY-MM-DD"
    ),
    before: Optional[str] = typer.Option(
        None, "--before", "-b", help="Only consider commits before YYYY-MM-DD"
    ),
    grep: Optional[str] = typer.Option(
        None, "--grep", help="Only consider commits whose message contains this text"
    ),
    workers: Optional[int] = typer.Option(
        None, "-w", "--workers", min=1, help="Worker threads for co-change counting"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    progress: bool = typer.Option(
        False, "--progress", help="Show progress on stderr while reading git history"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", dir_okay=False, help="Also write log records to this file"
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Mine version-control history for coupling, hotspots, ownership and age.

    [bold cyan]Examples:[/bold cyan]

      evolution-insight coupling --limit 20

      evolution-insight --log history.jsonl --format json ownership

      evolution-insight --complexity complexity.csv hotspots
    """
    if version:
        from .. import __version__

        console.print(
            f"[bold cyan]Evolution Insight[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    ctx.ensure_object(dict)
    ctx.obj.update(
        log=log,
        repo=repo,
        max_commits=max_commits,
        complexity=complexity,
        config=config,
        format=fmt,
        output=output,
        after=after,
        before=before,
        grep=grep,
        workers=workers,
        verbose=verbose,
        progress=progress,
        quiet=quiet,
        log_file=str(log_file) if log_file else None,
    )

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
