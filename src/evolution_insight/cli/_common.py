"""Shared CLI helpers: option values, history loading, report output."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..api import analyze
from ..config import load_config
from ..exceptions import EvolutionInsightError
from ..formatters import FORMATTERS, get_formatter
from ..history.filters import parse_iso_date
from ..history.git_extractor import GitExtractor
from ..history.loader import load_complexity, load_revisions
from ..history.models import Revision
from ..logging_config import setup_logging
from ..report import validate_request
from .progress import revision_progress

console = Console()
err_console = Console(stderr=True)

SORT_OPTION = typer.Option(None, "--sort", "-s", help="Re-sort rows by this column")
DESC_OPTION = typer.Option(True, "--desc/--asc", help="Sort direction for --sort")
LIMIT_OPTION = typer.Option(None, "--limit", "-n", min=0, help="Maximum number of rows")


def load_history(options: dict[str, Any]) -> list[Revision]:
    """Revisions from ``--log`` if given, otherwise from the git repository."""
    log_file: Optional[Path] = options.get("log")
    if log_file is not None:
        return load_revisions(log_file)
    repo = options.get("repo") or Path.cwd()
    max_commits = options.get("max_commits") or 0
    extractor = GitExtractor(str(repo), max_commits=max_commits)
    if not options.get("progress") or options.get("quiet"):
        return extractor.extract()
    with revision_progress(err_console, total=max_commits or None) as advance:
        return extractor.extract(on_revision=advance)


def run_report(
    ctx: typer.Context,
    kind: str,
    sort_by: Optional[str] = None,
    descending: bool = True,
    limit: Optional[int] = None,
    **overrides: Any,
) -> None:
    """Load inputs, run one analysis and write the formatted report.

    Structured errors are reported on stderr and exit with status 1.
    """
    options = ctx.obj or {}
    if options.get("quiet"):
        verbosity = "quiet"
    elif options.get("verbose"):
        verbosity = "verbose"
    else:
        verbosity = "normal"
    logger = setup_logging(verbosity, log_file=options.get("log_file"))

    try:
        validate_request(kind, sort_by, limit)
        fmt = options.get("format", "csv")
        if fmt not in FORMATTERS:
            raise typer.BadParameter(f"unknown format {fmt!r}", param_hint="--format")

        after = options.get("after")
        before = options.get("before")
        config = load_config(
            config_file=options.get("config"),
            verbose=options.get("verbose", False),
            quiet=options.get("quiet", False),
            after=parse_iso_date(after) if after else None,
            before=parse_iso_date(before) if before else None,
            message_grep=options.get("grep"),
            workers=options.get("workers"),
            **overrides,
        )

        revisions = load_history(options)
        complexity_file: Optional[Path] = options.get("complexity")
        complexity = load_complexity(complexity_file) if complexity_file else None

        report = analyze(
            revisions,
            kind,
            complexity=complexity,
            config=config,
            sort_by=sort_by,
            descending=descending,
            limit=limit,
        )

        formatter = get_formatter(fmt)
        output: Optional[Path] = options.get("output")
        if output is not None:
            with open(output, "w", encoding="utf-8", newline="") as stream:
                formatter.render(report, stream)
            logger.info(f"Wrote {len(report)} rows to {output}")
        else:
            formatter.render(report)

    except EvolutionInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
