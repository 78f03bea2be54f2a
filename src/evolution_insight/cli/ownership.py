"""Ownership commands: main developers and author activity."""

from typing import Optional

import typer

from . import app
from ._common import DESC_OPTION, LIMIT_OPTION, SORT_OPTION, run_report


@app.command()
def ownership(
    ctx: typer.Context,
    minor_threshold: Optional[float] = typer.Option(
        None,
        "--minor-threshold",
        min=0.0,
        max=1.0,
        help="Share an author needs to count towards fragmentation (default 0.05)",
    ),
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """Main developer, their share of the churn and knowledge fragmentation."""
    run_report(ctx, "ownership", sort, desc, limit, minor_ownership_threshold=minor_threshold)


@app.command()
def authors(
    ctx: typer.Context,
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """Revisions and lines per author."""
    run_report(ctx, "authors", sort, desc, limit)
