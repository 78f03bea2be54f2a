"""Churn commands: change volume, revision frequency and hotspots."""

from typing import Optional

import typer

from . import app
from ._common import DESC_OPTION, LIMIT_OPTION, SORT_OPTION, run_report


@app.command()
def churn(
    ctx: typer.Context,
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """Added and deleted lines and revision count per entity."""
    run_report(ctx, "churn", sort, desc, limit)


@app.command()
def revisions(
    ctx: typer.Context,
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """Revision frequency per entity, most changed first."""
    run_report(ctx, "revisions", sort, desc, limit)


@app.command()
def hotspots(
    ctx: typer.Context,
    strategy: Optional[str] = typer.Option(
        None, "--strategy", help="Combine churn and complexity: multiplicative | rank_sum"
    ),
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """
    Entities that change often and are complex.

    Needs --complexity; entities without a score are ranked by churn alone
    and listed last.
    """
    run_report(ctx, "hotspots", sort, desc, limit, hotspot_strategy=strategy)
