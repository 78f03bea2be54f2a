"""Age and trend commands."""

from typing import Optional

import typer

from ..exceptions import ConfigurationRangeError
from ..history.filters import parse_iso_date
from . import app
from ._common import DESC_OPTION, LIMIT_OPTION, SORT_OPTION, run_report


@app.command()
def age(
    ctx: typer.Context,
    as_of: Optional[str] = typer.Option(
        None, "--as-of", help="Measure age from YYYY-MM-DD instead of the latest commit"
    ),
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """Days since each entity was last changed."""
    reference = None
    if as_of:
        try:
            reference = parse_iso_date(as_of)
        except ConfigurationRangeError as e:
            raise typer.BadParameter(e.reason, param_hint="--as-of")
    run_report(ctx, "age", sort, desc, limit, analysis_reference_time=reference)


@app.command()
def trend(
    ctx: typer.Context,
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """Complexity over time per entity (needs timestamped --complexity samples)."""
    run_report(ctx, "trend", sort, desc, limit)


@app.command("churn-trend")
def churn_trend(
    ctx: typer.Context,
    window: Optional[str] = typer.Option(
        None, "--window", help="Time window: hour | day | week | month | <seconds>"
    ),
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """Added and deleted lines per entity per time window."""
    run_report(ctx, "churn-trend", sort, desc, limit, time_window=window)
