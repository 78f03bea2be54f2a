"""Coupling commands: entities that change together."""

from typing import Optional

import typer

from . import app
from ._common import DESC_OPTION, LIMIT_OPTION, SORT_OPTION, run_report

_MIN_COUNT = typer.Option(None, "--min-count", min=0, help="Minimum co-change count")
_MIN_DEGREE = typer.Option(
    None, "--min-degree", min=0.0, max=100.0, help="Minimum coupling degree in percent"
)
_MAX_ENTITIES = typer.Option(
    None, "--max-entities", min=2, help="Skip commits touching more entities than this"
)


@app.command()
def coupling(
    ctx: typer.Context,
    min_count: Optional[int] = _MIN_COUNT,
    min_degree: Optional[float] = _MIN_DEGREE,
    max_entities: Optional[int] = _MAX_ENTITIES,
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """
    Logical coupling: entities changed in the same commit.

    Degree is co-changes divided by the smaller of the two entities'
    revision counts, in percent.
    """
    run_report(
        ctx,
        "coupling",
        sort,
        desc,
        limit,
        min_coupling_count=min_count,
        min_coupling_percentage=min_degree,
        max_entities_per_commit=max_entities,
    )


@app.command("temporal-coupling")
def temporal_coupling(
    ctx: typer.Context,
    window: Optional[str] = typer.Option(
        None, "--window", help="Time window: hour | day | week | month | <seconds>"
    ),
    min_count: Optional[int] = _MIN_COUNT,
    min_degree: Optional[float] = _MIN_DEGREE,
    max_entities: Optional[int] = _MAX_ENTITIES,
    sort: Optional[str] = SORT_OPTION,
    desc: bool = DESC_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
):
    """
    Temporal coupling: entities changed within the same time window,
    by anyone, not necessarily in one commit.
    """
    run_report(
        ctx,
        "temporal-coupling",
        sort,
        desc,
        limit,
        time_window=window,
        min_coupling_count=min_count,
        min_coupling_percentage=min_degree,
        max_entities_per_commit=max_entities,
    )
