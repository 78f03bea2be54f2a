"""Summary command."""

import typer

from . import app
from ._common import run_report


@app.command()
def summary(ctx: typer.Context):
    """Commits, authors and entities in the analyzed history."""
    run_report(ctx, "summary")
