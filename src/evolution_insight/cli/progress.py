"""Progress display while the git history is read."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Callable, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)


@contextmanager
def revision_progress(
    console: Console, total: Optional[int] = None
) -> Iterator[Callable[[], None]]:
    """Show a transient progress bar and yield a callback that advances it by one revision.

    ``total`` is the commit limit when one is set; without it the bar pulses.
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
    task_id = progress.add_task("Reading revisions", total=total)

    def advance() -> None:
        progress.advance(task_id)

    with progress:
        yield advance
