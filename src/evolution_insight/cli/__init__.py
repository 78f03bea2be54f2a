"""CLI entry point: the typer app and its registered subcommands."""

import typer

app = typer.Typer(
    name="evolution-insight",
    help="Evolution Insight - coupling, hotspots and ownership from version-control history",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .coupling import coupling as _coupling, temporal_coupling as _temporal  # noqa: F401, E402
from .churn import churn as _churn, hotspots as _hotspots, revisions as _revisions  # noqa: F401, E402
from .ownership import authors as _authors, ownership as _ownership  # noqa: F401, E402
from .age import age as _age, churn_trend as _churn_trend, trend as _trend  # noqa: F401, E402
from .summary import summary as _summary  # noqa: F401, E402
