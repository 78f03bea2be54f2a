"""
Logging setup for Evolution Insight.

Log records go to stderr through rich, so report output on stdout stays
machine-readable. Verbosity uses the same names as ``AnalysisConfig.verbosity``.
"""

import logging
from collections.abc import Iterable
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "evolution_insight"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route evolution_insight log records to a rich stderr handler.

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings) or "verbose" (debug)
        log_file: Optional path that also receives every record at the same level

    Returns:
        The package root logger
    """
    level = LEVELS.get(verbosity, logging.WARNING)
    verbose = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
            )
        )
        handlers.append(file_handler)

    # force=True: repeated CLI invocations in one process must not stack handlers
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the evolution_insight namespace (the root one if ``name`` is None)."""
    if name is None:
        return logging.getLogger(_ROOT_LOGGER)
    if not name.startswith(_ROOT_LOGGER):
        name = f"{_ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def log_errors(logger: logging.Logger, errors: Iterable[Exception], level: int = logging.DEBUG) -> int:
    """Log non-fatal errors collected during an analysis, one record each.

    Structured errors are logged with their details. Returns how many were logged.
    """
    count = 0
    for error in errors:
        to_dict = getattr(error, "to_dict", None)
        if to_dict is not None:
            data = to_dict()
            logger.log(level, f"{data['kind']}: {data['message']}", extra={"details": data["details"]})
        else:
            logger.log(level, str(error))
        count += 1
    return count
