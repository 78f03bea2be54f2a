"""Output formatters for Evolution Insight reports."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .html_formatter import HtmlFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter

FORMATTERS = {
    "csv": CsvFormatter,
    "html": HtmlFormatter,
    "json": JsonFormatter,
    "rich": RichFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "csv", "html", "json", "rich"

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "CsvFormatter",
    "HtmlFormatter",
    "JsonFormatter",
    "RichFormatter",
    "FORMATTERS",
    "get_formatter",
]
