"""Report assembly: column schemas, sorting and limits."""

from .assembler import Report, assemble, validate_request
from .schema import SCHEMAS, columns_for

__all__ = ["Report", "SCHEMAS", "assemble", "columns_for", "validate_request"]
