"""Command implementations for csv-table-compare CLI."""

from .compare import compare_files
from .export import export_comparison
from .keys import list_keys

__all__ = ["compare_files", "export_comparison", "list_keys"]
