"""CSV Table Compare - column, key and cell level diffs between two CSV files."""

try:
    from importlib.metadata import version

    __version__ = version("csv-table-compare")
except Exception:
    __version__ = "unknown"
