"""Export and rendering of extraction results."""
from .csv_export import CSV_HEADERS, default_export_name, to_csv, write_csv
from .report import format_inr, render_ledger, render_summary

__all__ = [
    "CSV_HEADERS",
    "default_export_name",
    "to_csv",
    "write_csv",
    "format_inr",
    "render_ledger",
    "render_summary",
]
