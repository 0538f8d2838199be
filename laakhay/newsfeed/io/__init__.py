"""Export formats."""

from .csv_export import CSV_HEADER, default_export_filename, to_csv, write_csv

__all__ = ["CSV_HEADER", "to_csv", "write_csv", "default_export_filename"]
