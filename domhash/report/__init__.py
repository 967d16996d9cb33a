"""Comparison report rendering."""

from .render import FORMATS, format_percent, format_result, write_report

__all__ = ["FORMATS", "format_percent", "format_result", "write_report"]
