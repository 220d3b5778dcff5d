"""UI module for CommitGate.

Console formatting for step banners, the summary table, and errors.

Usage:
    from commitgate.ui import render_summary, ColorMode
"""

from .format import (
    ColorMode,
    Column,
    colorize,
    format_decision,
    format_error,
    format_status,
    format_step_banner,
    render_markdown_table,
    render_summary,
)

__all__ = [
    "ColorMode",
    "Column",
    "colorize",
    "format_decision",
    "format_error",
    "format_status",
    "format_step_banner",
    "render_markdown_table",
    "render_summary",
]
