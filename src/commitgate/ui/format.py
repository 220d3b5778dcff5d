"""Formatting utilities for CommitGate console output.

Provides step banners, the Markdown summary table, and colored text.
All functions are pure and return strings; callers decide where to print.

Key design principles:
- Stable ordering: rows render in the order given (execution order)
- Optional color: all color can be disabled with --color never or NO_COLOR
- Non-TTY safe: AUTO mode emits no escapes when stdout is redirected
"""

import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence


class ColorMode(Enum):
    """Color output mode."""

    AUTO = "auto"  # Color if TTY, no color otherwise
    ALWAYS = "always"  # Always use color
    NEVER = "never"  # Never use color


_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
}


def _should_color(mode: ColorMode) -> bool:
    """Determine if output should be colored."""
    if mode == ColorMode.NEVER:
        return False
    if mode == ColorMode.ALWAYS:
        return True
    # AUTO: color if stdout is a TTY and NO_COLOR is unset
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, color: str, mode: ColorMode = ColorMode.AUTO) -> str:
    """Apply color to text if color mode allows.

    Args:
        text: Text to colorize.
        color: Color name (red, green, yellow, blue, etc.)
        mode: Color mode (auto, always, never).

    Returns:
        Colored text if mode allows, otherwise plain text.
    """
    if not _should_color(mode):
        return text

    code = _COLORS.get(color, "")
    if not code:
        return text

    return f"{code}{text}{_COLORS['reset']}"


def format_step_banner(
    index: int, total: int, title: str, mode: ColorMode = ColorMode.AUTO
) -> str:
    """Banner printed before a check runs, e.g. '==> [3/6] PHPStan'."""
    return colorize(f"==> [{index}/{total}] Running {title}...", "blue", mode)


def format_status(status: str, mode: ColorMode = ColorMode.AUTO) -> str:
    """Color PASS green and FAIL red."""
    if status == "PASS":
        return colorize(status, "green", mode)
    if status == "FAIL":
        return colorize(status, "red", mode)
    return status


def format_decision(allowed: bool, mode: ColorMode = ColorMode.AUTO) -> str:
    """Final banner for the commit decision."""
    if allowed:
        return colorize("✅ All checks passed. Proceeding with commit.", "green", mode)
    return colorize(
        "❌ Commit rejected. Fix all errors above before committing.", "red", mode
    )


def format_error(message: str, mode: ColorMode = ColorMode.AUTO) -> str:
    """Red error line for fatal errors."""
    return colorize(f"❌ {message}", "red", mode)


@dataclass
class Column:
    """Table column definition."""

    name: str
    header: str
    width: Optional[int] = None


def render_markdown_table(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[Column],
    *,
    color_mode: ColorMode = ColorMode.AUTO,
    color_column: Optional[str] = None,
) -> str:
    """Render rows as a Markdown pipe table.

    Rows keep their given order. Widths are computed from the uncolored
    text so colored cells stay aligned.

    Args:
        rows: Sequence of dicts to render.
        columns: Column definitions.
        color_mode: Color output mode.
        color_column: Column whose PASS/FAIL values are colored.

    Returns:
        Table as a string, or "" when there are no rows.
    """
    if not rows:
        return ""

    widths = []
    for col in columns:
        if col.width:
            widths.append(col.width)
        else:
            max_len = len(col.header)
            for row in rows:
                max_len = max(max_len, len(str(row.get(col.name, ""))))
            widths.append(max_len)

    def line(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"

    lines = [
        line([col.header.ljust(widths[i]) for i, col in enumerate(columns)]),
        line(["-" * w for w in widths]),
    ]

    for row in rows:
        cells = []
        for i, col in enumerate(columns):
            val = str(row.get(col.name, ""))
            padded = val.ljust(widths[i])
            if col.name == color_column:
                padded = format_status(val, color_mode) + " " * (widths[i] - len(val))
            cells.append(padded)
        lines.append(line(cells))

    return "\n".join(lines)


SUMMARY_COLUMNS = [
    Column(name="check", header="Check"),
    Column(name="status", header="Status"),
    Column(name="commit", header="Commit"),
    Column(name="suggestion", header="Suggestion"),
]


def render_summary(rows: Sequence[Any], color_mode: ColorMode = ColorMode.AUTO) -> str:
    """Render SummaryRow objects as the Markdown summary table."""
    return render_markdown_table(
        [r.to_dict() for r in rows],
        SUMMARY_COLUMNS,
        color_mode=color_mode,
        color_column="status",
    )
