"""Text rendering helpers for the history CLI."""

from __future__ import annotations

from typing import Optional

from .config import DisplayConfig
from .models import JourneyEntry
from .progress import aggregate, per_module_breakdown


def format_created_at(entry: JourneyEntry, display: Optional[DisplayConfig] = None) -> str:
    display = display or DisplayConfig()
    if entry.created_at is None:
        return display.unknown_date
    return entry.created_at.strftime(display.date_format)


def progress_bar(percent: int, width: int = 20) -> str:
    filled = width * percent // 100
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_summary(entry: JourneyEntry, display: Optional[DisplayConfig] = None) -> str:
    """One tab-separated line per journey: id, date, percent, query."""
    return f"{entry.id}\t{format_created_at(entry, display)}\t{aggregate(entry)}%\t{entry.query}"


def format_details(entry: JourneyEntry, display: Optional[DisplayConfig] = None) -> list[str]:
    percent = aggregate(entry)
    lines = [
        entry.query,
        f"Created on: {format_created_at(entry, display)}",
        f"Module Progress: {percent}% {progress_bar(percent)}",
    ]
    for index, module_percent in per_module_breakdown(entry):
        lines.append(
            f"  Module {index + 1}: {module_percent}% {progress_bar(module_percent, width=10)}"
        )
    return lines
