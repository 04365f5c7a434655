"""Progress aggregation for journey entries."""

from __future__ import annotations

import re
from collections.abc import Mapping
from fractions import Fraction
from typing import Any, Optional, Union

from .models import JourneyEntry, coerce_percent, round_half_up

EntryLike = Union[JourneyEntry, Mapping]

_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


def _fields(entry: EntryLike) -> tuple[dict[Any, int], Optional[int]]:
    if isinstance(entry, JourneyEntry):
        raw_modules: Any = entry.module_progress
        raw_progress: Any = entry.progress
    elif isinstance(entry, Mapping):
        raw_modules = entry.get("moduleProgress", entry.get("module_progress"))
        raw_progress = entry.get("progress")
    else:
        return {}, None

    module_progress: dict[Any, int] = {}
    if isinstance(raw_modules, Mapping):
        for key, value in raw_modules.items():
            percent = coerce_percent(value)
            if percent is not None:
                module_progress[key] = percent
    return module_progress, coerce_percent(raw_progress)


def aggregate(entry: EntryLike) -> int:
    """Return the overall completion percentage of ``entry``.

    The mean of the per-module values wins when any are present, then the
    coarse ``progress`` field, then zero. Never raises.
    """
    module_progress, progress = _fields(entry)
    if module_progress:
        values = list(module_progress.values())
        return round_half_up(Fraction(sum(values), len(values)))
    if progress is not None:
        return progress
    return 0


def _parse_index(key: Any) -> Optional[int]:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    text = str(key).strip()
    if not _INDEX_PATTERN.fullmatch(text):
        return None
    return int(text)


def per_module_breakdown(entry: EntryLike) -> list[tuple[int, int]]:
    """Return ``(module_index, percent)`` pairs ordered by module index.

    Keys that are not plain integers (``"x"``, ``"1_0"``, ``"1.5"``) are
    skipped. When two keys name the same index (``"1"`` and ``"01"``) the
    first one seen is kept.
    """
    module_progress, _ = _fields(entry)
    by_index: dict[int, int] = {}
    for key, percent in module_progress.items():
        index = _parse_index(key)
        if index is None or index in by_index:
            continue
        by_index[index] = percent
    return sorted(by_index.items())


__all__ = ["aggregate", "per_module_breakdown"]
