"""Data models for persisted learning journeys."""

from __future__ import annotations

import math
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from fractions import Fraction
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MalformedRecord


def round_half_up(value: float | Fraction) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + Fraction(1, 2))


def coerce_percent(value: Any) -> Optional[int]:
    """Return ``value`` as an int in [0, 100], or ``None`` if it is not a number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = Fraction(value)
    return min(100, max(0, round_half_up(value)))


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        # epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


class JourneyEntry(BaseModel):
    """One saved learning journey.

    Records coming back from a backend are loosely typed. The validators below
    normalise them once so that downstream code never has to second-guess the
    shape of ``modules``, ``progress`` or ``module_progress``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    query: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    modules: Optional[list[dict[str, Any]]] = None
    progress: Optional[int] = None
    module_progress: Optional[dict[str, int]] = Field(
        default=None, alias="moduleProgress"
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, (int, uuid.UUID)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value: Any) -> Optional[datetime]:
        return _parse_timestamp(value)

    @field_validator("modules", mode="before")
    @classmethod
    def _lenient_modules(cls, value: Any) -> Optional[list[dict[str, Any]]]:
        if not isinstance(value, (list, tuple)):
            return None
        return [dict(module) if isinstance(module, Mapping) else {} for module in value]

    @field_validator("progress", mode="before")
    @classmethod
    def _lenient_progress(cls, value: Any) -> Optional[int]:
        return coerce_percent(value)

    @field_validator("module_progress", mode="before")
    @classmethod
    def _lenient_module_progress(cls, value: Any) -> Optional[dict[str, int]]:
        if not isinstance(value, Mapping):
            return None
        cleaned: dict[str, int] = {}
        for key, raw in value.items():
            percent = coerce_percent(raw)
            if percent is not None:
                cleaned[str(key)] = percent
        return cleaned

    @classmethod
    def new(
        cls,
        query: str,
        modules: Optional[list[dict[str, Any]]] = None,
        progress: Optional[int] = None,
    ) -> "JourneyEntry":
        """Create a fresh journey with a generated id and timestamp."""
        return cls(
            id=str(uuid.uuid4()),
            query=query,
            created_at=datetime.now(timezone.utc),
            modules=modules if modules is not None else [],
            progress=progress,
        )

    @classmethod
    def from_record(cls, record: Any) -> "JourneyEntry":
        """Validate a raw backend record, raising ``MalformedRecord`` on failure."""
        if isinstance(record, cls):
            return record
        if not isinstance(record, Mapping):
            raise MalformedRecord(f"Expected a mapping, got {type(record).__name__}")
        try:
            return cls.model_validate(dict(record))
        except ValidationError as exc:
            raise MalformedRecord(str(exc)) from exc

    def to_record(self) -> dict[str, Any]:
        """Serialise to the camelCase shape backends store."""
        return self.model_dump(by_alias=True, mode="json")


__all__ = ["JourneyEntry", "coerce_percent", "round_half_up"]
