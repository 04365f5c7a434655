"""Checks a journey is complete enough to be resumed."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, Field

from .errors import MissingModules
from .models import JourneyEntry


class NormalizedJourney(BaseModel):
    """Journey data handed to the navigation layer on resume."""

    id: str | None = None
    query: str
    modules: list[dict[str, Any]] = Field(default_factory=list)


def _normalize_module(module: Any) -> dict[str, Any]:
    fields = dict(module) if isinstance(module, Mapping) else {}
    topics = fields.get("topics")
    fields["topics"] = list(topics) if isinstance(topics, (list, tuple)) else []
    return fields


def validate_for_resume(entry: Union[JourneyEntry, Mapping]) -> NormalizedJourney:
    """Return ``entry`` with every module guaranteed a ``topics`` list.

    Raises ``MissingModules`` when the journey has no module list at all. The
    entry itself is never modified.
    """
    if isinstance(entry, JourneyEntry):
        journey_id, query, modules = entry.id, entry.query, entry.modules
    else:
        journey_id = entry.get("id")
        query = entry.get("query")
        modules = entry.get("modules")

    if not isinstance(modules, (list, tuple)):
        raise MissingModules(None if journey_id is None else str(journey_id))

    return NormalizedJourney(
        id=None if journey_id is None else str(journey_id),
        query="" if query is None else str(query),
        modules=[_normalize_module(module) for module in modules],
    )


__all__ = ["NormalizedJourney", "validate_for_resume"]
