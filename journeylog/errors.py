"""Typed failure conditions raised by the journey history core."""

from __future__ import annotations

from typing import Optional


class JourneyError(Exception):
    """Base class for all journey history failures."""


class FetchFailed(JourneyError):
    """Loading entries from the persistence backend failed."""


class SaveFailed(JourneyError):
    """The persistence backend rejected a new journey."""

    def __init__(self, journey_id: str, reason: Optional[str] = None) -> None:
        self.journey_id = journey_id
        self.reason = reason
        message = f"Failed to save journey {journey_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DeletionFailed(JourneyError):
    """The persistence backend rejected, or could not find, a deletion."""

    def __init__(self, journey_id: str, reason: Optional[str] = None) -> None:
        self.journey_id = journey_id
        self.reason = reason
        message = f"Failed to delete journey {journey_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class AlreadyInProgress(JourneyError):
    """A deletion for the same journey is still pending."""

    def __init__(self, journey_id: str) -> None:
        self.journey_id = journey_id
        super().__init__(f"Deletion of journey {journey_id} is already in progress")


class EntryNotFound(JourneyError):
    """No cached journey has the requested id."""

    def __init__(self, journey_id: str) -> None:
        self.journey_id = journey_id
        super().__init__(f"Journey {journey_id} not found")


class MalformedRecord(JourneyError):
    """A persisted record cannot be turned into a journey entry."""


class ResumeError(JourneyError):
    """A journey cannot be resumed."""


class MissingModules(ResumeError):
    """The journey has no usable module list."""

    def __init__(self, journey_id: Optional[str] = None) -> None:
        self.journey_id = journey_id
        super().__init__("Cannot continue this journey due to missing data")


__all__ = [
    "AlreadyInProgress",
    "DeletionFailed",
    "EntryNotFound",
    "FetchFailed",
    "JourneyError",
    "MalformedRecord",
    "MissingModules",
    "ResumeError",
    "SaveFailed",
]
