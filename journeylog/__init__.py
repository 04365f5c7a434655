"""journeylog: learning journey history with progress tracking."""

from .errors import (
    AlreadyInProgress,
    DeletionFailed,
    EntryNotFound,
    FetchFailed,
    JourneyError,
    MalformedRecord,
    MissingModules,
    ResumeError,
    SaveFailed,
)
from .models import JourneyEntry
from .persistence import get_backend
from .progress import aggregate, per_module_breakdown
from .resume import NormalizedJourney, validate_for_resume
from .service import HistoryService
from .store import HistorySnapshot, JourneyStore

__version__ = "0.1.0"
__all__ = [
    "AlreadyInProgress",
    "DeletionFailed",
    "EntryNotFound",
    "FetchFailed",
    "HistoryService",
    "HistorySnapshot",
    "JourneyEntry",
    "JourneyError",
    "JourneyStore",
    "MalformedRecord",
    "MissingModules",
    "NormalizedJourney",
    "ResumeError",
    "SaveFailed",
    "aggregate",
    "get_backend",
    "per_module_breakdown",
    "validate_for_resume",
]
