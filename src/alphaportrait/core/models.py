from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    """Top-level wizard step. Exactly one holds at a time."""
    READY = "READY"
    PROCESSING = "PROCESSING"
    RESULT = "RESULT"


class StatusStep(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    ENHANCING = "enhancing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ProcessingStatus:
    """
    Human-readable progress shown while processing, or the last error.

    step is for display only; it never gates a transition.
    """
    step: StatusStep = StatusStep.IDLE
    message: str = ""


@dataclass(frozen=True)
class SelectedInput:
    """A photo picked by the user and the MIME type it is declared as."""
    path: str
    mime_type: str


@dataclass(frozen=True)
class EnhancementResult:
    """
    Both images of a finished run, as data URIs.

    original_encoding is the preview captured when the run was started.
    """
    enhanced_encoding: str
    original_encoding: str


IDLE_STATUS = ProcessingStatus()

STATUS_ANALYZING = ProcessingStatus(StatusStep.UPLOADING, "Analyzing portrait geometry...")
STATUS_OPTICS = ProcessingStatus(StatusStep.ENHANCING, "Simulating Sony A1 optical path...")
STATUS_REFINING = ProcessingStatus(StatusStep.ENHANCING, "Refining skin texture and highlights...")
STATUS_COMPLETED = ProcessingStatus(StatusStep.COMPLETED, "Enhancement complete.")

# (delay in seconds, status) pairs narrated while the model call is pending
NARRATION_SCHEDULE: tuple[tuple[float, ProcessingStatus], ...] = (
    (2.0, STATUS_OPTICS),
    (5.0, STATUS_REFINING),
)
