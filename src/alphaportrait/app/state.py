from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from alphaportrait.core.models import (
    IDLE_STATUS,
    EnhancementResult,
    Phase,
    ProcessingStatus,
    SelectedInput,
)


@dataclass
class AppState:
    """
    Mutable state for a single GUI session.

    The GUI only reads this state; SessionController is the sole writer and
    orchestrates the transitions (select -> process -> result).
    """
    phase: Phase = Phase.READY
    status: ProcessingStatus = IDLE_STATUS

    # Input
    selected_input: Optional[SelectedInput] = None
    preview_encoding: Optional[str] = None

    # Output, only while phase is RESULT
    result: Optional[EnhancementResult] = None

    def reset(self) -> None:
        """Clear all session state (used by the Restart button)."""
        self.phase = Phase.READY
        self.status = IDLE_STATUS
        self.selected_input = None
        self.preview_encoding = None
        self.result = None

    def clear_selection(self) -> None:
        self.selected_input = None
        self.preview_encoding = None

    @property
    def can_start(self) -> bool:
        return (
            self.phase is Phase.READY
            and self.selected_input is not None
            and self.preview_encoding is not None
        )
