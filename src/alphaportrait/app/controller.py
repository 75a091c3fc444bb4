from __future__ import annotations

import logging
import threading
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Protocol

from alphaportrait.app.export import save_data_uri
from alphaportrait.app.state import AppState
from alphaportrait.app.timers import NarrationTimers, Scheduler, ThreadingScheduler
from alphaportrait.core.data_uri import guess_mime_type, read_file_as_data_uri
from alphaportrait.core.errors import EncodingError, ErrorKind, error_kind
from alphaportrait.core.models import (
    IDLE_STATUS,
    NARRATION_SCHEDULE,
    STATUS_ANALYZING,
    STATUS_COMPLETED,
    EnhancementResult,
    Phase,
    ProcessingStatus,
    SelectedInput,
    StatusStep,
)

logger = logging.getLogger(__name__)

ENHANCE_FAILED_MESSAGE = "Failed to enhance image. Please try a different photo."
READ_FAILED_MESSAGE = "Could not read the selected photo. Please try a different file."

# What the user sees when a run fails; the underlying cause only goes to the log.
USER_MESSAGES = {
    ErrorKind.TRANSPORT: ENHANCE_FAILED_MESSAGE,
    ErrorKind.EMPTY_RESULT: ENHANCE_FAILED_MESSAGE,
    ErrorKind.ENCODING: ENHANCE_FAILED_MESSAGE,
}

Job = Callable[[], None]
Listener = Callable[[AppState], None]


class Enhancer(Protocol):
    def enhance(self, image: str, mime_type: str) -> str: ...


def _run_in_thread(job: Job) -> None:
    threading.Thread(target=job, daemon=True).start()


def _call_now(fn: Job) -> None:
    fn()


class SessionController:
    """
    Owns the session and every transition of the upload -> processing -> result wizard.

    Blocking work (file reads, the model call) is handed to run_async; its outcome
    comes back through post, which the GUI points at its event loop so that all
    state changes happen on one thread. Narration timers are scheduled on
    scheduler. Listeners are told after every change.

    Each selection and each enhancement run carries a token. reset() and newer
    selections invalidate older tokens, so results that arrive late are dropped
    instead of overwriting the session.
    """

    def __init__(
        self,
        client: Enhancer,
        state: Optional[AppState] = None,
        *,
        run_async: Callable[[Job], None] = _run_in_thread,
        post: Callable[[Job], None] = _call_now,
        scheduler: Optional[Scheduler] = None,
    ):
        self.client = client
        self.state = state if state is not None else AppState()
        self._run_async = run_async
        self._post = post
        self._scheduler = scheduler if scheduler is not None else ThreadingScheduler(post)
        self._listeners: List[Listener] = []
        self._selection_token = 0
        self._run_token = 0
        self._timers: Optional[NarrationTimers] = None

    # ---------- Listeners ----------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    # ---------- Selection ----------

    def select_file(self, path: str | Path, mime_type: Optional[str] = None) -> None:
        """Store a new input and encode its preview in the background."""
        if self.state.phase is not Phase.READY:
            logger.debug("Ignoring file selection while %s", self.state.phase.value)
            return

        path = str(path)
        mime = mime_type or guess_mime_type(path)
        self.state.selected_input = SelectedInput(path=path, mime_type=mime)
        self.state.preview_encoding = None
        if self.state.status.step is StatusStep.ERROR:
            self.state.status = IDLE_STATUS

        self._selection_token += 1
        token = self._selection_token
        self._notify()

        def worker() -> None:
            try:
                uri = read_file_as_data_uri(path, mime)
            except EncodingError as e:
                self._post(partial(self._on_preview_failed, token, e))
                return
            self._post(partial(self._on_preview_ready, token, uri))

        self._run_async(worker)

    def _on_preview_ready(self, token: int, uri: str) -> None:
        if token != self._selection_token:
            return
        self.state.preview_encoding = uri
        self._notify()

    def _on_preview_failed(self, token: int, exc: EncodingError) -> None:
        logger.error("Reading selected photo failed: %s", exc, exc_info=exc)
        if token != self._selection_token:
            return
        self.state.clear_selection()
        self.state.status = ProcessingStatus(StatusStep.ERROR, READ_FAILED_MESSAGE)
        self._notify()

    def clear_selection(self) -> None:
        if self.state.phase is not Phase.READY:
            return
        self._selection_token += 1
        self.state.clear_selection()
        self._notify()

    # ---------- Enhancement ----------

    def start_enhancement(self) -> bool:
        """
        Begin one enhancement run. Returns False, changing nothing, unless the
        session is READY with both a selection and its preview.
        """
        selected = self.state.selected_input
        original = self.state.preview_encoding
        if self.state.phase is not Phase.READY or selected is None or original is None:
            return False

        self._run_token += 1
        token = self._run_token

        self.state.phase = Phase.PROCESSING
        self.state.status = STATUS_ANALYZING
        self.state.result = None

        timers = NarrationTimers(self._scheduler)
        self._timers = timers
        for delay_s, status in NARRATION_SCHEDULE:
            timers.schedule(delay_s, partial(self._narrate, token, status))
        self._notify()

        def worker() -> None:
            # the run owns its timers; they are released however the worker exits
            with timers:
                try:
                    enhanced = self.client.enhance(original, selected.mime_type)
                except Exception as e:
                    self._post(partial(self._on_enhance_failed, token, timers, e))
                    return
                self._post(partial(self._on_enhance_done, token, timers, original, enhanced))

        logger.info("Enhancing %s", selected.path)
        self._run_async(worker)
        return True

    def _is_current_run(self, token: int) -> bool:
        return token == self._run_token and self.state.phase is Phase.PROCESSING

    def _narrate(self, token: int, status: ProcessingStatus) -> None:
        if not self._is_current_run(token):
            return
        self.state.status = status
        self._notify()

    def _release_timers(self, timers: NarrationTimers) -> None:
        timers.cancel_all()
        if self._timers is timers:
            self._timers = None

    def _on_enhance_done(self, token: int, timers: NarrationTimers, original: str, enhanced: str) -> None:
        self._release_timers(timers)
        if not self._is_current_run(token):
            logger.info("Discarding enhancement result of an abandoned run")
            return
        self.state.result = EnhancementResult(enhanced_encoding=enhanced, original_encoding=original)
        self.state.status = STATUS_COMPLETED
        self.state.phase = Phase.RESULT
        self._notify()

    def _on_enhance_failed(self, token: int, timers: NarrationTimers, exc: Exception) -> None:
        self._release_timers(timers)
        kind = error_kind(exc)
        logger.error("Enhancement failed (%s): %s", kind.value, exc, exc_info=exc)
        if not self._is_current_run(token):
            return
        self.state.phase = Phase.READY
        self.state.status = ProcessingStatus(StatusStep.ERROR, USER_MESSAGES[kind])
        self._notify()

    # ---------- Result / reset ----------

    def save_result(self, path: str | Path) -> Path:
        result = self.state.result
        if self.state.phase is not Phase.RESULT or result is None:
            raise RuntimeError("There is no enhanced image to save.")
        out = save_data_uri(result.enhanced_encoding, path)
        logger.info("Saved enhanced portrait to %s", out)
        return out

    def reset(self) -> None:
        """Back to the initial session from any phase."""
        self._selection_token += 1
        self._run_token += 1
        if self._timers is not None:
            self._release_timers(self._timers)
        self.state.reset()
        self._notify()
