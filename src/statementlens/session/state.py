"""Session state and its transitions.

Every transition is a pure function from a state (plus event data) to a new
state. Resources tied to removed files are returned to the caller, who owns
releasing them.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from statementlens.models import ExtractionResult, QueuedFile

NOTHING_READABLE_MESSAGE = "None of the selected files could be read."


class SessionPhase(str, Enum):
    IDLE = "idle"
    FILES_QUEUED = "files_queued"
    PROCESSING = "processing"
    RESULT_READY = "result_ready"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """Upload/process/display lifecycle of one application session."""
    is_processing: bool = False
    result: Optional[ExtractionResult] = None
    error: Optional[str] = None
    queued_files: Tuple[QueuedFile, ...] = ()

    @property
    def phase(self) -> SessionPhase:
        if self.is_processing:
            return SessionPhase.PROCESSING
        if self.result is not None:
            return SessionPhase.RESULT_READY
        if self.error is not None:
            return SessionPhase.FAILED
        if self.queued_files:
            return SessionPhase.FILES_QUEUED
        return SessionPhase.IDLE


def can_submit(state: SessionState) -> bool:
    return bool(state.queued_files) and not state.is_processing


def files_added(state: SessionState, files: Sequence[QueuedFile], attempted: int = 0) -> SessionState:
    """Append newly encoded files; new input supersedes old output."""
    queued = state.queued_files + tuple(files)
    error = None
    if attempted and not queued:
        error = NOTHING_READABLE_MESSAGE
    return replace(state, queued_files=queued, result=None, error=error)


def file_removed(state: SessionState, index: int) -> Tuple[SessionState, QueuedFile]:
    """Drop one queued file. Raises IndexError for a bad index."""
    if not 0 <= index < len(state.queued_files):
        raise IndexError(f"No queued file at index {index}")
    removed = state.queued_files[index]
    remaining = state.queued_files[:index] + state.queued_files[index + 1:]
    return replace(state, queued_files=remaining), removed


def queue_cleared(state: SessionState) -> Tuple[SessionState, Tuple[QueuedFile, ...]]:
    """Empty the queue and forget any output."""
    return replace(state, queued_files=(), result=None, error=None), state.queued_files


def submission_started(state: SessionState) -> SessionState:
    return replace(state, is_processing=True, result=None, error=None)


def extraction_succeeded(state: SessionState, result: ExtractionResult) -> SessionState:
    return replace(state, is_processing=False, result=result, error=None)


def extraction_failed(state: SessionState, message: str) -> SessionState:
    """Record the failure; queued files stay for a retry."""
    return replace(state, is_processing=False, result=None, error=message)
