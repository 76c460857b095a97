"""Owned session store driving the state transitions."""
import uuid
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from statementlens.extraction.encoder import encode_files
from statementlens.models import ExtractionResult, FileSource, QueuedFile
from statementlens.utils.logger import get_logger, set_session_context
from statementlens.utils.exceptions import (
    EXTRACTION_FAILED_MESSAGE,
    ExtractionError,
    StatementLensError,
)
from . import state as transitions
from .previews import PreviewRegistry, TempFilePreviews
from .state import SessionState

logger = get_logger()

Listener = Callable[[SessionState], None]


class Extractor(Protocol):
    async def extract(self, batch: Sequence[QueuedFile]) -> ExtractionResult:
        ...


class SessionStore:
    """Holds the single SessionState and applies transitions to it."""

    def __init__(
        self,
        extractor: Extractor,
        previews: Optional[PreviewRegistry] = None,
        max_size_bytes: Optional[int] = None,
    ):
        self.extractor = extractor
        self.previews = previews if previews is not None else TempFilePreviews()
        self.max_size_bytes = max_size_bytes
        self.session_id = uuid.uuid4().hex[:8]
        self._state = SessionState()
        self._listeners: List[Listener] = []
        self._closed = False
        set_session_context(self.session_id)

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for every new state; returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _apply(self, new_state: SessionState) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    async def add_files(self, sources: Iterable[FileSource]) -> int:
        """Encode and queue files. Returns how many were queued."""
        if self._closed:
            return 0
        if self._state.is_processing:
            logger.warning("Ignoring new files while an extraction is running")
            return 0

        sources = list(sources)
        if not sources:
            return 0

        encoded = await encode_files(sources, self.max_size_bytes)

        # Submit or close may have run while the files were encoding
        if self._closed:
            logger.warning(f"Session closed before {len(encoded)} encoded files could be queued")
            return 0
        if self._state.is_processing:
            logger.warning(f"Dropping {len(encoded)} files encoded after an extraction started")
            return 0

        with_previews: List[QueuedFile] = []
        try:
            for f in encoded:
                with_previews.append(replace(f, preview=self.previews.acquire(f)))
        except Exception:
            for queued in with_previews:
                self._release(queued)
            raise

        self._apply(transitions.files_added(self._state, with_previews, attempted=len(sources)))
        logger.info(f"Queued {len(with_previews)} files ({len(self._state.queued_files)} total)")
        return len(with_previews)

    def remove_file(self, index: int) -> QueuedFile:
        new_state, removed = transitions.file_removed(self._state, index)
        self._apply(new_state)
        self._release(removed)
        logger.info(f"Removed {removed.display_name} from the queue")
        return removed

    def clear_all(self) -> None:
        new_state, removed = transitions.queue_cleared(self._state)
        self._apply(new_state)
        for queued in removed:
            self._release(queued)
        logger.info(f"Cleared {len(removed)} queued files")

    async def submit(self) -> bool:
        """
        Run one extraction over the whole queue.

        Returns False without calling the model when the queue is empty or
        an extraction is already running.
        """
        if not transitions.can_submit(self._state):
            logger.debug(f"Submit ignored in phase {self._state.phase.value}")
            return False

        batch = self._state.queued_files
        self._apply(transitions.submission_started(self._state))

        try:
            result = await self.extractor.extract(batch)
        except ExtractionError as e:
            self._apply(transitions.extraction_failed(self._state, e.user_message))
        except StatementLensError as e:
            logger.error(f"Extraction rejected: {e}")
            self._apply(transitions.extraction_failed(self._state, str(e)))
        except Exception as e:
            logger.exception(f"Unexpected extraction error: {e}")
            self._apply(transitions.extraction_failed(self._state, EXTRACTION_FAILED_MESSAGE))
        else:
            self._apply(transitions.extraction_succeeded(self._state, result))
        return True

    def close(self) -> None:
        """Release every remaining preview. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for queued in self._state.queued_files:
            self._release(queued)
        self._state = SessionState()
        dispose = getattr(self.previews, "dispose", None)
        if dispose is not None:
            dispose()
        set_session_context(None)

    def _release(self, queued: QueuedFile) -> None:
        if queued.preview is not None:
            self.previews.release(queued.preview)

    def __enter__(self) -> "SessionStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
