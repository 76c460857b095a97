"""Upload/process/display session lifecycle."""
from .state import SessionPhase, SessionState, can_submit
from .store import SessionStore
from .previews import PreviewRegistry, TempFilePreviews

__all__ = [
    "SessionPhase",
    "SessionState",
    "can_submit",
    "SessionStore",
    "PreviewRegistry",
    "TempFilePreviews",
]
