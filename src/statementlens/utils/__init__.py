"""Utility modules."""
from .logger import get_logger, set_session_context, configure_logging
from .exceptions import (
    StatementLensError,
    ConfigError,
    EncodingError,
    ValidationError,
    InvalidBatchError,
    PreviewError,
    ExtractionError,
    ExtractionFailedError,
    MalformedResponseError,
    EXTRACTION_FAILED_MESSAGE
)

__all__ = [
    "get_logger",
    "set_session_context",
    "configure_logging",
    "StatementLensError",
    "ConfigError",
    "EncodingError",
    "ValidationError",
    "InvalidBatchError",
    "PreviewError",
    "ExtractionError",
    "ExtractionFailedError",
    "MalformedResponseError",
    "EXTRACTION_FAILED_MESSAGE"
]
