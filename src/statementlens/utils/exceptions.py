"""Custom exception classes for StatementLens."""

EXTRACTION_FAILED_MESSAGE = (
    "Failed to process the statements. "
    "Ensure none of the files are password protected."
)


class StatementLensError(Exception):
    """Base exception for StatementLens."""
    pass


class ConfigError(StatementLensError):
    """Configuration-related errors."""
    pass


class EncodingError(StatementLensError):
    """A single file could not be read or encoded."""

    def __init__(self, message: str, display_name: str = ""):
        super().__init__(message)
        self.display_name = display_name


class ValidationError(StatementLensError):
    """Data validation errors."""
    pass


class InvalidBatchError(ValidationError):
    """Extraction batch violates the input constraints."""
    pass


class PreviewError(StatementLensError):
    """Preview resource misuse."""
    pass


class ExtractionError(StatementLensError):
    """Base class for failed extraction attempts."""

    def __init__(self, detail: str, user_message: str = EXTRACTION_FAILED_MESSAGE):
        super().__init__(detail)
        self.user_message = user_message


class ExtractionFailedError(ExtractionError):
    """Network or model call failed, or returned nothing."""
    pass


class MalformedResponseError(ExtractionError):
    """Model response does not match the output schema."""
    pass
