"""Gemini extraction client using the google-genai SDK."""
import json
from typing import Optional, Sequence

from google import genai
from pydantic import ValidationError

from statementlens.config.manager import Config
from statementlens.config.settings import get_settings
from statementlens.models import ExtractionResult, QueuedFile
from statementlens.utils.logger import get_logger
from statementlens.utils.exceptions import (
    ExtractionFailedError,
    InvalidBatchError,
    MalformedResponseError,
)
from .audit import audit_transactions
from .request_builder import build_request
from .schema import ExtractionResultSchema

logger = get_logger()


class ExtractionClient:
    """Sends one batch of statements to Gemini and validates the answer."""

    def __init__(self, config: Config, client: Optional[genai.Client] = None):
        """
        Initialize the extraction client.

        Args:
            config: User configuration (API key, model name)
            client: Preconfigured SDK client, mainly for tests
        """
        self.config = config
        self.client = client or genai.Client(api_key=config.gemini_api_key)
        self.model_name = config.model_name
        self.settings = get_settings()

        logger.info(f"Extraction client initialized with {self.model_name}")

    async def extract(self, batch: Sequence[QueuedFile]) -> ExtractionResult:
        """
        Extract a consolidated ledger from a batch of files.

        Makes exactly one call; there is no retry.

        Raises:
            InvalidBatchError: empty batch or unusable entry
            ExtractionFailedError: the call failed or returned no text
            MalformedResponseError: the text does not match the schema
        """
        self._check_batch(batch)
        request = build_request(batch)

        logger.info(f"Sending {len(batch)} files to {self.model_name}")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=request.to_contents(),
                config=request.generation_config(self.settings.llm_response_mime_type),
            )
        except Exception as e:
            logger.error(f"Extraction failed: {e}")
            raise ExtractionFailedError(f"Model call failed: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            logger.error("Extraction failed: no data returned from model")
            raise ExtractionFailedError("No data returned from model")

        logger.debug(json.dumps(text[:500], ensure_ascii=False))

        result = self._parse_response(text)
        for issue in audit_transactions(result):
            logger.warning(f"Row {issue.index}: {issue.message}")

        logger.info(f"Extracted {len(result.transactions)} transactions")
        return result

    def _check_batch(self, batch: Sequence[QueuedFile]) -> None:
        if not batch:
            raise InvalidBatchError("Cannot extract from an empty batch")

        prefixes = tuple(self.settings.accepted_mime_prefixes)
        for queued in batch:
            if not queued.encoded_payload:
                raise InvalidBatchError(f"File has no encoded payload: {queued.display_name}")
            if not queued.mime_type.startswith(prefixes):
                raise InvalidBatchError(
                    f"Unsupported file type {queued.mime_type!r}: {queued.display_name}"
                )

    def _parse_response(self, text: str) -> ExtractionResult:
        """Validate the response text strictly against the output schema."""
        try:
            validated = ExtractionResultSchema.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Response validation failed: {e}")
            logger.debug(f"Response text: {text[:500]}")
            raise MalformedResponseError(f"Model response does not match expected schema: {e}") from e
        return validated.to_result()
