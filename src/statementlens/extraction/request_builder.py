"""Assembles the single multimodal extraction request."""
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Type

from google.genai import types
from pydantic import BaseModel

from statementlens.models import QueuedFile
from .encoder import decode_payload
from .schema import ExtractionResultSchema

EXTRACTION_DIRECTIVE = """
You are a specialized financial data extraction assistant.
Process the provided bank statement documents (multiple images or PDFs).

CRITICAL INSTRUCTIONS:
1. CONSOLIDATE: If multiple files/images are provided, they represent different pages or parts of the same or multiple statements. Combine ALL transactions into a single chronologically ordered list.
2. DEDUPLICATE: If pages overlap, ensure the same transaction is not counted twice.
3. EXTRACT: Date, Description (Payment Information), Outflow, Inflow, and Balance.
4. TRANSLATE: Convert cryptic transaction codes (e.g., "UPI/DR/ZOMATO/FOOD") into human-readable labels (e.g., "Zomato Food Delivery").
5. CURRENCY: All amounts are in Indian Rupee (INR).
6. CLEAN: Remove all non-transactional text like headers, footers, or ads.
7. FORMAT: Use YYYY-MM-DD for dates.
8. SUMMARY: Calculate the grand total of spending and income across all processed documents.

IMPORTANT: DO NOT attempt to process password protected files. If a file appears encrypted or unreadable, skip it or return an error message in the first transaction's description.
"""


@dataclass(frozen=True)
class ExtractionRequest:
    """One generate-content call: file parts, directive and output schema."""
    parts: Tuple[Tuple[str, str], ...]  # (encoded_payload, mime_type)
    instruction_text: str
    output_schema: Type[BaseModel]

    def to_contents(self) -> List[types.Part]:
        """Inline data parts in queue order, then the directive text."""
        contents = [
            # The SDK does its own base64 on the wire
            types.Part.from_bytes(data=decode_payload(payload), mime_type=mime_type)
            for payload, mime_type in self.parts
        ]
        contents.append(types.Part.from_text(text=self.instruction_text))
        return contents

    def generation_config(self, response_mime_type: str = "application/json") -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type=response_mime_type,
            response_schema=self.output_schema,
        )


def build_request(
    files: Sequence[QueuedFile],
    instruction_text: str = EXTRACTION_DIRECTIVE,
) -> ExtractionRequest:
    """
    Build the extraction request for a batch of queued files.

    Callers must not pass an empty batch; the session only submits a
    non-empty queue.
    """
    return ExtractionRequest(
        parts=tuple((f.encoded_payload, f.mime_type) for f in files),
        instruction_text=instruction_text,
        output_schema=ExtractionResultSchema,
    )
