"""Extraction pipeline: encoding, request building and the model client."""
from .encoder import encode_bytes, encode_file, encode_files, decode_payload, strip_data_uri
from .request_builder import ExtractionRequest, build_request, EXTRACTION_DIRECTIVE
from .schema import ExtractionResultSchema, TransactionSchema, SummarySchema
from .audit import RowIssue, audit_transactions
from .client import ExtractionClient

__all__ = [
    "encode_bytes",
    "encode_file",
    "encode_files",
    "decode_payload",
    "strip_data_uri",
    "ExtractionRequest",
    "build_request",
    "EXTRACTION_DIRECTIVE",
    "ExtractionResultSchema",
    "TransactionSchema",
    "SummarySchema",
    "RowIssue",
    "audit_transactions",
    "ExtractionClient",
]
