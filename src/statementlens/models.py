"""Data models for the extraction pipeline."""
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class UploadedFile:
    """A file handed over in memory, e.g. from an upload widget."""
    name: str
    data: bytes
    mime_type: str = ""


FileSource = Union[str, Path, UploadedFile]


@dataclass(frozen=True)
class PreviewHandle:
    """Ephemeral display resource bound to one queued file."""
    id: str
    location: Optional[Path] = None


@dataclass(frozen=True)
class QueuedFile:
    """A selected document with its cached transport encoding."""
    raw_bytes: bytes = field(repr=False)
    mime_type: str
    display_name: str
    size_bytes: int
    encoded_payload: str = field(repr=False)
    preview: Optional[PreviewHandle] = None

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class Transaction:
    """One consolidated statement line."""
    date: str  # YYYY-MM-DD
    description: str
    outflow: float
    inflow: float
    balance: float


@dataclass(frozen=True)
class Summary:
    """Grand totals as reported by the model."""
    total_spend: float
    total_received: float


@dataclass(frozen=True)
class ExtractionResult:
    """Validated model output."""
    transactions: Tuple[Transaction, ...]
    summary: Summary

    def to_dict(self) -> dict:
        """Return the result keyed by the response field names."""
        return {
            "transactions": [asdict(txn) for txn in self.transactions],
            "summary": asdict(self.summary),
        }
