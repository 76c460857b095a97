"""Binary encoder: turns selected files into base64 payloads."""
import asyncio
import base64
import binascii
import mimetypes
import re
from pathlib import Path
from typing import Iterable, List, Optional

from statementlens.config.settings import get_settings
from statementlens.models import FileSource, QueuedFile, UploadedFile
from statementlens.utils.logger import get_logger
from statementlens.utils.exceptions import EncodingError

logger = get_logger()

DATA_URI_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)
DEFAULT_MIME_TYPE = "application/octet-stream"


def strip_data_uri(encoded: str) -> str:
    """Drop a leading ``data:<mime>;base64,`` prefix if present."""
    return DATA_URI_PREFIX.sub("", encoded.strip(), count=1)


def encode_bytes(raw: bytes) -> str:
    """Encode raw bytes as a standard base64 body."""
    return base64.b64encode(raw).decode("ascii")


def decode_payload(encoded: str) -> bytes:
    """Decode a payload produced by :func:`encode_bytes` (data URIs accepted)."""
    try:
        return base64.b64decode(strip_data_uri(encoded), validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64 payload: {e}")


def guess_mime_type(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or DEFAULT_MIME_TYPE


def _read_source(source: FileSource) -> tuple[str, bytes, str]:
    """Return (display_name, data, mime_type). Runs in a worker thread."""
    if isinstance(source, UploadedFile):
        return source.name, source.data, source.mime_type or guess_mime_type(source.name)

    path = Path(source)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise EncodingError(f"Failed to read {path.name}: {e}", display_name=path.name)
    return path.name, data, guess_mime_type(path.name)


async def encode_file(source: FileSource, max_size_bytes: Optional[int] = None) -> QueuedFile:
    """
    Read and encode one file off the event loop.

    Args:
        source: Filesystem path or in-memory upload
        max_size_bytes: Reject files larger than this (defaults to settings)

    Returns:
        QueuedFile with the encoding cached

    Raises:
        EncodingError: if the file cannot be read, is empty or too large
    """
    if max_size_bytes is None:
        max_size_bytes = get_settings().max_file_size_mb * 1024 * 1024

    display_name, data, mime_type = await asyncio.to_thread(_read_source, source)

    if not data:
        raise EncodingError(f"File is empty: {display_name}", display_name=display_name)
    if len(data) > max_size_bytes:
        raise EncodingError(
            f"File too large: {display_name} ({len(data)} bytes, limit {max_size_bytes})",
            display_name=display_name
        )

    encoded = await asyncio.to_thread(encode_bytes, data)
    return QueuedFile(
        raw_bytes=data,
        mime_type=mime_type,
        display_name=display_name,
        size_bytes=len(data),
        encoded_payload=encoded,
    )


async def encode_files(sources: Iterable[FileSource], max_size_bytes: Optional[int] = None) -> List[QueuedFile]:
    """
    Encode many files concurrently.

    Results keep the order of ``sources`` whatever order the reads finish in.
    Files that fail to encode are logged and left out.
    """
    sources = list(sources)
    outcomes = await asyncio.gather(
        *(encode_file(source, max_size_bytes) for source in sources),
        return_exceptions=True
    )

    encoded: List[QueuedFile] = []
    for source, outcome in zip(sources, outcomes):
        if isinstance(outcome, EncodingError):
            logger.error(f"Failed to process file: {outcome.display_name or source}: {outcome}")
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        encoded.append(outcome)

    logger.info(f"Encoded {len(encoded)} of {len(sources)} files")
    return encoded
