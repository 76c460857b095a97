"""Shared test doubles for the Gemini SDK and preview resources."""
import asyncio
import itertools
from typing import Dict, List, Optional

from statementlens.models import PreviewHandle, QueuedFile

SCENARIO_A_JSON = (
    '{"transactions":[{"date":"2024-01-05","description":"Zomato Food Delivery",'
    '"outflow":450,"inflow":0,"balance":15230}],'
    '"summary":{"total_spend":450,"total_received":0}}'
)


class FakeResponse:
    def __init__(self, text: Optional[str]):
        self.text = text


class FakeModels:
    """Stands in for ``client.aio.models``."""

    def __init__(self, text: Optional[str] = None, error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[dict] = []

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.text)


class FakeAio:
    def __init__(self, models: FakeModels):
        self.models = models


class FakeGenaiClient:
    """Minimal ``genai.Client`` with only the async surface used."""

    def __init__(self, text: Optional[str] = None, error: Optional[Exception] = None):
        self.models = FakeModels(text, error)
        self.aio = FakeAio(self.models)


class StubExtractor:
    """Extractor returning a fixed result or raising a fixed error."""

    def __init__(self, result=None, error: Optional[Exception] = None, gate: Optional[asyncio.Event] = None):
        self.result = result
        self.error = error
        self.gate = gate
        self.batches: List[tuple] = []

    async def extract(self, batch):
        self.batches.append(tuple(batch))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


class TrackingPreviews:
    """Preview registry that counts every acquire and release."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.live: Dict[str, QueuedFile] = {}
        self.acquired: List[str] = []
        self.released: List[str] = []
        self.disposed = False

    def acquire(self, queued: QueuedFile) -> PreviewHandle:
        handle = PreviewHandle(id=f"preview-{next(self._ids)}")
        self.live[handle.id] = queued
        self.acquired.append(handle.id)
        return handle

    def release(self, handle: PreviewHandle) -> None:
        if handle.id not in self.live:
            raise AssertionError(f"{handle.id} released twice or never acquired")
        del self.live[handle.id]
        self.released.append(handle.id)

    def dispose(self) -> None:
        self.disposed = True


def make_queued(name: str = "page1.png", data: bytes = b"\x89PNG-data", mime_type: str = "image/png") -> QueuedFile:
    from statementlens.extraction.encoder import encode_bytes
    return QueuedFile(
        raw_bytes=data,
        mime_type=mime_type,
        display_name=name,
        size_bytes=len(data),
        encoded_payload=encode_bytes(data),
    )
