"""Preview resources for queued files."""
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Dict, Optional, Protocol

from statementlens.models import PreviewHandle, QueuedFile
from statementlens.utils.logger import get_logger
from statementlens.utils.exceptions import PreviewError

logger = get_logger()


class PreviewRegistry(Protocol):
    """Hands out and takes back preview handles."""

    def acquire(self, queued: QueuedFile) -> PreviewHandle:
        ...

    def release(self, handle: PreviewHandle) -> None:
        ...


class TempFilePreviews:
    """Writes each queued file to a private temp directory for display."""

    def __init__(self, base_dir: Optional[Path] = None):
        if base_dir is not None:
            Path(base_dir).mkdir(parents=True, exist_ok=True)
        self.temp_dir = Path(tempfile.mkdtemp(prefix="previews-", dir=base_dir))
        self._live: Dict[str, Path] = {}

    def acquire(self, queued: QueuedFile) -> PreviewHandle:
        handle_id = uuid.uuid4().hex
        suffix = Path(queued.display_name).suffix
        location = self.temp_dir / f"{handle_id}{suffix}"
        location.write_bytes(queued.raw_bytes)
        self._live[handle_id] = location
        logger.debug(f"Preview {handle_id} created for {queued.display_name}")
        return PreviewHandle(id=handle_id, location=location)

    def release(self, handle: PreviewHandle) -> None:
        location = self._live.pop(handle.id, None)
        if location is None:
            raise PreviewError(f"Preview {handle.id} already released or unknown")
        location.unlink(missing_ok=True)
        logger.debug(f"Preview {handle.id} released")

    @property
    def live_count(self) -> int:
        return len(self._live)

    def dispose(self) -> None:
        """Remove the temp directory once every preview is released."""
        if self._live:
            logger.warning(f"Disposing previews with {len(self._live)} still live")
            self._live.clear()
        shutil.rmtree(self.temp_dir, ignore_errors=True)
