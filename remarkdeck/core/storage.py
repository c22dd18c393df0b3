"""
Key-value slot storage.

A slot is a named string value. The result cache and the advisory rate
limiter each persist their state as JSON into one slot, so they survive
process restarts within the same client context.
"""
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

SLOT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class SlotStore(Protocol):
    """Minimal key-value storage used for best-effort persistence."""

    def read(self, slot: str) -> Optional[str]: ...

    def write(self, slot: str, value: str) -> None: ...

    def delete(self, slot: str) -> None: ...


class MemoryStore:
    """Process-local slot store; nothing outlives the process."""

    def __init__(self):
        self._slots: dict[str, str] = {}
        self._lock = threading.Lock()

    def read(self, slot: str) -> Optional[str]:
        with self._lock:
            return self._slots.get(slot)

    def write(self, slot: str, value: str) -> None:
        with self._lock:
            self._slots[slot] = value

    def delete(self, slot: str) -> None:
        with self._lock:
            self._slots.pop(slot, None)


class JsonFileStore:
    """
    Slot store keeping one `<slot>.json` file per slot in a directory.

    Writes go to a temporary file first and are moved into place, so a crash
    mid-write never leaves a truncated slot behind. I/O errors propagate;
    callers decide whether persistence is best-effort.
    """

    def __init__(self, directory: Path):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, slot: str) -> Path:
        """Get the file path backing a slot."""
        if not SLOT_NAME_PATTERN.match(slot):
            raise ValueError(f"Invalid slot name: {slot!r}")
        return self._directory / f"{slot}.json"

    def read(self, slot: str) -> Optional[str]:
        path = self.path_for(slot)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, slot: str, value: str) -> None:
        path = self.path_for(slot)
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{slot}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, slot: str) -> None:
        self.path_for(slot).unlink(missing_ok=True)
