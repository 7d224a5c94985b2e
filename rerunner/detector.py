import hashlib
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Union

Fingerprint = Union[int, str]


class Trigger(str, Enum):
    mtime = "mtime"
    content = "content"


class FileAccessError(RuntimeError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to read watched file {path}: {reason}")
        self.path = path
        self.reason = reason


def mtime_fingerprint(path: Path) -> int:
    return path.stat().st_mtime_ns


def content_fingerprint(path: Path, chunk_size: int = 65536) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()


FINGERPRINTS: Dict[Trigger, Callable[[Path], Fingerprint]] = {
    Trigger.mtime: mtime_fingerprint,
    Trigger.content: content_fingerprint,
}


def fingerprint(path: Path, trigger: Trigger) -> Fingerprint:
    """Return the fingerprint of ``path`` under ``trigger``.

    Raises FileAccessError when the file cannot be stat'ed or read.
    """
    try:
        return FINGERPRINTS[Trigger(trigger)](path)
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e


class ChangeDetector:
    """Remembers the last fingerprint of one file and reports changes.

    Every poll replaces the stored fingerprint, so several edits between
    two polls are reported once and no edit is reported twice.
    """

    def __init__(self, path: Path, trigger: Trigger = Trigger.mtime) -> None:
        self.path = Path(path)
        self.trigger = Trigger(trigger)
        self._last: Optional[Fingerprint] = None

    def initialize(self) -> Fingerprint:
        self._last = fingerprint(self.path, self.trigger)
        logging.debug(f"Baseline {self.trigger.value} fingerprint for {self.path}: {self._last}")
        return self._last

    def has_changed(self) -> bool:
        if self._last is None:
            raise RuntimeError("ChangeDetector.initialize() must be called before polling")
        current = fingerprint(self.path, self.trigger)
        changed = current != self._last
        self._last = current
        if changed:
            logging.debug(f"Change detected in {self.path} ({self.trigger.value})")
        return changed
