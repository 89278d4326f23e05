"""ActivityStore implementations.

FileActivityStore persists the timestamp as a numeric string in a single
file, so every process of the same user (the equivalent of browser tabs
sharing local storage) reads and writes the same value.
InMemoryActivityStore keeps it in process memory.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

_UNSAFE_KEY_CHARS = re.compile(r"[^\w.-]")


class InMemoryActivityStore:
    """ActivityStore held in process memory."""

    def __init__(self, initial: int | None = None) -> None:
        self._value = initial

    def get(self) -> int | None:
        return self._value

    def set(self, timestamp_ms: int) -> None:
        self._value = int(timestamp_ms)


class FileActivityStore:
    """ActivityStore persisted to ``<directory>/<key>``.

    Writes go to a temporary file that is then renamed over the target,
    so a concurrent reader sees either the old or the new value.
    An unreadable or non-numeric file reads as None.
    """

    def __init__(self, directory: str | Path, key: str) -> None:
        filename = _UNSAFE_KEY_CHARS.sub("_", key)
        if not filename:
            raise ValueError("Activity store key must not be empty")
        self._path = Path(directory).expanduser() / filename

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> int | None:
        try:
            raw = self._path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            return None

        try:
            return int(raw)
        except ValueError:
            return None

    def set(self, timestamp_ms: int) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f".{self._path.name}.{os.getpid()}.tmp")
        tmp_path.write_text(str(int(timestamp_ms)), encoding="utf-8")
        os.replace(tmp_path, self._path)
