"""Single-file JSON document that backs every repository.

All collections live in one document so a unit of work can be written
with a single atomic file replacement.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

SECTIONS = (
    "products",
    "warehouses",
    "stores",
    "stock",
    "assets",
    "receiving_sessions",
    "shipments",
    "deliveries",
)

class DocumentLock:
    """Exclusive lock on one document file, across threads and processes.

    Threads of this process queue on an ``RLock``; the thread holding it
    then takes ``flock`` on the sidecar ``<document>.lock`` file, so other
    processes wait for the whole unit of work too.  Re-entrant for the
    owning thread.
    """

    def __init__(self, path: Path) -> None:
        self._lock_path = path.with_name(path.name + ".lock")
        self._thread_lock = threading.RLock()
        self._depth = 0
        self._handle: BinaryIO | None = None

    @property
    def lock_path(self) -> Path:
        return self._lock_path

    def acquire(self) -> None:
        self._thread_lock.acquire()
        if self._depth == 0:
            try:
                self._handle = self._lock_file()
            except BaseException:
                self._thread_lock.release()
                raise
        self._depth += 1

    def release(self) -> None:
        self._depth -= 1
        if self._depth == 0:
            handle, self._handle = self._handle, None
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            finally:
                handle.close()
        self._thread_lock.release()

    def __enter__(self) -> DocumentLock:
        self.acquire()
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def _lock_file(self) -> BinaryIO:
        self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self._lock_path, "a+b")
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        except BaseException:
            handle.close()
            raise
        return handle


_locks: dict[Path, DocumentLock] = {}
_locks_guard = threading.Lock()


def lock_for(path: Path) -> DocumentLock:
    """One lock per document file, shared by every store instance in the process."""
    key = path.resolve()
    with _locks_guard:
        if key not in _locks:
            _locks[key] = DocumentLock(key)
        return _locks[key]


def dump_dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def load_dt(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None


class JsonDocumentStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def lock(self) -> DocumentLock:
        return lock_for(self._file_path)

    def load(self) -> dict[str, list[dict]]:
        document = json.loads(self._file_path.read_text(encoding="utf-8"))
        for section in SECTIONS:
            document.setdefault(section, [])
        return document

    def persist(self, document: dict[str, list[dict]]) -> None:
        """Write the whole document atomically (temp file + rename)."""
        payload = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=".wms-", suffix=".json.tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._file_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _ensure_file(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self.lock:
            if not self._file_path.exists():
                self.persist({section: [] for section in SECTIONS})
