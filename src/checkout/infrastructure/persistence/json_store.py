"""JSON-file-backed store and its unit of work.

Each collection (``products``, ``orders``) is one JSON array on disk.
A unit of work holds the store's lock from begin to end, so units of
work against the same data directory are fully serialized within the
process.  Reads inside a unit of work see its own pending writes;
nothing reaches disk until commit, which replaces each changed file
atomically.

A commit touching several collections is not atomic across files: they
are replaced one after another in ``COLLECTIONS`` order.  Products come
first, so a crash part-way can leave stock drawn down without its order,
never an order whose stock was not taken.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from checkout.domain.repository.unit_of_work import UnitOfWork

log = logging.getLogger(__name__)

COLLECTIONS = ("products", "orders")

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(data_dir: Path) -> threading.Lock:
    key = data_dir.resolve()
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.Lock()
        return _locks[key]


class JsonStore:

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._ensure_files()
        self.lock = _lock_for(data_dir)

    def path(self, collection: str) -> Path:
        if collection not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {collection}")
        return self._data_dir / f"{collection}.json"

    def read(self, collection: str) -> list[dict]:
        return json.loads(self.path(collection).read_text(encoding="utf-8"))

    def write_all(self, changes: dict[str, list[dict]]) -> None:
        """Write every changed collection, replacing files only at the end."""
        staged: list[tuple[str, Path]] = []
        try:
            for collection, records in changes.items():
                fd, tmp = tempfile.mkstemp(
                    dir=self._data_dir, prefix=f".{collection}.", suffix=".tmp"
                )
                staged.append((tmp, self.path(collection)))
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(records, indent=2) + "\n")
        except BaseException:
            for tmp, _ in staged:
                os.unlink(tmp)
            raise

        for tmp, target in staged:
            os.replace(tmp, target)

    def _ensure_files(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        for collection in COLLECTIONS:
            path = self._data_dir / f"{collection}.json"
            if not path.exists():
                path.write_text("[]", encoding="utf-8")


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, store: JsonStore, timeout: float = 30.0) -> None:
        super().__init__()
        self._store = store
        self._timeout = timeout
        self._working: dict[str, list[dict]] = {}
        self._dirty: set[str] = set()
        self._locked = False

    def records(self, collection: str) -> list[dict]:
        """Working copy of *collection*, loaded on first access."""
        self._assert_active()
        if collection not in self._working:
            self._working[collection] = self._store.read(collection)
        return self._working[collection]

    def mark_dirty(self, collection: str) -> None:
        self._dirty.add(collection)

    # --- UnitOfWork hooks -----------------------------------------------------

    def _begin(self) -> None:
        if not self._store.lock.acquire(timeout=self._timeout):
            raise TimeoutError("Timed out waiting for the store lock")
        self._locked = True

    def _commit(self) -> None:
        changes = {c: self._working[c] for c in COLLECTIONS if c in self._dirty}
        if changes:
            self._store.write_all(changes)
            log.debug("Committed collections: %s", ", ".join(changes))

    def _rollback(self) -> None:
        if self._dirty:
            log.debug("Rolled back collections: %s", ", ".join(sorted(self._dirty)))

    def _release(self) -> None:
        self._working.clear()
        self._dirty.clear()
        if self._locked:
            self._locked = False
            self._store.lock.release()


def as_json_uow(uow: UnitOfWork) -> JsonUnitOfWork:
    if not isinstance(uow, JsonUnitOfWork):
        raise TypeError(
            f"JSON repositories need a JsonUnitOfWork, got {type(uow).__name__}"
        )
    return uow
