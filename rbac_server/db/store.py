"""Whole-document JSON store with a single process-wide writer.

Readers work against the last committed snapshot without locking once it
has been published; only the first load takes the write lock. Every
mutation goes through :meth:`JsonDocumentStore.transaction`, which holds the
write lock across the read-modify-write sequence so two concurrent writers
can never lose each other's update or hand out the same id.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from pydantic import ValidationError

from rbac_server.core.exceptions import StoreError
from rbac_server.models.document import Document

logger = logging.getLogger("rbac_server")


class JsonDocumentStore:
    """Loads and persists the ``{users, roles, permissions}`` document."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._write_lock = threading.Lock()
        self._snapshot: Optional[Document] = None

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Document:
        """Read and validate the document from disk."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Cannot read document store at {self.path}: {e}") from e
        try:
            return Document.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise StoreError(f"Document store at {self.path} is corrupt: {e}") from e

    def save(self, document: Document) -> None:
        """Atomically replace the document on disk and publish it as the snapshot."""
        payload = json.dumps(document.to_json(), indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".db-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreError(f"Cannot write document store at {self.path}: {e}") from e
        self._snapshot = document

    def snapshot(self) -> Document:
        """Last committed document. Callers must treat it as read-only."""
        snapshot = self._snapshot
        if snapshot is None:
            # The first load races with writers; only publish while holding the lock.
            with self._write_lock:
                if self._snapshot is None:
                    self._snapshot = self.load()
                snapshot = self._snapshot
        return snapshot

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Serialize a read-modify-write cycle.

        The yielded document is a private copy; it is saved only if the
        block exits without raising.
        """
        with self._write_lock:
            document = self.load()
            yield document
            self.save(document)
            logger.debug("Committed document to %s", self.path)
