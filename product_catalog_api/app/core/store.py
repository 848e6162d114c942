"""
JSON document store.

The whole catalog lives in a single JSON file shaped like
``{"products": [...]}``.  ``JsonDocumentStore`` loads that file into
memory with :meth:`~JsonDocumentStore.read` and writes the in-memory
document back with :meth:`~JsonDocumentStore.write`; there is no
partial update.  Writes go to a temporary sibling file which is then
renamed over the target, so a reader never sees a half-written
document.

A store is an ordinary object created by the application factory and
passed to the services that need it.  Callers that perform a
read‑modify‑write sequence must hold :attr:`JsonDocumentStore.lock`
for the whole sequence; see ``ProductService``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def default_document() -> Document:
    return {"products": []}


class JsonDocumentStore:
    """Read and write the catalog document as a unit."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self.data: Document = default_document()
        self.lock = threading.RLock()

    def read(self) -> Document:
        """Load the document from disk and return it.

        A missing or empty file is initialised with an empty product
        list, which is written back immediately.  I/O and decoding
        errors propagate to the caller.
        """
        with self.lock:
            raw = self._read_text()
            if raw is None or not raw.strip():
                logger.info("Initialising empty document at %s", self.path)
                self.data = default_document()
                self.write()
                return self.data

            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"{self.path} does not contain a JSON object")
            if not isinstance(data.get("products"), list):
                data["products"] = []
            self.data = data
            return self.data

    def write(self) -> None:
        """Serialise the in-memory document, replacing the file contents."""
        with self.lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(self.data, fh, indent=2, ensure_ascii=False)
                    fh.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                # Leave the previous document in place and drop the temp file.
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

    def _read_text(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
