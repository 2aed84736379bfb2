# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from cms.core.filenames import duplicate_name, is_safe_basename, safe_join
from cms.errors import NotFound, UnsafeName

logger = logging.getLogger(__name__)

Content = Union[str, bytes]


@dataclass(frozen=True)
class DocumentStore:
    """One file per document in a single flat directory.

    Nothing is cached: the directory is the source of truth. There is no
    locking, concurrent writers are last-writer-wins.
    """

    root: Path

    def _path(self, filename: str) -> Path:
        try:
            return safe_join(self.root, filename)
        except UnsafeName:
            raise NotFound(filename) from None

    def list(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(
            p.name for p in self.root.iterdir() if p.is_file() and not p.name.startswith(".")
        )

    def exists(self, filename: str) -> bool:
        if not is_safe_basename(filename):
            return False
        return (self.root / filename).is_file()

    def read(self, filename: str) -> bytes:
        p = self._path(filename)
        if not p.is_file():
            raise NotFound(filename)
        return p.read_bytes()

    def read_text(self, filename: str) -> str:
        return self.read(filename).decode("utf-8", errors="replace")

    def write(self, filename: str, content: Content) -> None:
        """Full overwrite; creates the file when missing."""
        p = self._path(filename)
        self.root.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            # newline="" keeps the submitted line endings byte-for-byte
            with p.open("w", encoding="utf-8", newline="") as fh:
                fh.write(content)
        else:
            p.write_bytes(content)

    def create(self, filename: str, content: Content = "") -> None:
        """Create a document. An existing document of that name is overwritten."""
        self.write(filename, content)
        logger.info("Created document %s", filename)

    def delete(self, filename: str) -> None:
        # Membership check and unlink are separate steps; a concurrent delete
        # in between surfaces as FileNotFoundError.
        if filename not in self.list():
            raise NotFound(filename)
        self._path(filename).unlink()
        logger.info("Deleted document %s", filename)

    def duplicate(self, filename: str) -> str:
        """Copy a document to <root>_dup<ext>, overwriting any earlier copy."""
        content = self.read(filename)
        new_name = duplicate_name(filename)
        self.write(new_name, content)
        logger.info("Duplicated document %s -> %s", filename, new_name)
        return new_name
