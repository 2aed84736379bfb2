# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Document name rules: allowed extensions, new-name validation, path safety."""

from __future__ import annotations

import os
from pathlib import Path

from cms.errors import BadExtension, EmptyName, UnsafeName

VALID_EXTENSIONS = (".txt", ".md", ".jpg", ".png")

DUPLICATE_SUFFIX = "_dup"


def extension(name: str) -> str:
    """Return the extension including the dot ('' when there is none)."""
    return os.path.splitext(name or "")[1]


def validate_new_filename(name: str) -> str:
    """Validate a name for a new document and return it stripped.

    Extension-less names are accepted.
    """
    filename = (name or "").strip()
    if not filename:
        raise EmptyName()
    ext = extension(filename)
    if ext and ext not in VALID_EXTENSIONS:
        raise BadExtension(VALID_EXTENSIONS)
    if not is_safe_basename(filename):
        raise UnsafeName(filename)
    return filename


def duplicate_name(name: str) -> str:
    """report.md -> report_dup.md; README -> README_dup."""
    root, ext = os.path.splitext(name)
    return f"{root}{DUPLICATE_SUFFIX}{ext}"


def is_safe_basename(name: str) -> bool:
    """Allow only simple filenames (no directories)."""
    if not isinstance(name, str) or not name:
        return False
    if name in {".", ".."}:
        return False
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return name == Path(name).name


def safe_join(base_dir: Path, name: str) -> Path:
    """Join a document name onto base_dir, refusing anything that escapes it."""
    if not is_safe_basename(name):
        raise UnsafeName(name)
    base_dir = base_dir.resolve()
    resolved = (base_dir / name).resolve()
    if resolved.parent != base_dir:
        raise UnsafeName(name)
    return resolved
