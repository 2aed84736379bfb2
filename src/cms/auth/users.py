# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml

from cms.auth.passwords import check_password, hash_password
from cms.errors import DuplicateUsername

logger = logging.getLogger(__name__)


def _load_users_file(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        return {}
    out: Dict[str, str] = {}
    for uname, ph in raw.items():
        username = str(uname).strip()
        if not username or ph is None:
            continue
        out[username] = str(ph).strip()
    return out


@dataclass(frozen=True)
class CredentialStore:
    """username -> password hash, persisted as a flat YAML mapping.

    No caching: every call reads the file again. ``register`` rewrites the
    whole file, so concurrent registrations are last-writer-wins.
    """

    path: Path

    def load(self) -> Dict[str, str]:
        return _load_users_file(self.path)

    def save(self, users: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(users, sort_keys=False, allow_unicode=True, default_flow_style=False),
            encoding="utf-8",
        )

    def lookup(self, username: str) -> Optional[str]:
        return self.load().get(username or "")

    def exists(self, username: str) -> bool:
        return self.lookup(username) is not None

    def verify(self, username: str, password: str) -> bool:
        return check_password(self.lookup(username), password)

    def register(self, username: str, password: str) -> None:
        users = self.load()
        if username in users:
            raise DuplicateUsername(username)
        users[username] = hash_password(password)
        self.save(users)
        logger.info("Registered user %s", username)
