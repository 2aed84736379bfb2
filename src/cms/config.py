# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Anchor defaults to the project root, not the current working directory.
BASE_DIR = Path(__file__).resolve().parents[2]


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "y"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    users_path: Path
    secret_key: Optional[str] = None
    cookie_name: str = "cms_session"
    session_max_age: int = 28800  # 8 hours
    cookie_secure: bool = False
    admin_username: str = "admin"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(os.getenv("CMS_DATA_DIR", str(BASE_DIR / "data"))).resolve(),
            users_path=Path(os.getenv("CMS_USERS_PATH", str(BASE_DIR / "users.yml"))).resolve(),
            secret_key=os.getenv("SECRET_KEY") or os.getenv("CMS_SECRET_KEY"),
            cookie_name=os.getenv("CMS_COOKIE_NAME", "cms_session"),
            session_max_age=int(os.getenv("CMS_SESSION_MAX_AGE", "28800")),
            cookie_secure=_flag("CMS_COOKIE_SECURE"),
            admin_username=os.getenv("CMS_ADMIN_USERNAME", "admin"),
        )

    def cookie_settings(self) -> dict:
        return {"httponly": True, "samesite": "lax", "secure": self.cookie_secure}
