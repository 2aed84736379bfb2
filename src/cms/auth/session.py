# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from itsdangerous import BadSignature, URLSafeTimedSerializer

_SALT = "cms.session.v1"


@dataclass
class Session:
    """Per-client state. No username means signed out."""

    username: Optional[str] = None
    flash: Optional[str] = None

    @property
    def signed_in(self) -> bool:
        return self.username is not None

    def sign_in(self, username: str) -> None:
        self.username = username

    def sign_out(self) -> None:
        self.username = None

    def set_flash(self, message: str) -> None:
        self.flash = message

    def take_flash(self) -> Optional[str]:
        """Return the pending flash message and clear it."""
        message, self.flash = self.flash, None
        return message


def _serializer(secret: Optional[str]) -> URLSafeTimedSerializer:
    if not secret:
        raise RuntimeError("Missing SECRET_KEY (or CMS_SECRET_KEY) in environment")
    return URLSafeTimedSerializer(secret_key=secret, salt=_SALT)


class SessionStore:
    """In-process session records keyed by an opaque id.

    Lost on restart. The id reaches the client only inside a signed token,
    issued once when the record is created, so a record older than max_age
    can no longer be reached and is dropped.
    """

    def __init__(self, secret: Optional[str], *, max_age: int = 28800, clock: Callable[[], float] = time.time):
        self._secret = secret
        self._max_age = max_age
        self._clock = clock
        # sid -> (created_at, session)
        self._sessions: Dict[str, Tuple[float, Session]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _expired(self, created_at: float, now: float) -> bool:
        return now - created_at > self._max_age

    def get(self, sid: str) -> Optional[Session]:
        entry = self._sessions.get(sid)
        if entry is None:
            return None
        created_at, sess = entry
        if self._expired(created_at, self._clock()):
            self._sessions.pop(sid, None)
            return None
        return sess

    def prune(self) -> int:
        """Drop expired records; return how many were removed."""
        now = self._clock()
        stale = [sid for sid, (created_at, _) in list(self._sessions.items()) if self._expired(created_at, now)]
        for sid in stale:
            self._sessions.pop(sid, None)
        return len(stale)

    def create(self) -> tuple[str, Session]:
        self.prune()
        sid = secrets.token_urlsafe(32)
        sess = Session()
        self._sessions[sid] = (self._clock(), sess)
        return sid, sess

    def sign(self, sid: str) -> str:
        return _serializer(self._secret).dumps({"sid": sid})

    def unsign(self, token: str) -> Optional[str]:
        if not token:
            return None
        s = _serializer(self._secret)
        try:
            data = s.loads(token, max_age=self._max_age)
        except BadSignature:
            return None
        sid = str((data or {}).get("sid") or "").strip()
        return sid or None

    def resolve(self, token: str) -> tuple[str, Session, bool]:
        """Return (sid, session, is_new) for a cookie value."""
        sid = self.unsign(token)
        if sid:
            sess = self.get(sid)
            if sess is not None:
                return sid, sess, False
        sid, sess = self.create()
        return sid, sess, True
