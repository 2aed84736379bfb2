# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""argon2 password hashing.

Checking a password for an unknown user still runs one argon2 verification,
against a throwaway hash, so response time does not tell whether the
username exists.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_HASHER = PasswordHasher()


@lru_cache(maxsize=1)
def _decoy_hash() -> str:
    return _HASHER.hash("cms-decoy-password")


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("Cannot hash an empty password")
    return _HASHER.hash(plain)


def check_password(stored_hash: Optional[str], plain: str) -> bool:
    """True iff ``plain`` matches ``stored_hash``.

    A missing hash costs the same as a wrong password.
    """
    target = stored_hash or _decoy_hash()
    try:
        matched = _HASHER.verify(target, plain or "")
    except (VerificationError, InvalidHashError):
        return False
    return matched and bool(stored_hash) and bool(plain)
