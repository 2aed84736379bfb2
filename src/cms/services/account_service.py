# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from cms.auth.session import Session
from cms.auth.users import CredentialStore
from cms.errors import CredentialMismatch, DuplicateUsername, PasswordConfirmationMismatch, ValidationError

logger = logging.getLogger(__name__)


def register_user(
    credentials: CredentialStore,
    *,
    username: str,
    password: str,
    confirmation: str,
) -> None:
    """Check a registration form and persist the new user.

    A taken username is reported before a confirmation mismatch; nothing is
    written when either check fails.
    """
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("A username and password are required.")
    if credentials.exists(username):
        raise DuplicateUsername(username)
    if password != confirmation:
        raise PasswordConfirmationMismatch()
    credentials.register(username, password)


def sign_in(credentials: CredentialStore, session: Session, *, username: str, password: str) -> None:
    # Same normalisation as register_user, so "bob " signs in as bob.
    username = (username or "").strip()
    if not credentials.verify(username, password):
        logger.warning("Failed sign-in for %r", username)
        raise CredentialMismatch()
    session.sign_in(username)
    logger.info("User %s signed in", username)


def sign_out(session: Session) -> None:
    if session.username:
        logger.info("User %s signed out", session.username)
    session.sign_out()
