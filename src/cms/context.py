# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request-scoped handles injected into route handlers."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from cms.auth.session import Session
from cms.auth.users import CredentialStore
from cms.config import Settings
from cms.infra.document_repo import DocumentStore


@dataclass(frozen=True)
class CmsContext:
    settings: Settings
    session: Session
    documents: DocumentStore
    credentials: CredentialStore


def get_context(request: Request) -> CmsContext:
    state = request.app.state
    return CmsContext(
        settings=state.settings,
        session=request.state.session,
        documents=state.documents,
        credentials=state.credentials,
    )
