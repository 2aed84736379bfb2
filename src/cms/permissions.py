# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Access guards.

A failing guard writes a flash message and aborts the handler with a
redirect to the home page; it never produces an error page.
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException

from cms.context import CmsContext, get_context

logger = logging.getLogger(__name__)

SIGNED_IN_MESSAGE = "You must be signed in to do that."
ADMIN_MESSAGE = "You must be the admin to view that page."


def _redirect_home() -> HTTPException:
    return HTTPException(status_code=302, headers={"Location": "/"})


def require_signed_in(ctx: CmsContext = Depends(get_context)) -> CmsContext:
    if ctx.session.signed_in:
        return ctx
    logger.warning("Rejected signed-out request")
    ctx.session.set_flash(SIGNED_IN_MESSAGE)
    raise _redirect_home()


def require_admin(ctx: CmsContext = Depends(get_context)) -> CmsContext:
    # Not wired to any route yet.
    if ctx.session.username == ctx.settings.admin_username:
        return ctx
    logger.warning("Rejected non-admin request from %r", ctx.session.username)
    ctx.session.set_flash(ADMIN_MESSAGE)
    raise _redirect_home()
