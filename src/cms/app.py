# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from cms.auth.session import SessionStore
from cms.auth.users import CredentialStore
from cms.config import Settings
from cms.context import CmsContext, get_context
from cms.core.filenames import validate_new_filename
from cms.errors import CmsError, NotFound, ValidationError
from cms.infra.document_repo import DocumentStore
from cms.permissions import require_signed_in
from cms.services.account_service import register_user, sign_in, sign_out
from cms.services.render_service import kind_for, render

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, ctx: CmsContext, template_name: str, extra: Optional[dict] = None, status_code: int = 200):
    """TemplateResponse wrapper. Rendering a page consumes the flash message."""
    base_ctx = {
        "message": ctx.session.take_flash(),
        "user": ctx.session.username,
    }
    return templates.TemplateResponse(request, template_name, {**base_ctx, **(extra or {})}, status_code=status_code)


def _redirect_home(ctx: CmsContext, message: str) -> RedirectResponse:
    ctx.session.set_flash(message)
    return RedirectResponse(url="/", status_code=302)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI()
    app.state.settings = settings
    app.state.documents = DocumentStore(settings.data_dir)
    app.state.credentials = CredentialStore(settings.users_path)
    app.state.sessions = SessionStore(settings.secret_key, max_age=settings.session_max_age)

    @app.middleware("http")
    async def _session_middleware(request: Request, call_next):
        sessions: SessionStore = request.app.state.sessions
        sid, sess, is_new = sessions.resolve(request.cookies.get(settings.cookie_name, ""))
        request.state.session = sess
        response = await call_next(request)
        if is_new:
            response.set_cookie(
                settings.cookie_name,
                sessions.sign(sid),
                max_age=settings.session_max_age,
                **settings.cookie_settings(),
            )
        return response

    _register_routes(app)
    return app


# ------------------ Routes ------------------


def _register_routes(app: FastAPI) -> None:
    @app.get("/", response_class=HTMLResponse)
    def index(request: Request, ctx: CmsContext = Depends(get_context)):
        return _render(request, ctx, "index.html", {"documents": ctx.documents.list()})

    @app.get("/users/signin", response_class=HTMLResponse)
    def signin_get(request: Request, ctx: CmsContext = Depends(get_context)):
        return _render(request, ctx, "signin.html", {"username": ""})

    @app.post("/users/signin")
    def signin_post(
        request: Request,
        username: str = Form(""),
        password: str = Form(""),
        ctx: CmsContext = Depends(get_context),
    ):
        try:
            sign_in(ctx.credentials, ctx.session, username=username, password=password)
        except CmsError as e:
            ctx.session.set_flash(e.message)
            return _render(request, ctx, "signin.html", {"username": username}, status_code=422)
        return _redirect_home(ctx, "Welcome!")

    @app.get("/users/register", response_class=HTMLResponse)
    def register_get(request: Request, ctx: CmsContext = Depends(get_context)):
        return _render(request, ctx, "register.html", {"username": ""})

    @app.post("/users/register")
    def register_post(
        request: Request,
        username: str = Form(""),
        password: str = Form(""),
        password_2: str = Form("", alias="password-2"),
        ctx: CmsContext = Depends(get_context),
    ):
        try:
            register_user(ctx.credentials, username=username, password=password, confirmation=password_2)
        except CmsError as e:
            ctx.session.set_flash(e.message)
            return _render(request, ctx, "register.html", {"username": username}, status_code=422)
        return _redirect_home(ctx, "User registered!")

    @app.post("/signout")
    def signout(ctx: CmsContext = Depends(get_context)):
        sign_out(ctx.session)
        return _redirect_home(ctx, "You have been signed out.")

    # Must be declared before "/{filename}".
    @app.get("/new", response_class=HTMLResponse)
    def new_document_get(request: Request, ctx: CmsContext = Depends(require_signed_in)):
        return _render(request, ctx, "new_file.html", {"filename": ""})

    @app.post("/new")
    def new_document_post(
        request: Request,
        filename: str = Form(""),
        ctx: CmsContext = Depends(require_signed_in),
    ):
        try:
            name = validate_new_filename(filename)
        except ValidationError as e:
            ctx.session.set_flash(e.message)
            return _render(request, ctx, "new_file.html", {"filename": filename}, status_code=422)
        ctx.documents.create(name)
        return _redirect_home(ctx, f"{name} was created")

    @app.get("/{filename}")
    def show_document(request: Request, filename: str, ctx: CmsContext = Depends(get_context)):
        try:
            content = ctx.documents.read(filename)
        except NotFound as e:
            return _redirect_home(ctx, e.message)

        rendered = render(kind_for(filename), content)
        if rendered.needs_layout:
            return _render(request, ctx, "document.html", {"filename": filename, "body": rendered.body})
        if rendered.content_type is None:
            return Response(content=b"")
        return Response(content=rendered.body, media_type=rendered.content_type)

    @app.get("/{filename}/edit", response_class=HTMLResponse)
    def edit_document(request: Request, filename: str, ctx: CmsContext = Depends(require_signed_in)):
        try:
            content = ctx.documents.read_text(filename)
        except NotFound as e:
            return _redirect_home(ctx, e.message)
        return _render(request, ctx, "edit_file.html", {"filename": filename, "content": content})

    @app.post("/{filename}/update")
    def update_document(
        filename: str,
        content: str = Form(""),
        ctx: CmsContext = Depends(require_signed_in),
    ):
        # Documents come into existence only through /new.
        if not ctx.documents.exists(filename):
            return _redirect_home(ctx, NotFound(filename).message)
        ctx.documents.write(filename, content)
        logger.info("Updated document %s", filename)
        return _redirect_home(ctx, f"{filename} has been updated.")

    @app.post("/{filename}/delete")
    def delete_document(filename: str, ctx: CmsContext = Depends(require_signed_in)):
        try:
            ctx.documents.delete(filename)
        except NotFound:
            return _redirect_home(ctx, "No such file exists to delete")
        return _redirect_home(ctx, f"{filename} was deleted.")

    # No sign-in required here, unlike the other mutating routes.
    @app.post("/{filename}/duplicate")
    def duplicate_document(filename: str, ctx: CmsContext = Depends(get_context)):
        try:
            ctx.documents.duplicate(filename)
        except NotFound as e:
            return _redirect_home(ctx, e.message)
        return _redirect_home(ctx, f"{filename} has been duplicated.")


app = create_app()
