# Authentication routes (signup/login/logout)
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from pathfinder.agents.schemas import User
from pathfinder.auth.service import AuthService
from pathfinder.auth.sessions import SESSION_COOKIE_NAME
from pathfinder.deps import get_app_settings, get_auth
from pathfinder.errors import AuthError
from pathfinder.settings import Settings
from pathfinder.templating import templates

router = APIRouter()


def _safe_next(next_url: str | None) -> str:
    # only same-site paths
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return "/"


def _signed_in(auth: AuthService, settings: Settings, user: User, next_url: str) -> RedirectResponse:
    raw = auth.open_session(user)
    resp = RedirectResponse(url=next_url, status_code=303)
    resp.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=raw,
        httponly=True,
        secure=(settings.env == "prod"),
        samesite="lax",
        max_age=60 * 60 * 24 * settings.session_absolute_days,
        path="/",
    )
    return resp


@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request):
    return templates.TemplateResponse(
        request, "signup.html", {"error": request.query_params.get("error")}
    )


@router.post("/signup")
def signup(
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    auth: AuthService = Depends(get_auth),
    settings: Settings = Depends(get_app_settings),
):
    try:
        user = auth.signup(name, email, password)
    except AuthError as e:
        return RedirectResponse(url=f"/signup?error={quote(str(e))}", status_code=303)
    return _signed_in(auth, settings, user, "/")


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "error": request.query_params.get("error"),
            "next": _safe_next(request.query_params.get("next")),
        },
    )


@router.post("/login")
def login(
    email: str = Form(...),
    password: str = Form(...),
    next: str = Form("/"),
    auth: AuthService = Depends(get_auth),
    settings: Settings = Depends(get_app_settings),
):
    try:
        user = auth.login(email, password)
    except AuthError as e:
        return RedirectResponse(url=f"/login?error={quote(str(e))}", status_code=303)
    return _signed_in(auth, settings, user, _safe_next(next))


@router.post("/logout")
def logout(request: Request, auth: AuthService = Depends(get_auth)):
    auth.logout(request.cookies.get(SESSION_COOKIE_NAME))
    resp = RedirectResponse(url="/login?logged_out=1", status_code=303)
    resp.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return resp
