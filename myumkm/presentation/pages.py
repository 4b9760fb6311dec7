"""
Page routes: minimal HTML shells.

The pages themselves are out of scope; they exist so the access guard's page
branch (redirect to the login page with a callback URL) has real routes.
"""

from html import escape
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from myumkm.presentation.dependencies.auth import AuthUser, get_current_user

router = APIRouter(tags=["pages"], include_in_schema=False)

_PAGE = """<!doctype html>
<html lang="id">
<head><meta charset="utf-8"><title>{title} | MyUMKM</title></head>
<body>
<main data-page="{slug}">
<h1>{title}</h1>
{body}
</main>
</body>
</html>
"""


def _render(slug: str, title: str, body: str = "") -> HTMLResponse:
    return HTMLResponse(_PAGE.format(slug=slug, title=escape(title), body=body))


@router.get("/", response_class=HTMLResponse)
async def home():
    return _render("home", "MyUMKM", "<p>Jaringan bisnis UMKM.</p>")


@router.get("/auth/login", response_class=HTMLResponse)
async def login_page(callbackUrl: str = "/dashboard"):
    # Script on the page posts these fields as JSON to the login endpoint
    form = (
        '<div id="login" data-endpoint="/api/auth/login">'
        f'<input type="hidden" name="callbackUrl" value="{escape(callbackUrl)}">'
        '<input type="email" name="email"><input type="password" name="password">'
        '<button type="button">Masuk</button></div>'
    )
    return _render("login", "Masuk", form)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(current_user: AuthUser = Depends(get_current_user)):
    name = escape(current_user.name or current_user.email)
    return _render("dashboard", "Dashboard", f"<p>Halo, {name}</p>")


@router.get("/chat", response_class=HTMLResponse)
async def chat(current_user: AuthUser = Depends(get_current_user)):
    return _render(
        "chat",
        "Pesan",
        f'<div id="chat" data-user-id="{escape(current_user.id.value)}"></div>',
    )
