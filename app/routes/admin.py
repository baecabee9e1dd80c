from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.admin_view import AdminView, JobForm
from app.auth_utils import get_admin_session
from app.layout import SITE_NAME, render_page
from app.security import (
    CSRF_COOKIE_NAME,
    allow_login_attempt,
    attach_csrf_cookie,
    issue_csrf_token,
    validate_csrf,
)
from core.db.jobs import JobStore

router = APIRouter()


def _job_store(request: Request) -> JobStore:
    return request.app.state.job_store


def _respond(request: Request, view: AdminView) -> HTMLResponse:
    """Render the current admin screen with a fresh CSRF cookie."""
    csrf_token = issue_csrf_token(request.cookies.get(CSRF_COOKIE_NAME))
    resp = render_page(
        f"Admin Panel – {SITE_NAME}",
        view.render(csrf_token),
        admin=view.logged_in,
        notice=view.notice,
    )
    attach_csrf_cookie(resp, csrf_token)
    return resp


@router.get("/admin", response_class=HTMLResponse)
def admin_page(request: Request, edit: str = ""):
    session = get_admin_session(request)
    view = AdminView(_job_store(request), session)
    if edit:
        view.begin_edit(edit)
    return _respond(request, view)


@router.post("/admin/login", response_class=HTMLResponse)
def admin_login(
    request: Request,
    password: str = Form(""),
    csrf_token: str = Form(""),
):
    ip = request.client.host if request and request.client else "unknown"
    allowed, _ = allow_login_attempt(ip)
    if not allowed:
        return HTMLResponse("Too many login attempts. Please try again later.", status_code=429)

    if not validate_csrf(request, csrf_token):
        return HTMLResponse("Invalid or missing CSRF token.", status_code=403)

    session = get_admin_session(request)
    view = AdminView(_job_store(request), session)
    view.login(password)
    return _respond(request, view)


@router.post("/admin/logout", response_class=HTMLResponse)
def admin_logout(request: Request, csrf_token: str = Form("")):
    if not validate_csrf(request, csrf_token):
        return HTMLResponse("Invalid or missing CSRF token.", status_code=403)

    session = get_admin_session(request)
    view = AdminView(_job_store(request), session)
    view.logout()
    return _respond(request, view)


@router.post("/admin/jobs", response_class=HTMLResponse)
def save_job(
    request: Request,
    job_id: str = Form(""),
    title: str = Form(""),
    company: str = Form(""),
    location: str = Form(""),
    description: str = Form(""),
    posted_date: str = Form(""),
    csrf_token: str = Form(""),
):
    if not validate_csrf(request, csrf_token):
        return HTMLResponse("Invalid or missing CSRF token.", status_code=403)

    session = get_admin_session(request)
    if not session.is_authenticated():
        return RedirectResponse(url="/admin", status_code=303)

    view = AdminView(_job_store(request), session)
    view.submit(
        JobForm(
            job_id=job_id,
            title=title,
            company=company,
            location=location,
            description=description,
            posted_date=posted_date,
        )
    )
    return _respond(request, view)


@router.post("/admin/jobs/{job_id}/delete", response_class=HTMLResponse)
def delete_job(job_id: str, request: Request, csrf_token: str = Form("")):
    if not validate_csrf(request, csrf_token):
        return HTMLResponse("Invalid or missing CSRF token.", status_code=403)

    session = get_admin_session(request)
    if not session.is_authenticated():
        return RedirectResponse(url="/admin", status_code=303)

    view = AdminView(_job_store(request), session)
    view.delete(job_id)
    return _respond(request, view)


@router.post("/admin/clear", response_class=HTMLResponse)
def clear_job_form(request: Request, csrf_token: str = Form("")):
    if not validate_csrf(request, csrf_token):
        return HTMLResponse("Invalid or missing CSRF token.", status_code=403)

    session = get_admin_session(request)
    if not session.is_authenticated():
        return RedirectResponse(url="/admin", status_code=303)

    view = AdminView(_job_store(request), session)
    view.clear_form()
    return _respond(request, view)
