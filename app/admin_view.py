"""
Admin job-management screens.

AdminView turns UI events (login, logout, edit, delete, submit) into
JobStore / AdminSession calls and renders the result. Errors from the
store are shown as notices and never escape to the page.
"""
from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional
from urllib.parse import quote

from core.db.admin import AdminSession
from core.db.jobs import JobRecord, JobStore
from core.errors import NotFoundError, PersistenceError, ValidationError

log = logging.getLogger("admin_view")


def _escape(value: Optional[str]) -> str:
    return html.escape(value or "", quote=True)


class Screen(str, Enum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


class FormMode(str, Enum):
    CREATING = "creating"
    EDITING = "editing"


@dataclass
class Notice:
    message: str
    kind: str = "success"


@dataclass
class JobForm:
    job_id: str = ""
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    posted_date: str = ""

    @property
    def mode(self) -> FormMode:
        return FormMode.EDITING if self.job_id else FormMode.CREATING

    @classmethod
    def from_record(cls, job: JobRecord) -> "JobForm":
        return cls(
            job_id=job.id,
            title=job.title,
            company=job.company,
            location=job.location,
            description=job.description,
            posted_date=job.posted_date.isoformat(),
        )

    def trimmed(self) -> "JobForm":
        return JobForm(
            job_id=(self.job_id or "").strip(),
            title=(self.title or "").strip(),
            company=(self.company or "").strip(),
            location=(self.location or "").strip(),
            description=(self.description or "").strip(),
            posted_date=(self.posted_date or "").strip(),
        )


def build_record(form: JobForm, job_id: str) -> JobRecord:
    """Validate a trimmed form and turn it into a record with `job_id`."""
    if not form.title:
        raise ValidationError("Job title is required.")
    if form.posted_date:
        try:
            posted = date.fromisoformat(form.posted_date)
        except ValueError as exc:
            raise ValidationError("Posted date must be in YYYY-MM-DD format.") from exc
    else:
        posted = date.today()
    return JobRecord(
        id=job_id,
        title=form.title,
        company=form.company,
        location=form.location,
        description=form.description,
        posted_date=posted,
    )


@dataclass
class AdminView:
    store: JobStore
    session: AdminSession
    form: JobForm = field(default_factory=JobForm)
    notice: Optional[Notice] = None
    login_error: Optional[str] = None
    screen: Screen = field(init=False)

    def __post_init__(self):
        self.screen = Screen.LOGGED_IN if self.session.is_authenticated() else Screen.LOGGED_OUT

    @property
    def logged_in(self) -> bool:
        return self.screen is Screen.LOGGED_IN

    def _error(self, message: str) -> None:
        self.notice = Notice(message, "error")

    def _success(self, message: str) -> None:
        self.notice = Notice(message, "success")

    # -------- session transitions --------

    def login(self, password: str) -> bool:
        try:
            ok = self.session.authenticate(password)
        except PersistenceError as exc:
            log.error("Could not store admin session flag: %s", exc)
            self._error("Login failed.")
            return False
        if not ok:
            self.login_error = "Invalid password. Please try again."
            self._error("Login failed.")
            return False
        self.screen = Screen.LOGGED_IN
        self.login_error = None
        self._success("Logged in successfully!")
        return True

    def logout(self) -> None:
        self.session.logout()
        self.screen = Screen.LOGGED_OUT
        self.form = JobForm()
        self._success("Logged out successfully!")

    # -------- edit form --------

    def clear_form(self) -> None:
        self.form = JobForm()
        self._success("Form cleared.")

    def begin_edit(self, job_id: str) -> None:
        if not self.logged_in:
            return
        try:
            job = self.store.get(job_id)
        except NotFoundError:
            self.form = JobForm()
            self._error("Job not found for editing.")
            return
        except PersistenceError as exc:
            log.error("Could not load job %s for editing: %s", job_id, exc)
            self.form = JobForm()
            self._error("Could not load job listings. Please try again.")
            return
        self.form = JobForm.from_record(job)
        self._success(f'Editing job: "{job.title}"')

    def submit(self, form: JobForm) -> bool:
        """Save the submitted form. Returns True when the job was stored."""
        if not self.logged_in:
            self._error("Please log in to manage job listings.")
            return False
        form = form.trimmed()
        editing = form.mode is FormMode.EDITING
        self.form = form
        try:
            if editing:
                self.store.get(form.job_id)
                record = build_record(form, form.job_id)
            else:
                record = build_record(form, self.store.generate_id())
            self.store.upsert(record)
        except ValidationError as exc:
            self._error(str(exc))
            return False
        except NotFoundError:
            log.warning("Stale edit: job %s no longer exists", form.job_id)
            self._error("Error: Job not found for update.")
            return False
        except PersistenceError as exc:
            log.error("Saving job failed: %s", exc)
            self._error("Could not save the job listing. Please try again.")
            return False
        self.form = JobForm()
        self._success("Job listing updated successfully!" if editing else "Job listing added successfully!")
        return True

    def delete(self, job_id: str) -> bool:
        if not self.logged_in:
            self._error("Please log in to manage job listings.")
            return False
        try:
            removed = self.store.delete(job_id)
        except PersistenceError as exc:
            log.error("Deleting job %s failed: %s", job_id, exc)
            self._error("Could not delete the job listing. Please try again.")
            return False
        if not removed:
            self._error("Error: Job not found for deletion.")
            return False
        if self.form.job_id == job_id:
            self.form = JobForm()
        self._success("Job listing deleted successfully!")
        return True

    # -------- rendering --------

    def render(self, csrf_token: str) -> str:
        if not self.logged_in:
            return self._render_login(csrf_token)
        return self._render_form(csrf_token) + self._render_listings(csrf_token)

    def _render_login(self, csrf_token: str) -> str:
        error_html = ""
        if self.login_error:
            error_html = f'<p id="loginMessage" style="color:#DC3545;">{html.escape(self.login_error)}</p>'
        return f"""
        <div class="card" id="admin-login-section">
          <h2>Admin login</h2>
          {error_html}
          <form method="post" action="/admin/login" id="adminLoginForm">
            <label for="adminPassword">Password</label>
            <input type="password" id="adminPassword" name="password" required />
            <input type="hidden" name="csrf_token" value="{_escape(csrf_token)}" />
            <button type="submit">Login</button>
          </form>
        </div>
        """

    def _render_form(self, csrf_token: str) -> str:
        f = self.form
        editing = f.mode is FormMode.EDITING
        submit_label = "Update Job" if editing else "Post Job"
        heading = "Edit job listing" if editing else "Add a job listing"
        clear_button = (
            '<button type="submit" class="secondary" id="jobFormClearBtn" formaction="/admin/clear" formnovalidate>'
            "Clear</button>"
            if editing
            else ""
        )
        return f"""
        <div class="card" id="job-management-section">
          <div style="display:flex;justify-content:space-between;align-items:center;">
            <h2>{heading}</h2>
            <form method="post" action="/admin/logout">
              <input type="hidden" name="csrf_token" value="{_escape(csrf_token)}" />
              <button type="submit" class="secondary" id="adminLogoutBtn">Logout</button>
            </form>
          </div>
          <form method="post" action="/admin/jobs" id="jobPostForm">
            <input type="hidden" id="jobId" name="job_id" value="{_escape(f.job_id)}" />
            <label for="jobTitle">Job title</label>
            <input type="text" id="jobTitle" name="title" required value="{_escape(f.title)}" />
            <label for="jobCompany">Company</label>
            <input type="text" id="jobCompany" name="company" value="{_escape(f.company)}" />
            <label for="jobLocation">Location</label>
            <input type="text" id="jobLocation" name="location" value="{_escape(f.location)}" />
            <label for="jobDescription">Description</label>
            <textarea id="jobDescription" name="description">{_escape(f.description)}</textarea>
            <label for="jobPostedDate">Posted date</label>
            <input type="date" id="jobPostedDate" name="posted_date" value="{_escape(f.posted_date)}" />
            <input type="hidden" name="csrf_token" value="{_escape(csrf_token)}" />
            <button type="submit" id="jobFormSubmitBtn">{submit_label}</button>
            {clear_button}
          </form>
        </div>
        """

    def _render_listings(self, csrf_token: str) -> str:
        jobs = self.store.list()
        if not jobs:
            items_html = '<p class="muted">No job listings found. Add a new job above!</p>'
        else:
            rows = []
            for job in jobs:
                job_id = _escape(job.id)
                job_path = _escape(quote(job.id, safe=""))
                rows.append(
                    f"""
                <li data-job-id="{job_id}">
                  <div>
                    <strong>{html.escape(job.title)}</strong><br>
                    <span>{html.escape(job.company)} - {html.escape(job.location)}</span>
                  </div>
                  <div>
                    <a class="button secondary edit-btn" href="/admin?edit={job_path}" title="Edit Job">Edit</a>
                    <form method="post" action="/admin/jobs/{job_path}/delete">
                      <input type="hidden" name="csrf_token" value="{_escape(csrf_token)}" />
                      <button type="submit" class="danger delete-btn" title="Delete Job">Delete</button>
                    </form>
                  </div>
                </li>"""
                )
            items_html = f'<ul class="admin-list">{"".join(rows)}</ul>'
        return f"""
        <div class="card" id="adminJobListings">
          <h2>Current job listings</h2>
          {items_html}
        </div>
        """


__all__ = ["AdminView", "FormMode", "JobForm", "Notice", "Screen", "build_record"]
