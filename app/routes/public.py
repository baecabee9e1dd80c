import html
from typing import List

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse

from app.layout import SITE_NAME, render_page
from core.db.jobs import JobRecord, JobStore

router = APIRouter()


def _job_store(request: Request) -> JobStore:
    return request.app.state.job_store


def job_matches(job: JobRecord, keywords: str = "", location: str = "") -> bool:
    """
    Every keyword must appear in the title, company or description;
    location is a case-insensitive substring match.
    """
    haystack = f"{job.title} {job.company} {job.description}".lower()
    for word in (keywords or "").lower().split():
        if word not in haystack:
            return False
    wanted = (location or "").strip().lower()
    if wanted and wanted not in job.location.lower():
        return False
    return True


def search_jobs(store: JobStore, keywords: str = "", location: str = "") -> List[JobRecord]:
    return [j for j in store.list() if job_matches(j, keywords, location)]


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    count = _job_store(request).count()
    body = f"""
    <div class="card">
      <h2>Welcome to {SITE_NAME}</h2>
      <p>Recruitment and staffing for growing businesses.</p>
      <p class="muted">{count} open position(s) right now.</p>
      <a class="button" href="/careers">Browse open positions</a>
    </div>
    """
    return render_page(SITE_NAME, body)


@router.get("/careers", response_class=HTMLResponse)
def careers(request: Request, keywords: str = "", location: str = ""):
    jobs = search_jobs(_job_store(request), keywords, location)

    items_html = ""
    for job in jobs:
        description = html.escape(job.description).replace("\n", "<br>")
        items_html += f"""
        <div class="card job-card">
          <h3>{html.escape(job.title)}</h3>
          <p><strong>{html.escape(job.company)}</strong> - {html.escape(job.location)}</p>
          <p class="muted">Posted {job.posted_date.isoformat()}</p>
          <p>{description}</p>
        </div>
        """
    if not jobs:
        if keywords or location:
            items_html = '<p class="muted">No job listings match your search.</p>'
        else:
            items_html = '<p class="muted">No open positions at the moment. Please check back soon.</p>'

    body = f"""
    <div class="card">
      <form method="get" action="/careers" id="jobSearchForm">
        <label for="keywords">Keywords</label>
        <input type="text" id="keywords" name="keywords" value="{html.escape(keywords, quote=True)}" />
        <label for="location">Location</label>
        <input type="text" id="location" name="location" value="{html.escape(location, quote=True)}" />
        <button type="submit">Search</button>
      </form>
    </div>
    {items_html}
    """
    return render_page(f"Careers – {SITE_NAME}", body)


@router.get("/api/jobs")
def list_jobs_json(request: Request, keywords: str = "", location: str = ""):
    jobs = search_jobs(_job_store(request), keywords, location)
    return JSONResponse({"jobs": [j.to_json_dict() for j in jobs]})


@router.get("/health")
def health(request: Request):
    return {"status": "ok", "jobs": _job_store(request).count()}
