import logging
import secrets
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from dotenv import load_dotenv

from app.auth_utils import add_session_middleware
from app.routes import admin, public
from core import config
from core.database import JobStore, KeyValueStorage, init_db, open_storage

# Ensure .env values are loaded even if uvicorn is launched without `dotenv run`.
load_dotenv(override=True)
config.configure_logging()

log = logging.getLogger("api")


def create_app(
    storage: Optional[KeyValueStorage] = None,
    admin_password: Optional[str] = None,
    session_secret: Optional[str] = None,
) -> FastAPI:
    backend = None if storage is not None else config.storage_backend()
    session_secret = session_secret or config.session_secret()
    if not session_secret:
        log.warning("SESSION_SECRET is not set; admin logins will not survive a restart")
        session_secret = secrets.token_urlsafe(32)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if backend == "postgres":
            init_db()
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.job_store = JobStore(storage if storage is not None else open_storage(backend))
    app.state.admin_password = admin_password or config.admin_password()

    app.include_router(public.router)
    app.include_router(admin.router)
    add_session_middleware(app, session_secret)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        return await add_security_headers(request, call_next)

    return app


async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault(
        "Content-Security-Policy",
        "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline'; script-src 'self' 'unsafe-inline'; "
        "font-src 'self' data:; connect-src 'self';",
    )
    return response


app = create_app()
