"""
Ideabox — FastAPI application entry-point.

Run with:
    uvicorn ideabox.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

import ideabox.models  # noqa: F401  (registers tables on Base.metadata)
from ideabox.config import STATIC_DIR, TEMPLATES_DIR, settings
from ideabox.database import Base, engine
from ideabox.errors import NotAuthorizedError, NotFoundError

# ── Import routers ──
from ideabox.routers import auth, categories, ideas

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


# ── Lifespan: create tables on startup ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Post ideas under categories; only their creator may change them.",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Session middleware (required for OAuth state) ──
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY, https_only=not settings.DEBUG)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))

# ── Static files & templates ──
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# ── Register routers ──
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(ideas.router)


# ── Domain errors → error pages ──
def _request_user(request: Request):
    """The user resolved by get_current_user earlier in this request, if any."""
    return getattr(request.state, "current_user", None)


@app.exception_handler(NotAuthorizedError)
async def not_authorized_handler(request: Request, exc: NotAuthorizedError):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"current_user": _request_user(request), "title": "Not allowed", "message": exc.reason},
        status_code=status.HTTP_403_FORBIDDEN,
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"current_user": _request_user(request), "title": "Not found", "message": str(exc)},
        status_code=status.HTTP_404_NOT_FOUND,
    )


if not settings.is_production:
    @app.get("/dev-login/{user_id}")
    def dev_login(user_id: int):
        """Sign in as any user without OAuth (development only)."""
        resp = RedirectResponse(url="/categories", status_code=status.HTTP_303_SEE_OTHER)
        return auth.set_auth_cookie(resp, user_id)


# ── Landing page ──
@app.get("/")
async def homepage():
    return RedirectResponse(url="/categories", status_code=status.HTTP_303_SEE_OTHER)
