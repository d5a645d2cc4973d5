from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import get_settings
from app.database import init_db
from app.rate_limit import limiter
from app.admin.router import router as admin_router
from app.auth.router import router as auth_router
from app.blogs.admin_router import router as blogs_admin_router
from app.blogs.router import router as blogs_router
from app.comments.router import router as comments_router
from app.contact.router import router as contact_router
from app.profile.router import router as profile_router
from app.social_graph.router import router as social_router
from shared.middleware.error_handler import error_envelope_middleware, install_error_handlers
from shared.middleware.request_id import request_id_middleware


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## Blog Hub API

Backend for a multi-author blogging platform:

* **Authentication**: email/password registration and login, Google sign-in,
  7-day JWT bearer tokens.
* **Profiles**: public profiles with follower and post counts; update name,
  handle, bio and picture; change password or reset it through an emailed link.
* **Blogs**: create, edit and delete posts (Draft or Published), browse by
  category or author, popular rankings, saved list and a following feed.
* **Engagement**: likes, saves, flat comments and follows.
* **Moderation**: any reader can report a post; admins review reports,
  delete posts, and delete accounts with everything they own.
* **AI drafts**: generate an HTML draft from a title and subtitle.

### Authentication
Protected endpoints require:
```
Authorization: Bearer <token>
```
Admin endpoints additionally require the `admin` role.

### Error shape
All errors return a consistent JSON envelope:
```json
{ "success": false, "message": "Human-readable message", "requestId": "..." }
```
Validation errors return `400` with the first failing field in `message`.

### Rate limits
`429 Too Many Requests` is returned when a rate limit is exceeded.
"""

_TAGS_METADATA = [
    {
        "name": "auth",
        "description": "Registration, login and Google sign-in. Each returns a bearer token.",
    },
    {
        "name": "profile",
        "description": (
            "Public profiles, own profile updates, profile pictures, password change "
            "and link-based password reset."
        ),
    },
    {
        "name": "social-graph",
        "description": (
            "Unidirectional follows. One edge backs both the follower's `following` "
            "list and the followed user's `followers` list."
        ),
    },
    {
        "name": "blogs",
        "description": (
            "Blog posts and their listings, likes, saves, reports and AI drafts. "
            "Drafts are only visible to their author and admins."
        ),
    },
    {
        "name": "blogs-admin",
        "description": "**Admin only.** All posts, top liked, delete any post, dismiss reports.",
    },
    {
        "name": "comments",
        "description": "Flat comments on posts (1 to 500 characters).",
    },
    {
        "name": "admin",
        "description": "**Admin only.** Platform totals, user list, cascading user deletion, report queue.",
    },
    {
        "name": "contact",
        "description": "Public contact form forwarded to the site inbox by email.",
    },
]


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings.blog_database_url)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Blog Hub API",
        version="1.0.0",
        description=_DESCRIPTION,
        openapi_tags=_TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Attach rate limiter state before middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    install_error_handlers(app)

    # Middleware is applied in reverse-registration order (last added = outermost).
    # CORS must be outermost so ALL responses (including 429s) carry CORS headers.
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(error_envelope_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.include_router(auth_router, prefix="/api")
    app.include_router(profile_router, prefix="/api")
    app.include_router(social_router, prefix="/api")
    app.include_router(blogs_admin_router, prefix="/api")
    app.include_router(blogs_router, prefix="/api")
    app.include_router(comments_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    app.include_router(contact_router, prefix="/api")

    @app.get("/health", response_model=HealthResponse, tags=["health"], include_in_schema=True)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="blog")

    return app


app = create_app()
