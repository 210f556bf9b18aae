import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from findmysong.config import settings
from findmysong.api import collection, search, users
from findmysong.api.deps import get_database
from findmysong.services.catalog_client import CatalogClient
from findmysong.services.database import Database
from findmysong.services.token_cache import TokenCache

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    tokens = TokenCache(
        http,
        settings.spotify_client_id,
        settings.spotify_client_secret,
        settings.spotify_token_url,
        safety_margin=settings.token_safety_margin_seconds,
        timeout=settings.http_timeout_seconds,
    )
    app.state.http = http
    app.state.catalog = CatalogClient(
        http,
        tokens,
        settings.spotify_api_url,
        timeout=settings.http_timeout_seconds,
        match_limit=settings.catalog_match_limit,
    )
    app.state.pipeline = None
    app.state.db = None

    if settings.database_url:
        app.state.db = await Database.connect(settings.database_url)
        await app.state.db.init_schema()
    else:
        logger.warning("DATABASE_URL not configured, account and collection routes are disabled")

    try:
        yield
    finally:
        if app.state.db is not None:
            await app.state.db.close()
        await http.aclose()


app = FastAPI(
    title="FindMySong API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        logger.warning("Route not found: %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=404,
            content={
                "message": "Route not found",
                "method": request.method,
                "path": request.url.path,
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


# API routes
app.include_router(search.router, prefix="/api", tags=["search"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(collection.router, prefix="/api", tags=["collections"])


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "FindMySong backend running"


@app.get("/health")
async def health_check(request: Request) -> JSONResponse:
    try:
        db = get_database(request)
        await db.fetchrow("SELECT 1")
    except Exception as e:
        detail = getattr(e, "detail", None) or str(e)
        logger.error("Health check failed: %s", detail)
        return JSONResponse(status_code=500, content={"ok": False, "error": detail})
    return JSONResponse(content={"ok": True})
