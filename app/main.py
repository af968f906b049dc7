from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

import app.db.base  # noqa: F401
from app.api.error_handlers import register_error_handlers
from app.api.main import api_router
from app.core.logging import configure_logging, get_logger
from app.core.settings import Env, StorageBackend, settings
from app.db import engine
from app.db.base_class import Base
from app.middlewares.telemetry import RequestContextMiddleware

configure_logging(settings)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.STORAGE_BACKEND == StorageBackend.SQLALCHEMY and settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    get_logger().info(
        "app.start", env=settings.APP_ENV.value, storage=settings.STORAGE_BACKEND.value
    )
    yield


app = FastAPI(debug=settings.DEBUG, lifespan=lifespan)

# --- Middlewares de contexto/log
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- HTTPS only em prod
if settings.APP_ENV == Env.PROD:
    app.add_middleware(HTTPSRedirectMiddleware)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)

    if settings.APP_ENV == Env.PROD:
        response.headers["Strict-Transport-Security"] = (
            "max-age=15552000; includeSubDomains; preload"
        )

    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "no-referrer"
    return response


register_error_handlers(app)

app.include_router(api_router)


# --- Endpoints
@app.get("/healthz", tags=["ops"])
def healthz():
    get_logger().info("health.check")
    return {"status": "ok", "env": settings.APP_ENV, "version": settings.APP_VERSION}


@app.get("/version", tags=["ops"])
def version():
    return {
        "version": settings.APP_VERSION,
        "git_sha": settings.GIT_SHA,
        "build_time_utc": settings.BUILD_TIME_UTC,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
    }
