from contextlib import asynccontextmanager
import traceback

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import structlog

from app.api.errors import http_exception_handler, validation_exception_handler, generic_exception_handler
from app.api.routes.admin import router as admin_router
from app.api.routes.auth import router as auth_router
from app.api.routes.health import router as health_router
from app.api.routes.opening_hours import router as opening_hours_router
from app.api.routes.ops import router as ops_router, VERSION
from app.core.config import settings
from app.core.logging import configure_logging
from app.core.security import get_password_hash
from app.repositories.db import engine, session_scope
from app.repositories.models import Base, User, UserRole

configure_logging()
log = structlog.get_logger()


def seed_admin() -> None:
    email = (settings.AUTH_SEED_ADMIN_EMAIL or "").strip().lower()
    password = (settings.AUTH_SEED_ADMIN_PASSWORD or "").strip()
    if not (email and password):
        return
    with session_scope() as db:
        if db.query(User).filter(User.email == email).first():
            return
        db.add(
            User(
                email=email,
                first_name="Admin",
                hashed_password=get_password_hash(password),
                is_active=True,
                role=UserRole.super_admin,
            )
        )
        log.info("admin_seeded", email=email)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.APP_ENV != "test":  # tests build their own schema
        Base.metadata.create_all(bind=engine)
        try:
            seed_admin()
        except SQLAlchemyError as e:
            log.error("admin_seed_error", error=str(e))
    log.info("startup", app_env=settings.APP_ENV, business_timezone=settings.BUSINESS_TIMEZONE)
    yield


tags_metadata = [
    {"name": "health", "description": "Liveness/readiness checks."},
    {"name": "opening-hours", "description": "Weekly opening hours and the current open/closed status."},
    {"name": "auth", "description": "JWT login and current user."},
    {"name": "admin", "description": "Admin console user management."},
    {"name": "ops", "description": "Non-sensitive runtime configuration."},
]

app = FastAPI(
    title=f"{settings.BUSINESS_NAME} Admin API",
    version=VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _http_logger(request, call_next):
    log.info(
        "http_request_start",
        method=request.method,
        path=request.url.path,
        content_type=request.headers.get("content-type"),
    )
    try:
        response = await call_next(request)
    except Exception as e:
        log.error(
            "http_request_exception",
            method=request.method,
            path=request.url.path,
            error=str(e),
            traceback=traceback.format_exc(),
        )
        return JSONResponse(status_code=500, content={"error": {"code": "internal_error", "message": "unexpected error"}})
    log.info(
        "http_request_end",
        method=request.method,
        path=request.url.path,
        status=getattr(response, "status_code", None),
    )
    return response


app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(opening_hours_router, prefix="/opening-hours", tags=["opening-hours"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(admin_router, prefix="/admin", tags=["admin"])
app.include_router(ops_router, prefix="/ops", tags=["ops"])

# Uniform error payloads
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/")
async def root():
    return {"service": "pub-admin-api", "status": "ok"}
