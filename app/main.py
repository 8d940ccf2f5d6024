# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi import FastAPI, Request, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import AppError
from app.database import create_db_and_tables
from app.schemas.common import ApiResponse

# Import models so SQLModel metadata is populated before create_all()
from app.models import user as _user_models  # noqa: F401
from app.models import subscription as _subscription_models  # noqa: F401
from app.models import vocabulary as _vocabulary_models  # noqa: F401
from app.models import practice as _practice_models  # noqa: F401


# Routers
from app.routers.auth import router as auth_router
from app.routers.ai import router as ai_router
from app.routers.words import router as words_router
from app.routers.directories import router as directories_router
from app.routers.progress import router as progress_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
      - Warn when running with the default signing secret.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("🔄 Startup: Connecting to database...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except SQLAlchemyError as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise

    if settings.JWT_SECRET == "change-me":
        logger.warning("JWT_SECRET is not set; using the insecure default.")
    if not settings.OPENROUTER_API_KEY:
        logger.warning("OPENROUTER_API_KEY is not set; AI endpoints will degrade.")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Vocabulary Backend",
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelope ---


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse[None](success=False, message=message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE, "Storage temporarily unavailable"
    )


# Optional prefix, e.g. /api
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(ai_router, prefix=settings.API_PREFIX)
app.include_router(words_router, prefix=settings.API_PREFIX)
app.include_router(directories_router, prefix=settings.API_PREFIX)
app.include_router(progress_router, prefix=settings.API_PREFIX)


@app.get("/", response_model=ApiResponse[dict])
def root():
    """Liveness endpoint."""
    return ApiResponse[dict](
        message="Hello from vocabulary backend!",
        data={"service": "vocabulary-backend"},
    )


@app.get("/health", response_model=ApiResponse[dict])
def health():
    return ApiResponse[dict](message="OK", data={"status": "ok"})
