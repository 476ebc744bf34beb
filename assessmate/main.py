import sys
import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from assessmate.core.config import get_settings
from assessmate.core.exceptions import AssessMateError
from assessmate.infrastructure.db.session import Base, SessionLocal, engine
from assessmate.infrastructure.db import models  # noqa: F401  registers tables on Base.metadata
from assessmate.infrastructure.repositories.student_repository import StudentRepository
from assessmate.presentation.api.routers.auth_router import router as auth_router
from assessmate.presentation.api.routers.student_router import router as student_router
from assessmate.presentation.api.routers.category_router import router as category_router
from assessmate.presentation.api.routers.subject_router import router as subject_router
from assessmate.presentation.api.routers.topic_router import router as topic_router
from assessmate.presentation.api.routers.question_router import router as question_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # Create tables
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = StudentRepository(db).ensure_default_admin(
            settings.DEFAULT_ADMIN_EMAIL,
            settings.DEFAULT_ADMIN_PASSWORD,
            settings.DEFAULT_ADMIN_MOBILE,
        )
        if created:
            logger.info(f"Admin login: {settings.DEFAULT_ADMIN_EMAIL}")
    finally:
        db.close()
    yield


def _error_body(message: str) -> dict:
    return {"success": False, "message": message}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AssessMateError)
    async def assessmate_error_handler(request: Request, exc: AssessMateError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else first.get("msg", message)
        logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=400, content=_error_body(message))

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    api = APIRouter(prefix="/api")

    @api.get("/health", tags=["Health"])
    def health():
        return {"status": "OK", "message": "AssessMate API is running"}

    # Include routers
    api.include_router(auth_router)
    api.include_router(student_router)
    api.include_router(category_router)
    api.include_router(subject_router)
    api.include_router(topic_router)
    api.include_router(question_router)
    app.include_router(api)

    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")
    return app
