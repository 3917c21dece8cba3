# /examcell/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Application-specific Imports ---
from .core.config import CORS_ORIGINS
from .core.deps import get_current_user
from .core.logging_config import configure_logging
from .db.database import init_db
from .routers import (
    auth_router,
    classes_router,
    students_router,
    subjects_router,
    marks_router,
    report_router,
)

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    configure_logging()
    init_db()
    logger.info("Exam result backend started")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Exam Result Backend API",
    description="Classes, subjects, students, per-assessment marks and printable class result sheets.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error Responses ---
# Every error body has the same shape: {"error": "<message>"}.

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal server error"})


# --- API Router Inclusion ---
# Login is public; every other /api route requires a bearer token.
authenticated = [Depends(get_current_user)]

app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"], dependencies=authenticated)
app.include_router(students_router.router, prefix="/api/students", tags=["Students"], dependencies=authenticated)
app.include_router(subjects_router.router, prefix="/api/subjects", tags=["Subjects"], dependencies=authenticated)
app.include_router(marks_router.router, prefix="/api/marks", tags=["Marks"], dependencies=authenticated)
app.include_router(report_router.router, prefix="/api/report", tags=["Report"], dependencies=authenticated)


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Exam result backend is running!", "version": app.version}
