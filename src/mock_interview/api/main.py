# FastAPI Application
"""
Main FastAPI application for the Mock Interview API.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mock_interview.config import get_settings

from .account_routes import router as account_router
from .models import HealthResponse
from .routes import router as interview_router

API_VERSION = "1.0.0"

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("🚀 Mock Interview API starting up...")
    yield
    logger.info("👋 Mock Interview API shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Interview API",
    description="""
    Accounts, contacts and AI-driven mock interviews.

    ## Workflow

    1. **POST /api/start-interview** - Upload resume and job description, get the first question
    2. **POST /api/get-next-question** - Submit a response, get the next question
    3. Repeat step 2 until the question is null (or stop early)
    4. **POST /api/end-interview** - Get AI feedback on the responses
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(account_router)
app.include_router(interview_router)


# ============================================================================
# Root Endpoints
# ============================================================================

@app.get("/", include_in_schema=False)
async def root():
    """Greeting endpoint."""
    return {"message": "Hello from the backend!"}


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health check",
    description="Check if the API is running and healthy."
)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.now()
    )


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Handler for malformed or incomplete request bodies."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"Invalid request: {location}: {errors[0].get('msg')}"

    logger.warning(f"{request.method} {request.url.path} - {message}")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred. Please try again later."}
    )


# ============================================================================
# Entry point for running directly
# ============================================================================

def run_server(host: str = "0.0.0.0", port: Optional[int] = None, reload: bool = False):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(
        "mock_interview.api.main:app",
        host=host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run_server(reload=True)
